from lead_proximity.scoring.dedupe import merge, normalize_email


def test_normalize_email():
    assert normalize_email("  Anna@Example.COM ") == "anna@example.com"
    assert normalize_email("   ") is None
    assert normalize_email(None) is None


def test_merge_drops_secondary_duplicates_and_keeps_order(make_candidate):
    primary = [make_candidate("t1", 59.3, 18.0, email="x@y.com")]
    secondary = [
        make_candidate("a1", 59.3, 18.0, pool="applicants", email="x@y.com"),
        make_candidate("a2", 59.3, 18.0, pool="applicants", email="z@y.com"),
        make_candidate("a3", 59.3, 18.0, pool="applicants", email=None),
    ]

    result = merge(primary, secondary)

    assert [c.id for c in result.secondary] == ["a2", "a3"]
    assert [c.id for c in result.primary] == ["t1"]
    assert result.duplicates_removed == 1


def test_merge_matches_emails_case_insensitively(make_candidate):
    primary = [make_candidate("t1", email=" X@Y.com")]
    secondary = [make_candidate("a1", pool="applicants", email="x@y.COM ")]

    primary_out, secondary_out, removed = merge(primary, secondary)

    assert secondary_out == []
    assert removed == 1
    assert primary_out == primary


def test_primary_without_email_is_not_indexed(make_candidate):
    primary = [make_candidate("t1", email=None)]
    secondary = [make_candidate("a1", pool="applicants", email=None)]

    result = merge(primary, secondary)

    assert [c.id for c in result.secondary] == ["a1"]
    assert result.duplicates_removed == 0
