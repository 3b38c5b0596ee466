"""Email-based identity deduplication across two candidate pools."""

import logging
from typing import List, NamedTuple, Optional, Sequence

from lead_proximity.core.models import Candidate

logger = logging.getLogger(__name__)


class MergeResult(NamedTuple):
    primary: List[Candidate]
    secondary: List[Candidate]
    duplicates_removed: int


def normalize_email(email: Optional[str]) -> Optional[str]:
    if email is None:
        return None
    value = str(email).strip().lower()
    return value or None


def merge(primary: Sequence[Candidate], secondary: Sequence[Candidate]) -> MergeResult:
    """Drop secondary candidates whose email already appears in the primary pool.

    Secondary candidates without an email are always kept since they cannot be
    shown to be duplicates. The secondary pool keeps its original order.
    """
    known = {email for email in (normalize_email(c.email) for c in primary) if email}

    kept: List[Candidate] = []
    for candidate in secondary:
        email = normalize_email(candidate.email)
        if email and email in known:
            logger.debug("Dropping %s from %s: duplicate of a primary candidate", candidate.id, candidate.pool)
            continue
        kept.append(candidate)

    removed = len(secondary) - len(kept)
    if removed:
        logger.info("Removed %d duplicate candidates by email", removed)
    return MergeResult(primary=list(primary), secondary=kept, duplicates_removed=removed)
