"""Core data models shared by the lead scoring pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LeadScore(str, Enum):
    """Ordinal lead grade, best to worst."""

    A = "A"
    B = "B"
    C = "C"


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"longitude out of range: {self.lng}")

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    coordinate: Coordinate
    formatted_address: str


@dataclass(frozen=True, slots=True)
class TravelTime:
    """One origin/destination element returned by the travel-time provider."""

    ok: bool
    duration_seconds: Optional[int] = None
    distance_meters: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """An instructor or applicant read from the record store."""

    id: str
    name: Optional[str]
    pool: str
    email: Optional[str] = None
    address: Optional[str] = None
    coordinate: Optional[Coordinate] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "pool": self.pool,
            "lat": self.coordinate.lat if self.coordinate else None,
            "lng": self.coordinate.lng if self.coordinate else None,
        }


@dataclass(frozen=True, slots=True)
class RankedCandidate:
    candidate: Candidate
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {**self.candidate.to_dict(), "distance_km": self.distance_km}


@dataclass(frozen=True, slots=True)
class EnrichedCandidate:
    ranked: RankedCandidate
    travel_time_minutes: Optional[int] = None
    travel_distance_km: Optional[float] = None

    @property
    def candidate(self) -> Candidate:
        return self.ranked.candidate

    @property
    def distance_km(self) -> float:
        return self.ranked.distance_km

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.ranked.to_dict(),
            "travel_time_minutes": self.travel_time_minutes,
            "travel_distance_km": self.travel_distance_km,
        }


@dataclass(frozen=True, slots=True)
class PoolResult:
    label: str
    nearest: Optional[EnrichedCandidate]
    top: List[EnrichedCandidate] = field(default_factory=list)
    within_radius_count: int = 0
    total_count: int = 0
    top3_avg_distance_km: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nearest": self.nearest.to_dict() if self.nearest else None,
            "top": [entry.to_dict() for entry in self.top],
            "within_radius_count": self.within_radius_count,
            "total_count": self.total_count,
            "top3_avg_distance_km": self.top3_avg_distance_km,
        }


@dataclass(frozen=True, slots=True)
class LeadScoreResult:
    """Everything the boundary returns for one scored lead."""

    lead: GeocodeResult
    lead_score: LeadScore
    nearest_distance_km: Optional[float]
    pools: Dict[str, PoolResult]
    duplicates_removed: int = 0
    lead_record_id: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lead": {
                "lat": self.lead.coordinate.lat,
                "lng": self.lead.coordinate.lng,
                "formatted_address": self.lead.formatted_address,
                "record_id": self.lead_record_id,
            },
            "lead_score": self.lead_score.value,
            "nearest_distance_km": self.nearest_distance_km,
            "duplicates_removed": self.duplicates_removed,
            "warnings": list(self.warnings),
            "pools": {label: result.to_dict() for label, result in self.pools.items()},
        }
