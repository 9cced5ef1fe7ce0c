"""
Animation Resolution Models

Data classes for resolution results.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentFetch:
    """Text fetched from the first CDN location that answered."""

    text: str
    location: str
    attempts: int  # Locations requested, including the successful one


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of one resolution request.
    """

    input_id: str  # Asset id sent to Asset Delivery
    animation_id_candidate: str | None  # First numeric match, if any
    all_numeric_matches: tuple[str, ...] = ()
    cdn_locations_tried: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "inputId": self.input_id,
            "animationIdCandidate": self.animation_id_candidate,
            "allNumericMatches": list(self.all_numeric_matches),
            "cdnLocationsTried": self.cdn_locations_tried,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ResolutionResult:
        """Create from dictionary."""
        return cls(
            input_id=str(data["inputId"]),
            animation_id_candidate=data.get("animationIdCandidate"),
            all_numeric_matches=tuple(data.get("allNumericMatches", [])),
            cdn_locations_tried=data.get("cdnLocationsTried", 0),
        )
