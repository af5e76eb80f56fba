"""Tunable policy values for the analytics engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .ratings import Rating

# Upper bounds on cost per km, checked in order. Anything at or above the
# last bound rates as Rating.HIGH.
DEFAULT_RATING_THRESHOLDS: Tuple[Tuple[float, Rating], ...] = (
    (0.10, Rating.EXCELLENT),
    (0.20, Rating.GOOD),
    (0.35, Rating.FAIR),
)


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Policy constants used by the predictor and the cost calculator.

    - alert_horizon_km: alerts further away than this are suppressed
    - high/medium_confidence_count: occurrence counts for each confidence tier
    - days_per_month: month approximation for the monthly average cost
    - rating_thresholds: ordered (upper bound, rating) pairs on cost per km
    """

    alert_horizon_km: int = 1000
    high_confidence_count: int = 5
    medium_confidence_count: int = 3
    days_per_month: float = 30
    rating_thresholds: Tuple[Tuple[float, Rating], ...] = field(
        default=DEFAULT_RATING_THRESHOLDS
    )

    @classmethod
    def from_dict(cls, dct: Optional[Dict[str, Any]]) -> "AnalyticsConfig":
        """Build a config from the camelCase `analytics` section of a logbook."""
        if not dct:
            return DEFAULT_CONFIG

        kwargs: Dict[str, Any] = {}
        if "alertHorizonKm" in dct:
            kwargs["alert_horizon_km"] = dct["alertHorizonKm"]
        if "highConfidenceCount" in dct:
            kwargs["high_confidence_count"] = dct["highConfidenceCount"]
        if "mediumConfidenceCount" in dct:
            kwargs["medium_confidence_count"] = dct["mediumConfidenceCount"]
        if "daysPerMonth" in dct:
            kwargs["days_per_month"] = dct["daysPerMonth"]
        if "ratingThresholds" in dct:
            kwargs["rating_thresholds"] = _parse_thresholds(dct["ratingThresholds"])

        config = cls(**kwargs)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError when the values cannot be used together."""
        if self.days_per_month <= 0:
            raise ValueError(f"daysPerMonth must be positive, got {self.days_per_month}")
        if self.medium_confidence_count > self.high_confidence_count:
            raise ValueError(
                "mediumConfidenceCount must not exceed highConfidenceCount "
                f"({self.medium_confidence_count} > {self.high_confidence_count})"
            )
        bounds = [bound for bound, _ in self.rating_thresholds]
        if bounds != sorted(bounds):
            raise ValueError(f"ratingThresholds must be ascending, got {bounds}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase format used in logbook files."""
        return {
            "alertHorizonKm": self.alert_horizon_km,
            "highConfidenceCount": self.high_confidence_count,
            "mediumConfidenceCount": self.medium_confidence_count,
            "daysPerMonth": self.days_per_month,
            "ratingThresholds": {
                rating.value: bound for bound, rating in self.rating_thresholds
            },
        }


def _parse_thresholds(dct: Dict[str, float]) -> Tuple[Tuple[float, Rating], ...]:
    """Turn {excellent: 0.1, good: 0.2, fair: 0.35} into ordered pairs."""
    pairs = []
    for rating in (Rating.EXCELLENT, Rating.GOOD, Rating.FAIR):
        if rating.value not in dct:
            raise ValueError(f"ratingThresholds is missing '{rating.value}'")
        pairs.append((float(dct[rating.value]), rating))
    return tuple(pairs)


DEFAULT_CONFIG = AnalyticsConfig()
