"""PredictiveAlert dataclass and next-due forecasting from service patterns."""

from dataclasses import dataclass
from typing import List

from .config import AnalyticsConfig, DEFAULT_CONFIG
from .patterns import ServicePattern
from .ratings import Confidence


@dataclass
class PredictiveAlert:
    """Forecast of when a recurring service is next due."""

    service_type: str
    predicted_odometer_km: int
    distance_remaining_km: int
    confidence: Confidence
    last_performed_date: str
    average_interval_km: int

    @property
    def is_overdue(self) -> bool:
        return self.distance_remaining_km < 0


def confidence_for(
    occurrence_count: int, config: AnalyticsConfig = DEFAULT_CONFIG
) -> Confidence:
    """More observed services means a more trustworthy average interval."""
    if occurrence_count >= config.high_confidence_count:
        return Confidence.HIGH
    if occurrence_count >= config.medium_confidence_count:
        return Confidence.MEDIUM
    return Confidence.LOW


def predict(
    patterns: List[ServicePattern],
    current_odometer_km: int,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> List[PredictiveAlert]:
    """
    Forecast the next service for each recurring pattern.

    - Due at last_odometer_km + average_interval_km
    - Only alerts within config.alert_horizon_km (or already overdue) are kept
    - Most urgent first: ascending distance remaining, negative = overdue
    """
    alerts = []
    for pattern in patterns:
        if not pattern.is_recurring:
            continue

        predicted = pattern.last_odometer_km + pattern.average_interval_km
        remaining = predicted - current_odometer_km
        if remaining > config.alert_horizon_km:
            continue

        alerts.append(
            PredictiveAlert(
                service_type=pattern.service_type,
                predicted_odometer_km=predicted,
                distance_remaining_km=remaining,
                confidence=confidence_for(pattern.occurrence_count, config),
                last_performed_date=pattern.last_performed_date,
                average_interval_km=pattern.average_interval_km,
            )
        )

    return sorted(alerts, key=lambda a: a.distance_remaining_km)
