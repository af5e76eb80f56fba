"""Enums for alert confidence and cost-efficiency rating."""

from enum import Enum


class Confidence(Enum):
    """Prediction confidence, driven by how many services were observed."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Rating(Enum):
    """Cost-per-km rating. Declared from cheapest to most expensive."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    HIGH = "high"
