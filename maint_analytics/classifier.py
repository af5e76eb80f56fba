"""Keyword classifier mapping free-text descriptions to service types."""

from typing import Tuple

FALLBACK_LABEL = "Other Service"

# Checked in order, first hit wins. Specific phrases must come before the
# broader words they contain ("oil change" before "oil").
SERVICE_KEYWORDS: Tuple[Tuple[str, str], ...] = tuple(
    (keyword, " ".join(word.capitalize() for word in keyword.split(" ")))
    for keyword in (
        "oil change",
        "oil",
        "tire",
        "brake",
        "chain",
        "battery",
        "spark plug",
        "air filter",
        "coolant",
        "clutch",
        "suspension",
        "fork",
        "valve",
        "carb",
        "fuel",
        "inspection",
        "wash",
        "wax",
        "detail",
    )
)


def classify(description: str) -> str:
    """
    Return the service type for a description.

    - First keyword contained in the lower-cased text: its title-cased label
    - No keyword: the first three words of the description as written
    - Empty description: FALLBACK_LABEL
    """
    lowered = description.lower()
    for keyword, label in SERVICE_KEYWORDS:
        if keyword in lowered:
            return label

    words = description.split()[:3]
    return " ".join(words) or FALLBACK_LABEL
