"""Vehicle class holding the odometer snapshot used for analytics."""

from typing import Optional


class Vehicle:
    """Vehicle identification and odometer readings."""

    def __init__(
        self,
        id: str,
        name: str,
        current_odometer: int,
        purchase_odometer: Optional[int] = None,
        purchase_date: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.current_odometer = current_odometer
        self.purchase_odometer = purchase_odometer
        self.purchase_date = purchase_date

    @property
    def total_distance_km(self) -> int:
        """Distance traveled since acquisition."""
        return self.current_odometer - (self.purchase_odometer or 0)
