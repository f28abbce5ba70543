"""
construction_tracker.domain.units

Known material unit codes.

Responsibilities:
- List the unit short codes offered to users, with display names.
- Resolve a stored short code back to a unit (unknown codes fall back to pieces).

Storage keeps the raw short code; this enum is a convenience for consumers.
"""

from __future__ import annotations

import enum


class MaterialUnit(enum.Enum):
    PIECES = ("Pieces", "pcs")
    UNITS = ("Units", "units")
    METERS = ("Meters", "m")
    CENTIMETERS = ("Centimeters", "cm")
    INCHES = ("Inches", "in")
    FEET = ("Feet", "ft")
    KILOGRAMS = ("Kilograms", "kg")
    GRAMS = ("Grams", "g")
    POUNDS = ("Pounds", "lbs")
    LITERS = ("Liters", "L")
    GALLONS = ("Gallons", "gal")
    SQUARE_METERS = ("Square Meters", "m²")
    SQUARE_FEET = ("Square Feet", "ft²")
    CUBIC_METERS = ("Cubic Meters", "m³")
    CUBIC_FEET = ("Cubic Feet", "ft³")
    BAGS = ("Bags", "bags")
    BOXES = ("Boxes", "boxes")
    ROLLS = ("Rolls", "rolls")
    SHEETS = ("Sheets", "sheets")

    def __init__(self, display_name: str, short_name: str) -> None:
        self.display_name = display_name
        self.short_name = short_name

    @classmethod
    def from_short_name(cls, short_name: str) -> MaterialUnit:
        for unit in cls:
            if unit.short_name == short_name:
                return unit
        return cls.PIECES

    @classmethod
    def common(cls) -> list[MaterialUnit]:
        return [cls.PIECES, cls.UNITS, cls.METERS, cls.KILOGRAMS, cls.LITERS, cls.BAGS, cls.BOXES]
