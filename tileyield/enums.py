"""
Enum Definitions Module.

This module contains Enumeration classes for defining constant sets of values,
such as the device classes diced from a wafer. Using enums instead of raw strings
keeps the report columns and the per-class segment counts in one place.
"""
from enum import Enum

class DeviceClass(Enum):
    """Enumeration for the chip sizes diced from a wafer, largest first.

    The value doubles as the column label in reports and result tables.
    """
    LARGE = "Large"
    MEDIUM = "Medium"
    SMALL = "Small"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]

    @classmethod
    def from_label(cls, label: str) -> "DeviceClass":
        """Looks up a member by its report label (case-insensitive)."""
        for item in cls:
            if item.value.lower() == label.strip().lower():
                return item
        raise ValueError(f"Unknown device class '{label}'. Must be one of {cls.values()}.")
