"""
Configuration and Styling Module.

This module contains the wafer geometry constants, the default experiment
parameters and the colour theme used by the dashboard plots.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple
from types import MappingProxyType

from tileyield.enums import DeviceClass

# --- Wafer Geometry ---
TILES_PER_SEGMENT = 10
SEGMENTS_PER_WAFER = 5

# Consecutive segments that make up one chip of each class
DEVICE_SEGMENTS = {
    DeviceClass.LARGE: 5,
    DeviceClass.MEDIUM: 4,
    DeviceClass.SMALL: 3,
}

# --- Experiment Defaults ---
DEFAULT_TRIALS = 10
DEFAULT_FAULT_PROBABILITY = 0.01
DEFAULT_FAULT_FRACTION = "1/10"

# (trials, tile fault probability, acceptable fault fraction)
# Run in order by the console runner when no parameters are given.
DEFAULT_EXPERIMENTS: List[Tuple[int, float, str]] = [
    (10, 0.01, "1/10"),
    (10, 0.05, "1/10"),
    (10, 0.1, "1/10"),
    (10, 0.1, "2/10"),
]


@dataclass(frozen=True)
class WaferConfig:
    """
    Immutable wafer geometry: tiles per segment, segments per wafer and the
    number of consecutive segments forming a chip of each device class.
    """
    tiles_per_segment: int = TILES_PER_SEGMENT
    segments_per_wafer: int = SEGMENTS_PER_WAFER
    device_segments: Dict[DeviceClass, int] = field(default_factory=lambda: dict(DEVICE_SEGMENTS))

    def __post_init__(self):
        self._validate()
        # Freeze the mapping so a shared config cannot drift between trials
        object.__setattr__(self, 'device_segments', MappingProxyType(dict(self.device_segments)))

    def _validate(self):
        if self.tiles_per_segment < 1:
            raise ValueError(f"tiles_per_segment must be positive, got {self.tiles_per_segment}.")
        if self.segments_per_wafer < 1:
            raise ValueError(f"segments_per_wafer must be positive, got {self.segments_per_wafer}.")

        missing = [dc.value for dc in DeviceClass if dc not in self.device_segments]
        if missing:
            raise ValueError(f"device_segments is missing device classes: {missing}")

        for device_class, k in self.device_segments.items():
            if not 1 <= k <= self.segments_per_wafer:
                raise ValueError(
                    f"{device_class.value} chips span {k} segments; must be between 1 and "
                    f"segments_per_wafer ({self.segments_per_wafer})."
                )

    def __hash__(self):
        return hash((self.tiles_per_segment, self.segments_per_wafer,
                     tuple(sorted((dc.value, k) for dc, k in self.device_segments.items()))))

    def segments_for(self, device_class: DeviceClass) -> int:
        return self.device_segments[device_class]

    def tiles_for(self, device_class: DeviceClass) -> int:
        """Number of tiles in one chip of the given class."""
        return self.segments_for(device_class) * self.tiles_per_segment

    def max_chips(self, device_class: DeviceClass) -> int:
        """Upper bound on good chips per wafer (number of window offsets)."""
        return self.segments_per_wafer - self.segments_for(device_class) + 1


DEFAULT_CONFIG = WaferConfig()

# --- Theme Configuration ---
@dataclass
class PlotTheme:
    background_color: str
    plot_area_color: str
    axis_color: str
    text_color: str

    functional_color: str = '#2ECC71' # Green for working tiles
    faulty_color: str = '#E74C3C'     # Red for faulty tiles

# Default Theme (Dark Mode)
DEFAULT_THEME = PlotTheme(
    background_color='#2C3E50',       # Dark Blue-Grey
    plot_area_color='#333333',        # Dark Grey
    axis_color='#8B4513',             # Saddle Brown
    text_color='#FFFFFF',             # White
)

# Light Theme (For Reporting/Printing)
LIGHT_THEME = PlotTheme(
    background_color='#FFFFFF',
    plot_area_color='#F0F2F6',        # Streamlit Light Grey
    axis_color='#333333',
    text_color='#000000',
)

# Bar colours per device class, largest first
DEVICE_CLASS_COLORS = {
    DeviceClass.LARGE: '#636EFA',
    DeviceClass.MEDIUM: '#EF553B',
    DeviceClass.SMALL: '#00CC96',
}
