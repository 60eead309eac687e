"""
Domain Models for Wafer Yield Simulation.
Encapsulates the wafer yield map: an ordered stack of segments, each an ordered
array of tile states (True = functional, False = faulty).
"""
from dataclasses import dataclass
import numpy as np
import logging
from typing import Optional, Sequence, Tuple
from tileyield.core.config import WaferConfig

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class WaferMap:
    """
    Represents one simulated wafer.
    Holds a read-only 2-D boolean grid of shape (segments, tiles_per_segment).
    """
    grid: np.ndarray
    config: Optional[WaferConfig] = None

    def __post_init__(self):
        self.grid = self._coerce(self.grid)
        self._validate()
        self.grid.setflags(write=False)

    @staticmethod
    def _coerce(grid) -> np.ndarray:
        try:
            arr = np.array(grid, dtype=bool)
        except ValueError as e:
            # Ragged nested sequences end up here
            raise ValueError(f"Wafer yield map must be rectangular: {e}") from e
        return arr

    def _validate(self):
        if self.grid.ndim != 2:
            raise ValueError(f"Wafer yield map must be 2-D (segments x tiles), got {self.grid.ndim}-D.")
        if self.grid.shape[0] == 0 or self.grid.shape[1] == 0:
            raise ValueError("Wafer yield map must contain at least one segment and one tile.")
        if self.config is None:
            return
        expected = (self.config.segments_per_wafer, self.config.tiles_per_segment)
        if self.grid.shape != expected:
            raise ValueError(f"Wafer yield map shape {self.grid.shape} does not match configuration {expected}.")

    @classmethod
    def from_segments(cls, segments: Sequence[Sequence], config: Optional[WaferConfig] = None) -> "WaferMap":
        """Builds a wafer from nested per-segment tile sequences (1/True = functional)."""
        return cls([list(segment) for segment in segments], config)

    @property
    def num_segments(self) -> int:
        return self.grid.shape[0]

    @property
    def tiles_per_segment(self) -> int:
        return self.grid.shape[1]

    @property
    def segments(self) -> Tuple[np.ndarray, ...]:
        return tuple(self.grid)

    @property
    def fault_count(self) -> int:
        return int(np.count_nonzero(~self.grid))

    @property
    def functional_fraction(self) -> float:
        """Share of functional tiles across the whole wafer."""
        return float(np.count_nonzero(self.grid)) / self.grid.size

    def window(self, start: int, length: int) -> np.ndarray:
        """Flattened tile sequence of segments [start, start + length)."""
        return self.grid[start:start + length].ravel()

    def __len__(self) -> int:
        return self.num_segments

    def __eq__(self, other) -> bool:
        if not isinstance(other, WaferMap):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)
