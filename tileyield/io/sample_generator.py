import math
import logging
import numpy as np
from typing import Optional
from tileyield.core.config import DEFAULT_CONFIG, WaferConfig
from tileyield.core.models import WaferMap

logger = logging.getLogger(__name__)

def validate_probability(p: float, name: str = "fault probability") -> float:
    """Returns p as a float, raising ValueError unless 0 <= p <= 1."""
    try:
        value = float(p)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid {name} {p!r}: {e}") from e
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise ValueError(f"Invalid {name} {p!r}: must be between 0 and 1.")
    return value

def sample_tiles(p: float, n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draws n independent tile states.

    Each tile is functional (True) with probability 1 - p. Uniform draws lie in
    [0, 1), so p = 0 gives all functional and p = 1 all faulty without
    depending on chance.
    """
    p = validate_probability(p)
    if n < 0:
        raise ValueError(f"Tile count must be non-negative, got {n}.")
    rng = rng if rng is not None else np.random.default_rng()
    return rng.random(n) >= p

def generate_segment(p: float, config: WaferConfig = DEFAULT_CONFIG, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """One segment yield map of config.tiles_per_segment tiles."""
    return sample_tiles(p, config.tiles_per_segment, rng)

def generate_wafer(p: float, config: WaferConfig = DEFAULT_CONFIG, rng: Optional[np.random.Generator] = None) -> WaferMap:
    """
    Generates a wafer yield map of config.segments_per_wafer independently
    sampled segments.
    """
    rng = rng if rng is not None else np.random.default_rng()
    segments = [generate_segment(p, config, rng) for _ in range(config.segments_per_wafer)]
    wafer = WaferMap(np.vstack(segments), config)
    logger.debug(f"Generated wafer with {wafer.fault_count} faulty tiles (p={p})")
    return wafer
