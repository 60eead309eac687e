from dataclasses import dataclass, asdict
from typing import Dict

from tileyield.enums import DeviceClass

@dataclass(frozen=True)
class YieldReportRow:
    """Good-chip counts for one simulated wafer."""
    wafer: int          # 1-based trial number
    large: int
    medium: int
    small: int

    @classmethod
    def from_counts(cls, wafer: int, counts: Dict[DeviceClass, int]) -> "YieldReportRow":
        return cls(
            wafer=wafer,
            large=counts[DeviceClass.LARGE],
            medium=counts[DeviceClass.MEDIUM],
            small=counts[DeviceClass.SMALL],
        )

    def as_record(self) -> Dict[str, int]:
        """Row keyed by report column label."""
        values = asdict(self)
        return {
            'Wafer': values['wafer'],
            DeviceClass.LARGE.value: values['large'],
            DeviceClass.MEDIUM.value: values['medium'],
            DeviceClass.SMALL.value: values['small'],
        }

@dataclass
class ClassYield:
    """Container for the aggregate yield of one device class across all wafers."""
    device_class: DeviceClass
    max_chips: int              # window offsets per wafer
    mean_good_chips: float
    std_good_chips: float
    wafers_with_good_chip: float  # fraction of wafers with at least one good chip
    window_yield: float         # mean_good_chips / max_chips

@dataclass
class YieldSummary:
    """Container for per-class KPIs of one experiment."""
    trials: int
    classes: Dict[DeviceClass, ClassYield]

    def __getitem__(self, device_class: DeviceClass) -> ClassYield:
        return self.classes[device_class]
