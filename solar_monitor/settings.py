"""System configuration values and types for the solar monitor."""

from dataclasses import asdict, dataclass
from typing import Any

from .exceptions import SystemConfigurationError

# Battery defaults
NOMINAL_BATTERY_VOLTAGE = 12  # V, amp-hour ratings are converted at this voltage
BATTERY_AMP_HOURS = 200  # Ah
BATTERY_MIN_SOC = 20  # percentage

# Panel defaults
PANEL_RATING_W = 350
PANEL_COUNT = 8
DEFAULT_EFFICIENCY = 0.75  # Real-world performance factor
INSTALLATION_YEAR = 2024

# Reference household used by the historical views
REFERENCE_CAPACITY_KWH = 5.0
REFERENCE_MIN_SOC_KWH = 1.0  # 20% of capacity
REFERENCE_SYSTEM_SIZE_KW = 2.0


@dataclass(frozen=True)
class SystemSpec:
    """Battery and array description consumed by the simulator.

    All energy values are kWh and the array size is kW.
    """

    battery_capacity_kwh: float
    min_soc_kwh: float
    system_size_kw: float
    efficiency: float = DEFAULT_EFFICIENCY

    def clamp_soc(self, soc: float) -> float:
        """Clamp a state of charge into [min_soc_kwh, battery_capacity_kwh]."""
        return min(self.battery_capacity_kwh, max(self.min_soc_kwh, soc))

    def soc_percent(self, soc: float) -> float:
        return soc / self.battery_capacity_kwh * 100.0

    @classmethod
    def from_config(cls, config: "SystemConfig") -> "SystemSpec":
        config.validate()
        capacity = config.battery_amp_hours * NOMINAL_BATTERY_VOLTAGE / 1000.0
        return cls(
            battery_capacity_kwh=capacity,
            min_soc_kwh=capacity * config.min_soc_percent / 100.0,
            system_size_kw=config.panel_watts * config.panel_count / 1000.0,
            efficiency=config.efficiency,
        )


REFERENCE_SYSTEM = SystemSpec(
    battery_capacity_kwh=REFERENCE_CAPACITY_KWH,
    min_soc_kwh=REFERENCE_MIN_SOC_KWH,
    system_size_kw=REFERENCE_SYSTEM_SIZE_KW,
    efficiency=DEFAULT_EFFICIENCY,
)


@dataclass
class SystemConfig:
    """Raw solar system settings as entered by the user."""

    battery_amp_hours: float = BATTERY_AMP_HOURS
    min_soc_percent: float = BATTERY_MIN_SOC
    panel_watts: float = PANEL_RATING_W
    panel_count: int = PANEL_COUNT
    installation_year: int = INSTALLATION_YEAR
    efficiency: float = DEFAULT_EFFICIENCY

    def update(self, **kwargs: Any) -> None:
        """Update settings from dict."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def validate(self) -> None:
        """Raise SystemConfigurationError for out-of-range values."""
        if self.battery_amp_hours <= 0:
            raise SystemConfigurationError(
                "battery_amp_hours", "Battery capacity must be positive"
            )
        if not 0 <= self.min_soc_percent < 100:
            raise SystemConfigurationError(
                "min_soc_percent",
                "Minimum state of charge must be between 0 and 100 percent",
            )
        if self.panel_watts <= 0:
            raise SystemConfigurationError(
                "panel_watts", "Panel rating must be positive"
            )
        if self.panel_count < 1:
            raise SystemConfigurationError(
                "panel_count", "At least one panel is required"
            )
        if not 0 < self.efficiency <= 1:
            raise SystemConfigurationError(
                "efficiency", "Efficiency must be in (0, 1]"
            )

    def to_system_spec(self) -> SystemSpec:
        return SystemSpec.from_config(self)

    def to_dict(self) -> dict:
        return asdict(self)
