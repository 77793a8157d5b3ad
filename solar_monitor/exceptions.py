"""Exception types raised around the solar monitor core.

The simulator and tip engine never raise; these cover configuration
collection and dataset access done by their callers.
"""


class SolarMonitorError(Exception):
    """Base exception for all solar monitor components."""
    pass


class SystemConfigurationError(SolarMonitorError):
    """Raised when a system or appliance configuration value is invalid."""

    def __init__(self, field=None, message=None):
        if message is None:
            if field:
                message = f"Invalid configuration value for {field}"
            else:
                message = "Invalid system configuration"
        super().__init__(message)
        self.field = field


class IrradianceDataError(SolarMonitorError):
    """Raised when the irradiance dataset cannot be read or is malformed."""
    pass


class NoDataForDateError(SolarMonitorError):
    """Raised when the irradiance dataset holds no samples for a date."""

    def __init__(self, date=None, message=None):
        if message is None:
            if date:
                message = f"No irradiance data available for {date}"
            else:
                message = "No irradiance data available"
        super().__init__(message)
        self.date = date
