"""
Solar monitoring and battery simulation package.

This package provides tools for simulating household solar generation,
appliance load and battery state of charge from historical irradiance
data, and for deriving optimization tips from the simulated day.
"""

__version__ = "0.1.0"

from .appliances import ApplianceRecord, ApplianceSpec, Room, appliance_from_record
from .irradiance import IrradianceSample, load_irradiance, samples_for_date
from .load_estimator import FixedJitter, estimate_load
from .settings import REFERENCE_SYSTEM, SystemConfig, SystemSpec
from .simulation import (
    HourlyRecord,
    project_battery,
    simulate_day,
    simulate_period,
    summarize_day,
    summarize_period,
)
from .tips import Tip, TipCategory, applicable_tips, build_tip_catalog

__all__ = [
    'ApplianceRecord',
    'ApplianceSpec',
    'Room',
    'appliance_from_record',
    'IrradianceSample',
    'load_irradiance',
    'samples_for_date',
    'FixedJitter',
    'estimate_load',
    'REFERENCE_SYSTEM',
    'SystemConfig',
    'SystemSpec',
    'HourlyRecord',
    'project_battery',
    'simulate_day',
    'simulate_period',
    'summarize_day',
    'summarize_period',
    'Tip',
    'TipCategory',
    'applicable_tips',
    'build_tip_catalog',
    '__version__'
]
