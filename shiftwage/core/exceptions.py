class WageCalculationError(ValueError):
    """Base error for rejected calculation input"""

class InvalidConfigurationError(WageCalculationError):
    """Malformed time window or wage settings"""

class InvalidShiftError(WageCalculationError):
    """Shift data that cannot produce valid hours or amounts"""
