"""Custom exceptions for UG Finanzplan."""


class UGPlanError(Exception):
    """Base exception."""
    pass


class InvalidMonthKeyError(UGPlanError, ValueError):
    """A month key is not in the fixed-width "YYYY-MM" format."""
    pass


class PlanFileError(UGPlanError):
    pass


class ConfigError(UGPlanError):
    pass
