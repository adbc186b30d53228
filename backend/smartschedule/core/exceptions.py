class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when a generation request cannot be served as asked."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class NoValidScheduleError(SchedulerError):
    """Raised by callers when a generation run placed no session at all."""
    def __init__(self, level: int, group: int | None = None):
        details = {"level": level}
        if group is not None:
            details["group"] = group
        super().__init__("No valid schedule generated. Not enough free time slots.", details=details)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
