"""Custom exception classes for the API."""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ConfigurationError(APIError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class FoodMappingError(ConfigurationError):
    """Food mapping file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Unable to load food mapping from '{path}': {reason}",
            details={"path": path, "reason": reason},
        )
        self.path = path


class MalformedMappingEntry(ConfigurationError):
    """A food mapping line does not hold name, calories and recommendation."""

    def __init__(self, key: str, value: str, line_number: int, reason: str):
        super().__init__(
            message=(
                f"Malformed food mapping entry '{key}' on line {line_number}: {reason}"
            ),
            details={"key": key, "value": value, "line": line_number},
        )
        self.key = key
        self.line_number = line_number


class PredictionError(APIError):
    """Remote prediction call failed."""

    def __init__(
        self,
        message: str,
        error_code: str = "PREDICTION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, status_code=502, details=details or {})
        self.error_code = error_code
