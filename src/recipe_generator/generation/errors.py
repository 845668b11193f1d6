"""Error taxonomy for recipe generation.

Every failure inside the pipeline is a GenerationError carrying a stable
``code`` and a ``retryable`` flag. Retryable errors are consumed by the
orchestrator; only terminal errors (ConfigurationError, RetriesExhausted,
GenerationFailed) ever reach the caller.
"""

from typing import Optional


class GenerationError(Exception):
    """Base class for all generation failures."""

    code: str = "GENERATION_FAILED"
    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Error body for the calling layer: ``{"code": ..., "message": ...}``."""
        return {"code": self.code, "message": self.message}


class ConfigurationError(GenerationError):
    """Provider credential or setup is missing. Never retried."""

    code = "CONFIGURATION_MISSING"
    retryable = False


class ProviderUnavailable(ConfigurationError):
    """Raised by a provider that cannot run because it is unconfigured."""


class ProviderError(GenerationError):
    """Transport, quota or timeout failure reported by the provider."""

    code = "PROVIDER_ERROR"
    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseFormat(GenerationError):
    """Provider text could not be parsed as a JSON object."""

    code = "INVALID_RESPONSE_FORMAT"
    retryable = True


class SchemaValidationError(GenerationError):
    """Parsed data does not satisfy the recipe schema.

    Attributes:
        errors: (field_path, reason) pairs, e.g. ("steps.0.number", "Input should be greater than 0").
    """

    code = "SCHEMA_VALIDATION_FAILED"
    retryable = True

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        self.errors = list(errors)
        summary = "; ".join(f"{path}: {reason}" for path, reason in self.errors[:5])
        if len(self.errors) > 5:
            summary += f" (+{len(self.errors) - 5} more)"
        super().__init__(f"Recipe failed schema validation: {summary}")

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["details"] = [{"path": path, "message": reason} for path, reason in self.errors]
        return body


class RetriesExhausted(GenerationError):
    """Retry budget consumed without a valid recipe.

    The code reflects the last failure so callers can tell a model that keeps
    returning garbage from a provider that keeps failing.
    """

    retryable = False

    _CODES = {
        InvalidResponseFormat: "INVALID_RESPONSE_FORMAT",
        SchemaValidationError: "SCHEMA_VALIDATION_EXHAUSTED",
        ProviderError: "PROVIDER_ERROR",
    }

    def __init__(self, attempts: int, last_error: GenerationError) -> None:
        super().__init__(
            f"Recipe generation failed after {attempts} attempt(s): {last_error.message}"
        )
        self.attempts = attempts
        self.last_error = last_error
        self.code = "SCHEMA_VALIDATION_EXHAUSTED"
        for error_type, code in self._CODES.items():
            if isinstance(last_error, error_type):
                self.code = code
                break


class GenerationFailed(GenerationError):
    """Unexpected failure that is neither a provider nor an output problem."""

    code = "GENERATION_FAILED"
    retryable = False


# Transport status for each terminal code, applied by the calling layer
HTTP_STATUS_BY_CODE = {
    "CONFIGURATION_MISSING": 503,
    "INVALID_RESPONSE_FORMAT": 502,
    "SCHEMA_VALIDATION_EXHAUSTED": 422,
    "SCHEMA_VALIDATION_FAILED": 400,
    "PROVIDER_ERROR": 502,
    "GENERATION_FAILED": 500,
}


def http_status_for(error: GenerationError) -> int:
    """Map a generation error to the HTTP status the boundary should return."""
    return HTTP_STATUS_BY_CODE.get(error.code, 500)
