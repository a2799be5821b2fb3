"""Hot news domain exceptions."""

from src.core.domain.exceptions import UpstreamServiceError, ValidationError


class UnknownSourceError(ValidationError):
    """Raised when a source id is not in the registry."""

    error_code = "UNKNOWN_SOURCE"

    def __init__(self, source_id: object, max_id: int | None = None):
        self.source_id = source_id
        message = f"Source ID {source_id} does not exist"
        if max_id is not None:
            message = f"{message}. Valid range: 1-{max_id}"
        super().__init__(message)


class UpstreamError(UpstreamServiceError):
    """Raised when a single upstream hot list call fails."""

    def __init__(self, source_id: int, reason: str):
        self.source_id = source_id
        self.reason = reason
        super().__init__(f"Upstream error for source {source_id}: {reason}")
