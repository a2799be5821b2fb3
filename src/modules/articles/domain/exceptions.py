"""Article domain exceptions."""

from src.core.domain.exceptions import UpstreamServiceError, ValidationError


class InvalidArticleUrlError(ValidationError):
    """Raised when the article URL is missing or not a public HTTP(S) URL."""

    error_code = "INVALID_URL"

    def __init__(self, url: str | None):
        self.url = url
        super().__init__(f"Please provide a valid URL: {url!r}")


class ExtractionError(UpstreamServiceError):
    """Raised when article content cannot be fetched or parsed."""

    error_code = "EXTRACTION_ERROR"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to fetch article content: {reason}")
