from __future__ import annotations

from typing import Optional


class AnalyzerError(Exception):
    """
    Base class for every failure that ends an analysis request.

    Each subclass carries a stable `code` for the JSON API and a
    `user_message` that is safe to show in the UI.
    """
    code = "ANALYZER_ERROR"
    default_message = "Something went wrong while scanning the product."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


# ---------------------------------------------------------------------------
# Parser-side failures
# ---------------------------------------------------------------------------

class ReportError(AnalyzerError):
    code = "REPORT_ERROR"


class EmptyResponse(ReportError):
    code = "EMPTY_RESPONSE"
    default_message = "No data received from the analyzer. Please try again."


class ExtractionError(ReportError):
    code = "EXTRACTION_FAILED"
    default_message = "Ingredient list could not be parsed. Please verify the product name."


# ---------------------------------------------------------------------------
# Transport-side failures
# ---------------------------------------------------------------------------

class UpstreamError(AnalyzerError):
    code = "UPSTREAM_ERROR"


class UpstreamRateLimited(UpstreamError):
    code = "RATE_LIMITED"
    default_message = (
        "Rate limit exceeded. The analysis service is busy right now. "
        "Please wait a moment and try again."
    )

    @property
    def user_message(self) -> str:
        # The raw SDK text is noisy; always show the retry guidance.
        return self.default_message


class UpstreamOther(UpstreamError):
    code = "UPSTREAM_ERROR"
