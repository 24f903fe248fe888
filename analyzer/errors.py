"""
Error taxonomy for the analysis endpoint.
Each error knows its HTTP status and the JSON body sent to the caller.
"""
from typing import Optional


class AnalysisError(Exception):
    """Base class for all errors surfaced to the client as JSON."""

    status_code = 500
    error = "Analysis failed"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message or self.error)
        self.details = details

    def to_dict(self) -> dict:
        payload = {'error': self.error}
        if self.details:
            payload['details'] = self.details
        return payload


class InvalidInputError(AnalysisError):
    """Raised when the request body or contractText is unusable."""
    status_code = 400
    error = "Invalid contract text"


class UnknownProviderError(AnalysisError):
    """Raised when the URL names a provider that is not configured."""
    status_code = 404
    error = "Unknown provider"


class MethodNotAllowedError(AnalysisError):
    status_code = 405
    error = "Method not allowed"


class ConfigurationError(AnalysisError):
    """
    Raised when a backend credential or provider setting is missing.

    The error text names the missing variable; the hint tells the operator
    how to fix it.
    """
    status_code = 500

    def __init__(self, error: str, hint: str):
        super().__init__(error)
        self.error = error
        self.hint = hint

    def to_dict(self) -> dict:
        return {'error': self.error, 'hint': self.hint}


class UpstreamFormatError(AnalysisError):
    """Raised when the backend reply cannot be parsed as a JSON object."""
    status_code = 500
    error = "Invalid response format from AI"


class AnalysisFailedError(AnalysisError):
    """Raised for any other failure while talking to the backend."""
    status_code = 500
    error = "Analysis failed"

    def to_dict(self) -> dict:
        return {'error': self.error, 'message': str(self)}
