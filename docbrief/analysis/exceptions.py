class AnalysisError(Exception):
    """Raised when document analysis or a follow-up question fails."""


class AnalysisValidationError(AnalysisError):
    """Raised when the analysis service returns a payload that breaks the wire contract."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the analysis call fails due to network/infrastructure issues."""
