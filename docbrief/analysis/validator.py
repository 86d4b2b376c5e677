"""Validates analysis service responses against the wire contract.

Field presence is never trusted at use-sites: every payload goes through one
of these functions and comes out as a typed value or an
AnalysisValidationError.
"""

from typing import Any

from docbrief.analysis.exceptions import AnalysisError, AnalysisValidationError
from docbrief.analysis.models import (
    GENERIC_ANALYSIS_MESSAGE,
    RATE_LIMIT_CODE,
    RATE_LIMIT_MESSAGE,
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisSuccess,
)


def parse_analysis_response(
    payload: Any,
    *,
    generic_message: str = GENERIC_ANALYSIS_MESSAGE,
) -> AnalysisOutcome:
    """Build an AnalysisOutcome from a decoded analysis response.

    ``generic_message`` is the user copy for service-reported failures other
    than rate limiting.

    Raises:
        AnalysisValidationError: if the payload does not match either the
            success or the failure shape.
    """
    success = _require_success_flag(payload)
    if success:
        return _build_success(payload.get("analysis"))
    return _build_failure(payload, generic_message)


def parse_qa_response(payload: Any) -> str:
    """Extract the assistant reply from a decoded Q&A response.

    Raises:
        AnalysisError: if the service reported a failure.
        AnalysisValidationError: if the payload is malformed.
    """
    success = _require_success_flag(payload)
    if not success:
        error = payload.get("error")
        raise AnalysisError(error if isinstance(error, str) else "Q&A request failed")
    reply = payload.get("reply")
    if not isinstance(reply, str) or not reply.strip():
        raise AnalysisValidationError("'reply' must be a non-empty string")
    return reply


def _require_success_flag(payload: Any) -> bool:
    if not isinstance(payload, dict):
        raise AnalysisValidationError("Response must be a JSON object")
    success = payload.get("success")
    if not isinstance(success, bool):
        raise AnalysisValidationError("'success' must be a boolean")
    return success


def _build_success(raw: Any) -> AnalysisSuccess:
    if not isinstance(raw, dict):
        raise AnalysisValidationError("'analysis' must be an object")
    if not raw:
        raise AnalysisValidationError("'analysis' must not be empty")
    document_type = raw.get("document_type_detected")
    if document_type is not None and not isinstance(document_type, str):
        raise AnalysisValidationError("'analysis.document_type_detected' must be a string")
    return AnalysisSuccess(analysis=raw, document_type=document_type)


def _build_failure(payload: dict[str, Any], generic_message: str) -> AnalysisFailure:
    error = payload.get("error")
    code = payload.get("errorCode")
    if code is not None and not isinstance(code, str):
        raise AnalysisValidationError("'errorCode' must be a string")
    detail = error if isinstance(error, str) else ""
    if code == RATE_LIMIT_CODE:
        return AnalysisFailure(message=RATE_LIMIT_MESSAGE, code=code, detail=detail)
    return AnalysisFailure(message=generic_message, code=code, detail=detail)
