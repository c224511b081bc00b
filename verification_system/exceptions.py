"""
Exception hierarchy for the verification core.

Every failure surfaced to callers (web handlers, chat bot commands, CLI) is a
subclass of VerificationError so the caller can pick user-facing messaging by
type without inspecting strings.
"""

from typing import Any, Dict, Optional


class VerificationError(Exception):
    """Base exception for all verification core errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


class InvalidRequest(VerificationError):
    """Content passed to verify is empty or not a string."""

    def __init__(self, reason: str, content_type: Optional[str] = None):
        context = {'reason': reason}
        if content_type:
            context['content_type'] = content_type
        super().__init__(f"Invalid verification request: {reason}", context=context)
        self.reason = reason


class DuplicateSession(VerificationError):
    """A session id was reused while pending, running or already completed."""

    def __init__(self, session_id: str, status: str):
        message = f"Verification {session_id} is already {status}"
        super().__init__(message, context={'session_id': session_id, 'status': status})
        self.session_id = session_id
        self.status = status


class AnalyzerFailure(VerificationError):
    """An analyzer raised or timed out; the whole session failed."""

    def __init__(self, session_id: str, analyzer_id: str, original_error: BaseException):
        message = f"Analyzer '{analyzer_id}' failed during verification {session_id}: {original_error}"
        context = {
            'session_id': session_id,
            'analyzer_id': analyzer_id,
            'original_error': str(original_error) or type(original_error).__name__,
        }
        super().__init__(message, context=context)
        self.session_id = session_id
        self.analyzer_id = analyzer_id
        self.original_error = original_error


class NotFound(VerificationError):
    """Session id never existed or was removed by the retention sweep."""

    def __init__(self, session_id: str):
        super().__init__(f"Verification {session_id} not found", context={'session_id': session_id})
        self.session_id = session_id


class InvalidTransition(VerificationError):
    """Session status change that would move the lifecycle backward or skip a step."""

    def __init__(self, session_id: str, current: str, requested: str):
        message = f"Cannot move verification {session_id} from {current} to {requested}"
        super().__init__(message, context={'session_id': session_id, 'current': current, 'requested': requested})


class ConfigurationError(VerificationError):
    """Static analyzer configuration is unusable (duplicate ids, empty keywords)."""
