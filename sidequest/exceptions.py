"""
Standardized exception hierarchy for sidequest
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class SidequestError(Exception):
    """
    Base exception for all sidequest errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise SidequestError(
            message="Failed to save profile",
            user_id="user-123",
            operation="complete_quest",
            context={"quest_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went wrong on your quest. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Input Errors
# ==========================================

class InvalidInputError(SidequestError):
    """
    Raised when a caller passes a value the progression engine cannot accept

    Examples:
    - Non-positive experience award
    - Malformed date
    - Level outside 1..50

    The caller must not apply any state change when this is raised.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Quest Errors
# ==========================================

class QuestStateError(SidequestError):
    """Quest status transition is not allowed (e.g. completing an expired quest)"""

    def __init__(
        self,
        message: str,
        quest_id: Optional[str] = None,
        status: Optional[str] = None,
        **kwargs
    ):
        self.quest_id = quest_id
        self.status = status
        super().__init__(
            message=message,
            user_message="This quest can no longer be completed.",
            context={"quest_id": quest_id, "status": status},
            **kwargs
        )


class QuestLimitError(SidequestError):
    """Daily quest quota reached or reroll still cooling down"""

    def __init__(
        self,
        message: str,
        retry_after_seconds: Optional[int] = None,
        **kwargs
    ):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            message=message,
            user_message=message,
            context={"retry_after_seconds": retry_after_seconds},
            **kwargs
        )


# ==========================================
# Database Errors
# ==========================================

class DatabaseError(SidequestError):
    """
    Base class for persistence-related errors
    """
    pass


class RecordNotFoundError(DatabaseError):
    """Requested record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


class ConcurrentUpdateError(DatabaseError):
    """Profile changed between read and write (optimistic concurrency check failed)"""

    def __init__(
        self,
        message: str,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
        **kwargs
    ):
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            message=message,
            user_message="Your progress was updated elsewhere. Please refresh and try again.",
            context={"expected_version": expected_version, "actual_version": actual_version},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(SidequestError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# External Service Errors
# ==========================================

class ExternalServiceError(SidequestError):
    """
    Base class for failures reported by external collaborators (AI judge, quest generator)
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        **kwargs
    ):
        self.service = service
        kwargs.setdefault(
            "user_message",
            f"We're having trouble reaching {service or 'an external service'}. Please try again later."
        )
        super().__init__(
            message=message,
            context={"service": service},
            **kwargs
        )


class QuestGenerationError(ExternalServiceError):
    """Quest generator returned nothing usable"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            service="Quest Generator",
            **kwargs
        )
