"""Domain-specific exceptions for promotions services."""

from rest_framework import status

from apps.common.exceptions import ServiceError


class PromotionsServiceError(ServiceError):
    """Base exception for promotions services."""
    code = 'promotions_error'


class PromotionNotFoundError(PromotionsServiceError):
    """Raised when promotion does not exist."""
    code = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND


class PromotionValidationError(PromotionsServiceError):
    """Raised when promotion input fails validation. Nothing is written."""
    code = 'validation_error'


class InsufficientPermissionsError(PromotionsServiceError):
    """Raised when the caller's role or ownership does not allow the action."""
    code = 'forbidden'
    status_code = status.HTTP_403_FORBIDDEN


class UniqueCodeExhaustedError(PromotionsServiceError):
    """Raised when no free unique code could be generated."""
    code = 'unique_code_exhausted'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True
