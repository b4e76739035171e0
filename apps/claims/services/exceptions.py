"""Domain-specific exceptions for the claim and redemption workflow."""

from rest_framework import status

from apps.common.exceptions import ServiceError


class ClaimsServiceError(ServiceError):
    """Base exception for claims services."""
    code = 'claims_error'


class PromotionNotFoundError(ClaimsServiceError):
    """Raised when the promotion does not exist."""
    code = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND


class ClaimNotFoundError(ClaimsServiceError):
    """Raised when the claim does not exist or belongs to someone else."""
    code = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND


class PromotionNotApprovedError(ClaimsServiceError):
    """Raised when claiming a promotion that is not approved."""
    code = 'not_approved'


class SoldOutError(ClaimsServiceError):
    """Raised when every unit of the promotion has been claimed."""
    code = 'sold_out'
    status_code = status.HTTP_409_CONFLICT


class AlreadyClaimedError(ClaimsServiceError):
    """Raised when the consumer already claimed this promotion."""
    code = 'already_claimed'
    status_code = status.HTTP_409_CONFLICT


class InvalidCodeError(ClaimsServiceError):
    """Raised when a scanned code does not match any promotion."""
    code = 'invalid_code'


class UnauthorizedScanError(ClaimsServiceError):
    """Raised when a seller scans another seller's promotion."""
    code = 'unauthorized'
    status_code = status.HTTP_403_FORBIDDEN


class NotClaimedError(ClaimsServiceError):
    """Raised when the scanned code does not identify a claim of this promotion."""
    code = 'not_claimed'
    status_code = status.HTTP_404_NOT_FOUND


class AlreadyScannedError(ClaimsServiceError):
    """Raised when the claim was already redeemed."""
    code = 'already_scanned'
    status_code = status.HTTP_409_CONFLICT


class ScanCooldownError(ClaimsServiceError):
    """Raised when the seller's scanner is still cooling down."""
    code = 'scan_cooldown'
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    retryable = True


class InsufficientPermissionsError(ClaimsServiceError):
    """Raised when the caller's role does not allow the action."""
    code = 'forbidden'
    status_code = status.HTTP_403_FORBIDDEN
