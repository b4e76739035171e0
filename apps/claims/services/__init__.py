"""Services for claiming and redeeming promotions."""

from .exceptions import (
    ClaimsServiceError,
    PromotionNotFoundError,
    ClaimNotFoundError,
    PromotionNotApprovedError,
    SoldOutError,
    AlreadyClaimedError,
    InvalidCodeError,
    UnauthorizedScanError,
    NotClaimedError,
    AlreadyScannedError,
    ScanCooldownError,
    InsufficientPermissionsError,
)
from .claim_workflow import (
    claim_promotion,
    list_user_claims,
    get_user_claim,
)
from .scan_workflow import (
    scan_promotion,
    list_promotion_claims,
)

__all__ = [
    # Exceptions
    'ClaimsServiceError',
    'PromotionNotFoundError',
    'ClaimNotFoundError',
    'PromotionNotApprovedError',
    'SoldOutError',
    'AlreadyClaimedError',
    'InvalidCodeError',
    'UnauthorizedScanError',
    'NotClaimedError',
    'AlreadyScannedError',
    'ScanCooldownError',
    'InsufficientPermissionsError',
    # Claiming
    'claim_promotion',
    'list_user_claims',
    'get_user_claim',
    # Scanning
    'scan_promotion',
    'list_promotion_claims',
]
