"""Services for promotions business logic."""

from .exceptions import (
    PromotionsServiceError,
    PromotionNotFoundError,
    PromotionValidationError,
    InsufficientPermissionsError,
    UniqueCodeExhaustedError,
)
from .promotion_management import (
    create_promotion,
    update_promotion,
    delete_promotion,
    validate_promotion_fields,
)
from .promotion_listing import (
    PromotionPage,
    visible_promotions,
    search_promotions,
    list_promotions,
    get_promotion,
    list_industries,
)
from .promotion_approval import (
    set_promotion_approval,
    approve_promotion,
    decline_promotion,
)

__all__ = [
    # Exceptions
    'PromotionsServiceError',
    'PromotionNotFoundError',
    'PromotionValidationError',
    'InsufficientPermissionsError',
    'UniqueCodeExhaustedError',
    # Management
    'create_promotion',
    'update_promotion',
    'delete_promotion',
    'validate_promotion_fields',
    # Listing
    'PromotionPage',
    'visible_promotions',
    'search_promotions',
    'list_promotions',
    'get_promotion',
    'list_industries',
    # Approval
    'set_promotion_approval',
    'approve_promotion',
    'decline_promotion',
]
