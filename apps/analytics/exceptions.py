"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidWindowError

Usage:
    from apps.analytics.exceptions import InvalidWindowError

    if days < 1:
        raise InvalidWindowError("Window must be at least one day")
"""

from apps.common.exceptions import ServiceError


class AnalyticsServiceError(ServiceError):
    """
    Base exception for all analytics service errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            data = AnalyticsQueries.admin_dashboard(growth_window_days=0)
        except AnalyticsServiceError as e:
            return error_response(e)
    """

    code = 'analytics_error'


class InvalidWindowError(AnalyticsServiceError):
    """
    Raised when a reporting window (in days) is not a positive number.

    Example:
        raise InvalidWindowError("growth_window_days must be at least 1")
    """

    code = 'invalid_window'
