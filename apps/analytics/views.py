from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsConsumer, IsSeller, IsMarketplaceAdmin
from apps.common.exceptions import error_response

from .analytics import AnalyticsQueries
from .exceptions import AnalyticsServiceError
from .serializers import (
    # Input serializers
    DashboardQuerySerializer,
    # Response serializers
    UserSummarySerializer,
    SellerSummarySerializer,
    AdminDashboardSerializer,
)


@extend_schema(
    responses={200: UserSummarySerializer},
    description="Items bought, money saved and spent, and claim counts of the current consumer.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsConsumer])
def my_analytics(request):
    """Current consumer's totals - thin HTTP handler."""
    data = AnalyticsQueries.user_summary(user_id=request.user.id)
    return Response(UserSummarySerializer(data).data)


@extend_schema(
    responses={200: SellerSummarySerializer},
    description="Inventory and redemption statistics for the current seller's promotions.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSeller])
def seller_analytics(request):
    """Current seller's statistics - thin HTTP handler."""
    data = AnalyticsQueries.seller_summary(seller_id=request.user.id)
    return Response(SellerSummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('growth_window', OpenApiTypes.INT, description='Days counted as recent (default 30)'),
        OpenApiParameter('series_days', OpenApiTypes.INT, description='Days in the sign-up series (default 7)'),
    ],
    responses={200: AdminDashboardSerializer},
    description="Marketplace-wide statistics for admins.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMarketplaceAdmin])
def admin_dashboard(request):
    """Admin dashboard - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = AnalyticsQueries.admin_dashboard(
            growth_window_days=params['growth_window'],
            series_days=params['series_days'],
        )
    except AnalyticsServiceError as e:
        return error_response(e)

    return Response(AdminDashboardSerializer(data).data)
