from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.exceptions import ServiceError, error_response

from .serializers import (
    IndustrySerializer,
    PromotionSerializer,
    PromotionListSerializer,
    PromotionCreateSerializer,
    PromotionUpdateSerializer,
    PromotionListQuerySerializer,
)
from apps.promotions.services import (
    create_promotion,
    update_promotion,
    delete_promotion,
    list_promotions,
    get_promotion,
    list_industries,
    approve_promotion,
    decline_promotion,
    # Exceptions
    PromotionNotFoundError,
    InsufficientPermissionsError,
)


class PromotionViewSet(viewsets.ViewSet):
    """
    ViewSet for promotions.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Promotions visible to the caller (approved / own / all by role)
    create: Create a promotion (seller)
    retrieve: Get a promotion
    update/partial_update: Edit own promotion (seller)
    destroy: Delete own promotion (seller)
    approve/decline: Set approval (admin)
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(
        parameters=[
            OpenApiParameter('page', int, description="1-based page number"),
            OpenApiParameter('search', str, description="Search title, description, business name"),
            OpenApiParameter('industry', int, description="Industry id"),
            OpenApiParameter('is_approved', bool, description="Approval filter (seller/admin)"),
        ],
        responses={200: PromotionListSerializer(many=True)},
        tags=['promotions'],
    )
    def list(self, request):
        """List promotions, newest first, with has_more."""
        query = PromotionListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        result = list_promotions(
            viewer=request.user,
            page=params['page'],
            search=params['search'] or None,
            industry_id=params.get('industry'),
            is_approved=params['is_approved'],
        )

        return Response({
            'count': result.total,
            'page': result.page,
            'has_more': result.has_more,
            'results': PromotionListSerializer(result.items, many=True).data,
        })

    @extend_schema(
        request={'multipart/form-data': PromotionCreateSerializer},
        responses={201: PromotionSerializer},
        tags=['promotions'],
    )
    def create(self, request):
        """Create a new promotion awaiting approval."""
        serializer = PromotionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            promotion = create_promotion(seller=request.user, **serializer.validated_data)
        except ServiceError as e:
            return error_response(e)

        return Response(PromotionSerializer(promotion).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: PromotionSerializer}, tags=['promotions'])
    def retrieve(self, request, pk=None):
        try:
            promotion = get_promotion(promotion_id=pk, viewer=request.user)
        except PromotionNotFoundError as e:
            return error_response(e)

        return Response(PromotionSerializer(promotion).data)

    @extend_schema(
        request=PromotionUpdateSerializer,
        responses={200: PromotionSerializer},
        tags=['promotions'],
    )
    def update(self, request, pk=None):
        """Edit an own promotion."""
        serializer = PromotionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        banner = data.pop('banner', None)

        try:
            promotion = update_promotion(
                promotion_id=pk,
                seller=request.user,
                data=data,
                banner=banner,
            )
        except ServiceError as e:
            return error_response(e)

        return Response(PromotionSerializer(promotion).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(responses={204: None}, tags=['promotions'])
    def destroy(self, request, pk=None):
        """Delete an own promotion."""
        try:
            delete_promotion(promotion_id=pk, seller=request.user)
        except (PromotionNotFoundError, InsufficientPermissionsError) as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: PromotionSerializer}, tags=['admin'])
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Approve a promotion (admin only)."""
        try:
            promotion = approve_promotion(promotion_id=pk, admin=request.user)
        except (PromotionNotFoundError, InsufficientPermissionsError) as e:
            return error_response(e)

        return Response(PromotionSerializer(promotion).data)

    @extend_schema(request=None, responses={200: PromotionSerializer}, tags=['admin'])
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        """Decline (unapprove) a promotion (admin only)."""
        try:
            promotion = decline_promotion(promotion_id=pk, admin=request.user)
        except (PromotionNotFoundError, InsufficientPermissionsError) as e:
            return error_response(e)

        return Response(PromotionSerializer(promotion).data)


@extend_schema(
    responses={200: IndustrySerializer(many=True)},
    description="List industries with their icons.",
    tags=['promotions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def industries(request):
    return Response(IndustrySerializer(list_industries(), many=True).data)
