from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes

from apps.accounts.permissions import IsSeller
from apps.common.exceptions import ServiceError, error_response

from .qr import render_qr_png
from .serializers import (
    ClaimSerializer,
    PromotionClaimSerializer,
    ScanSerializer,
    ScanResultSerializer,
    ClaimListQuerySerializer,
)
from .services import (
    claim_promotion as claim_promotion_service,
    list_user_claims,
    get_user_claim,
    scan_promotion as scan_promotion_service,
    list_promotion_claims,
    ClaimNotFoundError,
)


@extend_schema(
    request=None,
    responses={201: ClaimSerializer},
    tags=['claims'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def claim_promotion(request, promotion_id):
    """Claim one unit of an approved promotion."""
    try:
        claim = claim_promotion_service(user=request.user, promotion_id=promotion_id)
    except ServiceError as e:
        return error_response(e)

    return Response(ClaimSerializer(claim).data, status=status.HTTP_201_CREATED)


@extend_schema(
    parameters=[
        OpenApiParameter('status', str, enum=['pending', 'claimed'],
                         description="pending = not yet redeemed, claimed = redeemed"),
    ],
    responses={200: ClaimSerializer(many=True)},
    tags=['claims'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_claims(request):
    """Claims of the current user, newest first."""
    query = ClaimListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    claims = list_user_claims(user=request.user, scanned=query.scanned_filter())
    return Response(ClaimSerializer(claims, many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('output', str, enum=['png', 'json'], description="Defaults to png"),
    ],
    responses={200: OpenApiTypes.BINARY},
    tags=['claims'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def claim_qr(request, pk):
    """QR code the consumer shows to the seller."""
    try:
        claim = get_user_claim(user=request.user, claim_id=pk)
    except ClaimNotFoundError as e:
        return error_response(e)

    if request.query_params.get('output') == 'json':
        return Response({'id': str(claim.id), 'payload': claim.qr_payload, 'scanned': claim.scanned})

    return HttpResponse(render_qr_png(claim.qr_payload), content_type='image/png')


@extend_schema(
    request=ScanSerializer,
    responses={200: ScanResultSerializer},
    description=(
        "Redeem a claim. The code is the claim QR payload `<unique_code>:<claim id>`. "
        "A bare promotion unique code does not identify a claim and is rejected "
        "with 404 not_claimed."
    ),
    tags=['claims'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def scan(request):
    """Redeem a claim from the scanned QR payload."""
    serializer = ScanSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        claim = scan_promotion_service(
            seller=request.user,
            scanned_code=serializer.validated_data['code']
        )
    except ServiceError as e:
        return error_response(e)

    return Response(ScanResultSerializer(claim).data)


@extend_schema(
    parameters=[
        OpenApiParameter('status', str, enum=['pending', 'claimed']),
    ],
    responses={200: PromotionClaimSerializer(many=True)},
    tags=['claims'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSeller])
def promotion_claims(request, promotion_id):
    """Claims on one of the seller's promotions."""
    query = ClaimListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    try:
        claims = list_promotion_claims(
            seller=request.user,
            promotion_id=promotion_id,
            scanned=query.scanned_filter(),
        )
    except ServiceError as e:
        return error_response(e)

    return Response(PromotionClaimSerializer(claims, many=True).data)
