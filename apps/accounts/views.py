import logging

from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.exceptions import ServiceError, error_response

from .permissions import IsMarketplaceAdmin
from .routing import resolve_redirect
from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    EmailSerializer,
    EmailCodeSerializer,
    PasswordResetConfirmSerializer,
    ProfileUpdateSerializer,
    LogoUploadSerializer,
    UpdateUserRoleSerializer,
    RouteQuerySerializer,
)
from .services import (
    register_user,
    authenticate_user,
    verify_user_email,
    resend_confirmation_code,
    request_password_reset as request_password_reset_service,
    verify_password_reset_code,
    confirm_password_reset as confirm_password_reset_service,
    update_profile as update_profile_service,
    upload_business_logo,
    list_users as list_users_service,
    update_user_role as update_user_role_service,
    RoleResolver,
    # Exceptions
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    EmailNotConfirmedError,
    InvalidTokenError,
    UserNotFoundError,
    PasswordConfirmationError,
    RateLimitExceededError,
    InsufficientPermissionsError,
    InvalidRoleError,
)

logger = logging.getLogger(__name__)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()
    retryable = serializers.BooleanField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token of the session")


class ResetTokenResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    token = serializers.CharField()


class RouteResponseSerializer(serializers.Serializer):
    role = serializers.CharField(allow_null=True)
    redirect = serializers.CharField(allow_null=True)


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a consumer account. A 6-digit confirmation code is emailed.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return error_response(e)

    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=EmailCodeSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        429: ErrorResponseSerializer,
    },
    description="Confirm the email with the sign-up code and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def confirm_email(request):
    """Confirm email with the 6-digit code."""
    serializer = EmailCodeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = verify_user_email(**serializer.validated_data)
    except (InvalidTokenError, RateLimitExceededError) as e:
        return error_response(e)

    return Response({
        'message': 'Email confirmed',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    request=EmailSerializer,
    responses={
        200: MessageResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Send a new sign-up confirmation code.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def resend_confirmation(request):
    serializer = EmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        resend_confirmation_code(email=serializer.validated_data['email'])
    except UserNotFoundError as e:
        return error_response(e)

    return Response({'message': 'Confirmation code sent'})


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except (InvalidCredentialsError, InactiveAccountError, EmailNotConfirmedError) as e:
        return error_response(e)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Sign out. The refresh token is validated; the client discards both tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout the current session."""
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token',
                'code': 'invalid_token',
                'retryable': False,
            }, status=status.HTTP_400_BAD_REQUEST)

    logger.info("User %s signed out", request.user.id)
    return Response({'message': 'Logout successful'})


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user with role.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    parameters=[
        OpenApiParameter('segment', str, description="First route segment, e.g. (tabs)"),
    ],
    responses={200: RouteResponseSerializer},
    description="Resolve the role of the caller and where the client must redirect.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def route(request):
    """Navigation guard for the client."""
    query = RouteQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    resolver = RoleResolver()
    user = request.user if request.user.is_authenticated else None
    state = resolver.start(user)

    return Response({
        'role': state.role,
        'redirect': resolve_redirect(
            state.user, state.role, query.validated_data['segment'], state.loading
        ),
    })


@extend_schema(
    request=EmailSerializer,
    responses={
        200: MessageResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Email a 6-digit password recovery code.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def request_password_reset(request):
    """Request password reset code."""
    serializer = EmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        request_password_reset_service(email=serializer.validated_data['email'])
    except UserNotFoundError as e:
        return error_response(e)

    return Response({'message': 'Password reset code sent'})


@extend_schema(
    request=EmailCodeSerializer,
    responses={
        200: ResetTokenResponseSerializer,
        400: ErrorResponseSerializer,
        429: ErrorResponseSerializer,
    },
    description="Verify the recovery code. Limited to 3 attempts per minute.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def verify_password_reset(request):
    """Exchange a recovery code for a reset token."""
    serializer = EmailCodeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        token = verify_password_reset_code(**serializer.validated_data)
    except (InvalidTokenError, RateLimitExceededError) as e:
        return error_response(e)

    return Response({'message': 'Code verified', 'token': token})


@extend_schema(
    request=PasswordResetConfirmSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Set a new password with the reset token.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def confirm_password_reset(request):
    """Confirm password reset with token."""
    serializer = PasswordResetConfirmSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        confirm_password_reset_service(**serializer.validated_data)
    except (PasswordConfirmationError, InvalidTokenError) as e:
        return error_response(e)

    return Response({'message': 'Password reset successful'})


@extend_schema(
    request=ProfileUpdateSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the caller's profile. Editable fields depend on the role.",
    tags=['profile'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    serializer = ProfileUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    user = update_profile_service(user_id=request.user.id, data=serializer.validated_data)
    return Response(UserSerializer(user).data)


@extend_schema(
    request={'multipart/form-data': LogoUploadSerializer},
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        503: ErrorResponseSerializer,
    },
    description="Upload the seller's business logo.",
    tags=['profile'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_logo(request):
    serializer = LogoUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = upload_business_logo(user=request.user, uploaded_file=serializer.validated_data['logo'])
    except ServiceError as e:
        return error_response(e)

    return Response(UserSerializer(user).data)


class UserPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    parameters=[
        OpenApiParameter('role', str, description="Filter by role"),
        OpenApiParameter('search', str, description="Search email or name"),
        OpenApiParameter('ascending', bool, description="Oldest first"),
    ],
    responses={200: UserSerializer(many=True)},
    description="List users (admin only).",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMarketplaceAdmin])
def list_users(request):
    """List users with role filter and search."""
    try:
        users = list_users_service(
            requested_by=request.user,
            role=request.query_params.get('role') or None,
            search=request.query_params.get('search', ''),
            ascending=request.query_params.get('ascending') in ('true', '1'),
        )
    except (InsufficientPermissionsError, InvalidRoleError) as e:
        return error_response(e)

    paginator = UserPagination()
    page = paginator.paginate_queryset(users, request)
    return paginator.get_paginated_response(UserSerializer(page, many=True).data)


@extend_schema(
    request=UpdateUserRoleSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Change a user's role (admin only).",
    tags=['admin'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsMarketplaceAdmin])
def update_user_role(request, pk):
    serializer = UpdateUserRoleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = update_user_role_service(
            user_id=pk,
            new_role=serializer.validated_data['role'],
            updated_by=request.user,
        )
    except (InvalidRoleError, InsufficientPermissionsError, UserNotFoundError) as e:
        return error_response(e)

    return Response(UserSerializer(user).data)
