from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    CredentialsUpdateSerializer,
    AccountDeleteSerializer,
    TopUpSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    change_credentials,
    delete_user_account,
    top_up_balance,
    DuplicateUserError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidAmountError,
)


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


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except DuplicateUserError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_409_CONFLICT
        )

    return Response({
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with name and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with name and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@extend_schema(
    methods=['PUT'],
    request=CredentialsUpdateSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Change password and/or email. Requires the current password.",
    tags=['auth'],
)
@extend_schema(
    methods=['DELETE'],
    request=AccountDeleteSerializer,
    responses={
        204: None,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Delete the account together with owned restaurants.",
    tags=['auth'],
)
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """Get, update or delete the authenticated user."""
    if request.method == 'GET':
        return Response(UserSerializer(request.user).data)

    if request.method == 'PUT':
        serializer = CredentialsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = change_credentials(user_id=request.user.id, **serializer.validated_data)
        except InvalidCredentialsError as e:
            return Response({
                'error': str(e)
            }, status=status.HTTP_401_UNAUTHORIZED)

        return Response(UserSerializer(user).data)

    serializer = AccountDeleteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        delete_user_account(user_id=request.user.id, **serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_401_UNAUTHORIZED)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=TopUpSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Add money to the current user's cash balance.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def top_up(request):
    """Top up cash balance."""
    serializer = TopUpSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = top_up_balance(
            user_id=request.user.id,
            amount=serializer.validated_data['additional_cash_balance'],
        )
    except InvalidAmountError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)
