from rest_framework import status, serializers
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
    parser_classes,
)
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from drf_spectacular.utils import extend_schema

from apps.uploads import InvalidUploadError
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    UserProfileSerializer,
    ProfileUpdateSerializer,
    ProfilePictureSerializer,
    BannerSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_profile as update_profile_service,
    set_profile_picture,
    set_banner,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UsernameTakenError,
)
from .tokens import issue_tokens


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ValidateResponseSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    user = UserSerializer(required=False)


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class RegistrationErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    is_email_taken = serializers.BooleanField()
    is_username_taken = serializers.BooleanField()


def registration_error_response(error: UserRegistrationError) -> Response:
    return Response({
        'error': str(error),
        'is_email_taken': error.is_email_taken,
        'is_username_taken': error.is_username_taken,
    }, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: RegistrationErrorSerializer,
    },
    description="Register a new client account and receive JWT tokens.",
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
    except UserRegistrationError as e:
        return registration_error_response(e)

    return Response({
        'message': 'User registered successfully',
        'user': UserSerializer(user).data,
        'tokens': issue_tokens(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response({
            'error': 'Username and password are required'
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': issue_tokens(user),
    })


@extend_schema(
    request=None,
    responses={
        200: ValidateResponseSerializer,
        401: ValidateResponseSerializer,
        404: ValidateResponseSerializer,
    },
    description="Check a bearer token and return the user it belongs to.",
    tags=['auth'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def validate(request):
    """Validate the bearer token in the Authorization header."""
    authenticator = JWTAuthentication()

    try:
        result = authenticator.authenticate(request)
    except InvalidToken:
        return Response({
            'valid': False,
            'error': 'Invalid token'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except AuthenticationFailed as e:
        if 'user_not_found' in str(e.get_codes()):
            return Response({
                'valid': False,
                'error': 'User not found'
            }, status=status.HTTP_404_NOT_FOUND)
        return Response({
            'valid': False,
            'error': 'Invalid token'
        }, status=status.HTTP_401_UNAUTHORIZED)

    if result is None:
        return Response({
            'valid': False,
            'error': 'No token provided'
        }, status=status.HTTP_401_UNAUTHORIZED)

    user, _token = result
    return Response({
        'valid': True,
        'user': UserSerializer(user).data,
    })


@extend_schema(
    methods=['GET'],
    responses={200: UserProfileSerializer},
    description="Get the current user's profile and their commissions.",
    tags=['users'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=ProfileUpdateSerializer,
    responses={
        200: UserProfileSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's username and description.",
    tags=['users'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """Get or update the current user's profile."""
    if request.method == 'GET':
        from apps.commissions.services import get_client_commissions
        from apps.commissions.serializers import ProfileCommissionSerializer

        commissions = get_client_commissions(user=request.user)
        return Response({
            'user': UserProfileSerializer(request.user).data,
            'commissions': ProfileCommissionSerializer(commissions, many=True).data,
        })

    serializer = ProfileUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({
            'error': 'Username is required'
        }, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = update_profile_service(user=request.user, **serializer.validated_data)
    except UsernameTakenError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Profile updated successfully',
        'user': UserProfileSerializer(user).data,
    })


@extend_schema(
    request=ProfilePictureSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Upload a new profile picture (jpg, jpeg, png or gif, max 5 MB).",
    tags=['users'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_profile_picture(request):
    """Upload a profile picture."""
    uploaded = request.FILES.get('profile_picture')
    if not uploaded:
        return Response({'error': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        path = set_profile_picture(user=request.user, uploaded_file=uploaded)
    except InvalidUploadError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Profile picture uploaded successfully',
        'profile_picture': path,
    })


@extend_schema(
    request=BannerSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Upload a new profile banner (jpg, jpeg, png or gif, max 5 MB).",
    tags=['users'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_banner(request):
    """Upload a profile banner."""
    uploaded = request.FILES.get('banner')
    if not uploaded:
        return Response({'error': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        path = set_banner(user=request.user, uploaded_file=uploaded)
    except InvalidUploadError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Banner uploaded successfully',
        'banner': path,
    })
