from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
    parser_classes,
)
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.services import UserRegistrationError
from apps.accounts.tokens import OptionalJWTAuthentication, issue_tokens
from apps.accounts.views import RegistrationErrorSerializer, registration_error_response
from apps.catalog.services import ServiceNotFoundError
from .models import PIPELINE, RequestStatus
from .permissions import IsOperator, IsOperatorOrReadOnly
from .serializers import (
    RequestSubmissionSerializer,
    CommissionRequestSerializer,
    AcceptRequestSerializer,
    PendingRequestCardSerializer,
    PendingRequestPublicSerializer,
    CommissionListSerializer,
    CommissionPublicSerializer,
    CommissionLimitedDetailSerializer,
    CommissionDetailSerializer,
    CommissionPatchSerializer,
    CommissionUpdateSerializer,
    CommissionUpdateCreateSerializer,
)
from .services import (
    submit_request as submit_request_service,
    get_user_requests,
    get_request_for_user,
    accept_request as accept_request_service,
    decline_request as decline_request_service,
    update_commission,
    add_commission_update,
    is_authenticated,
    list_commissions,
    build_kanban,
    get_commission_for_viewer,
    can_view_full_detail,
    get_commission_updates,
    InvalidSubmissionError,
    RequestNotFoundError,
    RequestAccessDeniedError,
    InvalidRequestStateError,
    CommissionNotFoundError,
    AuthenticationRequiredError,
    InvalidStatusTransitionError,
)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class NsfwErrorSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    is_nsfw = drf_serializers.BooleanField()


class TokensSerializer(drf_serializers.Serializer):
    refresh = drf_serializers.CharField()
    access = drf_serializers.CharField()


class SubmissionResponseSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    request_id = drf_serializers.IntegerField()
    total_price = drf_serializers.DecimalField(max_digits=10, decimal_places=2)
    complexity = drf_serializers.CharField()
    tokens = TokensSerializer(allow_null=True)


class UpdateCreatedSerializer(drf_serializers.Serializer):
    message = drf_serializers.CharField()
    update_id = drf_serializers.IntegerField()


def _viewer(request):
    return request.user if is_authenticated(request.user) else None


# =============================================================================
# Requests
# =============================================================================

@extend_schema(
    request=RequestSubmissionSerializer,
    responses={
        201: SubmissionResponseSerializer,
        400: RegistrationErrorSerializer,
        404: ErrorResponseSerializer,
    },
    description=(
        "Submit a commission request with up to 10 reference images. "
        "Anonymous visitors also send username, password and email; an account "
        "is created for them and tokens are returned. Price and complexity are "
        "computed on the server."
    ),
    tags=['requests'],
)
@api_view(['POST'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([AllowAny])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def submit_request(request):
    """Submit a new commission request."""
    serializer = RequestSubmissionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        commission_request, new_user = submit_request_service(
            user=_viewer(request),
            service_id=data['service_id'],
            description=data['description'],
            character_count=data['character_count'],
            alternative_count=data['alternative_count'],
            pose_count=data['pose_count'],
            is_nsfw=data['is_nsfw'],
            option_selections=data['options'],
            reference_files=request.FILES.getlist('references'),
            username=data['username'],
            password=data['password'],
            email=data['email'],
        )
    except ServiceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except UserRegistrationError as e:
        return registration_error_response(e)
    except InvalidSubmissionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Commission request submitted successfully',
        'request_id': commission_request.id,
        'total_price': commission_request.total_price,
        'complexity': commission_request.complexity,
        'tokens': issue_tokens(new_user) if new_user else None,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: CommissionRequestSerializer(many=True)},
    description="List the caller's own commission requests, newest first.",
    tags=['requests'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_requests(request):
    """Get the current user's requests."""
    requests = get_user_requests(user=request.user)
    return Response(CommissionRequestSerializer(requests, many=True).data)


@extend_schema(
    responses={
        200: CommissionRequestSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Get one request. Only its owner and the artist may view it.",
    tags=['requests'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def request_detail(request, pk):
    """Get a specific request."""
    try:
        commission_request = get_request_for_user(request_id=pk, user=request.user)
    except RequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except RequestAccessDeniedError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(CommissionRequestSerializer(commission_request).data)


@extend_schema(
    request=AcceptRequestSerializer,
    responses={
        201: CommissionDetailSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Accept a pending request and open its commission (artist only).",
    tags=['requests'],
)
@api_view(['POST'])
@permission_classes([IsOperator])
def accept_request(request, pk):
    """Accept a request."""
    serializer = AcceptRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        commission = accept_request_service(request_id=pk, **serializer.validated_data)
    except RequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidRequestStateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    commission = get_commission_for_viewer(commission_id=commission.id, viewer=request.user)
    return Response(
        CommissionDetailSerializer(commission, context={'viewer': request.user}).data,
        status=status.HTTP_201_CREATED,
    )


@extend_schema(
    request=None,
    responses={
        200: CommissionRequestSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Decline a pending request (artist only).",
    tags=['requests'],
)
@api_view(['POST'])
@permission_classes([IsOperator])
def decline_request(request, pk):
    """Decline a request."""
    try:
        commission_request = decline_request_service(request_id=pk)
    except RequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidRequestStateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(CommissionRequestSerializer(commission_request).data)


# =============================================================================
# Commissions
# =============================================================================

@extend_schema(
    parameters=[
        OpenApiParameter(name='status', type=str, required=False, description='Filter by commission status'),
    ],
    responses={200: CommissionListSerializer(many=True)},
    description=(
        "List commissions. Anonymous viewers get limited rows and never see "
        "NSFW work unless it is marked public."
    ),
    tags=['commissions'],
)
@api_view(['GET'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([AllowAny])
def commission_list(request):
    """List commissions, optionally filtered by status."""
    viewer = _viewer(request)
    commissions = list_commissions(viewer=viewer, status=request.query_params.get('status'))

    serializer_class = CommissionListSerializer if viewer else CommissionPublicSerializer
    return Response(serializer_class(commissions, many=True).data)


@extend_schema(
    responses={200: OpenApiTypes.OBJECT},
    description=(
        "Kanban board with the columns Requested, Accepted, Working, Waiting "
        "and Finished. Requested lists pending requests."
    ),
    tags=['commissions'],
)
@api_view(['GET'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([AllowAny])
def kanban(request):
    """Get the kanban board."""
    viewer = _viewer(request)
    board = build_kanban(viewer=viewer)

    if viewer:
        request_serializer, commission_serializer = PendingRequestCardSerializer, CommissionListSerializer
    else:
        request_serializer, commission_serializer = PendingRequestPublicSerializer, CommissionPublicSerializer

    data = {}
    for column in PIPELINE:
        serializer_class = request_serializer if column == RequestStatus.REQUESTED else commission_serializer
        data[str(column)] = serializer_class(board[column], many=True).data
    return Response(data)


@extend_schema(
    methods=['GET'],
    responses={
        200: CommissionDetailSerializer,
        403: NsfwErrorSerializer,
        404: ErrorResponseSerializer,
    },
    description=(
        "Get a commission. Anonymous viewers get 403 on NSFW work that is not "
        "public, and limited fields on other non-public work."
    ),
    tags=['commissions'],
)
@extend_schema(
    methods=['PATCH'],
    request=CommissionPatchSerializer,
    responses={
        200: CommissionDetailSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Change status, progress, dates, visibility or tags (artist only).",
    tags=['commissions'],
)
@api_view(['GET', 'PATCH'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([IsOperatorOrReadOnly])
def commission_detail(request, pk):
    """Get or update a commission."""
    viewer = _viewer(request)

    if request.method == 'PATCH':
        serializer = CommissionPatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_commission(commission_id=pk, **serializer.validated_data)
        except CommissionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStatusTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    try:
        commission = get_commission_for_viewer(commission_id=pk, viewer=viewer)
    except CommissionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AuthenticationRequiredError as e:
        return Response({'error': str(e), 'is_nsfw': True}, status=status.HTTP_403_FORBIDDEN)

    if not can_view_full_detail(commission, viewer):
        return Response(CommissionLimitedDetailSerializer(commission).data)

    return Response(CommissionDetailSerializer(commission, context={'viewer': viewer}).data)


@extend_schema(
    methods=['GET'],
    responses={
        200: CommissionUpdateSerializer(many=True),
        403: NsfwErrorSerializer,
        404: ErrorResponseSerializer,
    },
    description="The commission's update log, newest first.",
    tags=['commissions'],
)
@extend_schema(
    methods=['POST'],
    request=CommissionUpdateCreateSerializer,
    responses={
        201: UpdateCreatedSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description=(
        "Post a progress update with an optional image or video "
        "(jpg, jpeg, png, gif, mp4, webm; 20 MB). Artist only."
    ),
    tags=['commissions'],
)
@api_view(['GET', 'POST'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([IsOperatorOrReadOnly])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def commission_updates(request, pk):
    """List or add commission updates."""
    if request.method == 'GET':
        try:
            updates = get_commission_updates(commission_id=pk, viewer=_viewer(request))
        except CommissionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AuthenticationRequiredError as e:
            return Response({'error': str(e), 'is_nsfw': True}, status=status.HTTP_403_FORBIDDEN)

        return Response(CommissionUpdateSerializer(updates, many=True).data)

    serializer = CommissionUpdateCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        update = add_commission_update(
            commission_id=pk,
            title=serializer.validated_data['title'],
            description=serializer.validated_data['description'],
            uploaded_file=serializer.validated_data['image'],
        )
    except CommissionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidSubmissionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Update added successfully',
        'update_id': update.id,
    }, status=status.HTTP_201_CREATED)
