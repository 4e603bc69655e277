from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.tokens import OptionalJWTAuthentication
from .serializers import (
    ServiceSerializer,
    PriceRequestSerializer,
    PriceQuoteSerializer,
    TermsOfServiceSerializer,
)
from .services import (
    get_active_services,
    get_active_service,
    quote_service_price,
    get_terms_of_service,
    ServiceNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    responses={200: ServiceSerializer(many=True)},
    description="List active services with their active options.",
    tags=['services'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def service_list(request):
    """List all active services."""
    return Response(ServiceSerializer(get_active_services(), many=True).data)


@extend_schema(
    responses={200: ServiceSerializer, 404: ErrorResponseSerializer},
    description="Get one active service with its options.",
    tags=['services'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def service_detail(request, pk):
    """Get a specific service."""
    try:
        service = get_active_service(service_id=pk)
    except ServiceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(ServiceSerializer(service).data)


@extend_schema(
    request=PriceRequestSerializer,
    responses={
        200: PriceQuoteSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description=(
        "Calculate the price and complexity of a service with option selections. "
        "Authenticated VIP clients get their discount applied."
    ),
    tags=['services'],
)
@api_view(['POST'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([AllowAny])
def calculate_price(request):
    """Calculate price for a service with options."""
    serializer = PriceRequestSerializer(data=request.data)
    if not serializer.is_valid():
        if 'service_id' in serializer.errors:
            return Response({'error': 'Service ID is required'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = request.user if request.user.is_authenticated else None

    try:
        quote = quote_service_price(
            service_id=serializer.validated_data['service_id'],
            selections=serializer.validated_data['options'],
            user=user,
        )
    except ServiceNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(PriceQuoteSerializer(quote).data)


@extend_schema(
    responses={200: TermsOfServiceSerializer},
    description="Commission terms of service.",
    tags=['services'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def terms_of_service(request):
    """Get the terms of service."""
    return Response(TermsOfServiceSerializer(get_terms_of_service()).data)
