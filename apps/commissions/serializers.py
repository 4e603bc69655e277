import json

from rest_framework import serializers

from apps.catalog.serializers import OptionSelectionSerializer
from .models import (
    Commission,
    CommissionRequest,
    CommissionStatus,
    CommissionUpdate,
    Tag,
)


# === Requests ===

class RequestSubmissionSerializer(serializers.Serializer):
    """
    Input for a new commission request (multipart).

    ``options`` may arrive as a JSON string since multipart bodies can't
    nest lists. Account fields are only needed for anonymous submitters.
    """

    service_id = serializers.IntegerField()
    description = serializers.CharField()
    character_count = serializers.IntegerField(min_value=1, default=1)
    alternative_count = serializers.IntegerField(min_value=0, default=0)
    pose_count = serializers.IntegerField(min_value=1, default=1)
    is_nsfw = serializers.BooleanField(default=False)
    options = serializers.JSONField(required=False, default=list)
    username = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    password = serializers.CharField(write_only=True, required=False, allow_blank=True, default='')
    email = serializers.EmailField(required=False, allow_blank=True, default='')

    def validate_options(self, value):
        if isinstance(value, str):
            try:
                value = json.loads(value) if value.strip() else []
            except ValueError:
                raise serializers.ValidationError('Options must be a JSON list')

        selections = OptionSelectionSerializer(data=value, many=True)
        selections.is_valid(raise_exception=True)
        return selections.validated_data


class CommissionRequestSerializer(serializers.ModelSerializer):
    """A request as its owner (or the operator) sees it."""

    service_name = serializers.CharField(source='service.name', read_only=True)
    client_name = serializers.CharField(source='user.username', read_only=True)
    commission_id = serializers.SerializerMethodField()

    class Meta:
        model = CommissionRequest
        fields = [
            'id', 'service_id', 'service_name', 'client_name',
            'description', 'character_count', 'alternative_count', 'pose_count',
            'is_nsfw', 'references', 'total_price', 'complexity', 'status',
            'commission_id', 'requested_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_commission_id(self, obj):
        commission = getattr(obj, 'commission', None)
        return commission.id if commission else None


class AcceptRequestSerializer(serializers.Serializer):
    expected_completion_date = serializers.DateField(required=False, allow_null=True, default=None)
    progress = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class PendingRequestCardSerializer(serializers.ModelSerializer):
    """Requested column card with the full request, for signed-in viewers."""

    client_name = serializers.CharField(source='user.username', read_only=True)
    service_name = serializers.CharField(source='service.name', read_only=True)
    estimated_complexity = serializers.CharField(read_only=True)

    class Meta:
        model = CommissionRequest
        fields = [
            'id', 'service_name', 'client_name', 'description',
            'character_count', 'alternative_count', 'pose_count',
            'is_nsfw', 'total_price', 'complexity', 'estimated_complexity',
            'status', 'requested_at',
        ]
        read_only_fields = fields


class PendingRequestPublicSerializer(serializers.ModelSerializer):
    """Requested column card for anonymous viewers."""

    complexity = serializers.CharField(source='estimated_complexity', read_only=True)

    class Meta:
        model = CommissionRequest
        fields = [
            'id', 'requested_at',
            'character_count', 'alternative_count', 'pose_count',
            'complexity',
        ]
        read_only_fields = fields


# === Commissions ===

class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ['id', 'name']


class CommissionUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = CommissionUpdate
        fields = ['id', 'title', 'description', 'image_path', 'video_path', 'created_at']
        read_only_fields = fields


class CommissionListSerializer(serializers.ModelSerializer):
    """Full queue row for signed-in viewers."""

    request_id = serializers.IntegerField(read_only=True)
    service_name = serializers.CharField(source='request.service.name', read_only=True)
    client_name = serializers.CharField(source='request.user.username', read_only=True)
    description = serializers.CharField(source='request.description', read_only=True)
    character_count = serializers.IntegerField(source='request.character_count', read_only=True)
    alternative_count = serializers.IntegerField(source='request.alternative_count', read_only=True)
    pose_count = serializers.IntegerField(source='request.pose_count', read_only=True)
    is_nsfw = serializers.BooleanField(source='request.is_nsfw', read_only=True)
    total_price = serializers.DecimalField(
        source='request.total_price', max_digits=10, decimal_places=2, read_only=True
    )
    tags = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    latest_update = serializers.CharField(source='latest_update_image', read_only=True, default=None)

    class Meta:
        model = Commission
        fields = [
            'id', 'request_id', 'status', 'progress', 'complexity',
            'expected_completion_date', 'actual_completion_date', 'is_public_work',
            'service_name', 'client_name', 'description',
            'character_count', 'alternative_count', 'pose_count',
            'is_nsfw', 'total_price', 'tags', 'latest_update',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class CommissionPublicSerializer(serializers.ModelSerializer):
    """
    Queue row for anonymous viewers.

    No client, price or description; the latest update image is only shown
    for work the artist marked as public.
    """

    character_count = serializers.IntegerField(source='request.character_count', read_only=True)
    alternative_count = serializers.IntegerField(source='request.alternative_count', read_only=True)
    pose_count = serializers.IntegerField(source='request.pose_count', read_only=True)
    latest_update = serializers.SerializerMethodField()

    class Meta:
        model = Commission
        fields = [
            'id', 'status', 'progress', 'complexity',
            'character_count', 'alternative_count', 'pose_count',
            'latest_update',
        ]
        read_only_fields = fields

    def get_latest_update(self, obj):
        if not obj.is_public_work:
            return None
        return getattr(obj, 'latest_update_image', None)


class CommissionLimitedDetailSerializer(serializers.ModelSerializer):
    """Detail of non-public work for anonymous viewers: no updates or references."""

    character_count = serializers.IntegerField(source='request.character_count', read_only=True)
    alternative_count = serializers.IntegerField(source='request.alternative_count', read_only=True)
    pose_count = serializers.IntegerField(source='request.pose_count', read_only=True)
    is_nsfw = serializers.BooleanField(source='request.is_nsfw', read_only=True)

    class Meta:
        model = Commission
        fields = [
            'id', 'status', 'progress', 'complexity',
            'character_count', 'alternative_count', 'pose_count',
            'is_nsfw', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class CommissionDetailSerializer(serializers.ModelSerializer):
    """
    Full commission detail with its update log and tags.

    The client's email is only included for the owner and the operator;
    pass the viewing user as ``context['viewer']``.
    """

    request_id = serializers.IntegerField(read_only=True)
    service_name = serializers.CharField(source='request.service.name', read_only=True)
    client_name = serializers.CharField(source='request.user.username', read_only=True)
    description = serializers.CharField(source='request.description', read_only=True)
    character_count = serializers.IntegerField(source='request.character_count', read_only=True)
    alternative_count = serializers.IntegerField(source='request.alternative_count', read_only=True)
    pose_count = serializers.IntegerField(source='request.pose_count', read_only=True)
    references = serializers.JSONField(source='request.references', read_only=True)
    is_nsfw = serializers.BooleanField(source='request.is_nsfw', read_only=True)
    total_price = serializers.DecimalField(
        source='request.total_price', max_digits=10, decimal_places=2, read_only=True
    )
    tags = TagSerializer(many=True, read_only=True)
    updates = CommissionUpdateSerializer(many=True, read_only=True)
    is_owner = serializers.SerializerMethodField()

    class Meta:
        model = Commission
        fields = [
            'id', 'request_id', 'status', 'progress', 'complexity',
            'expected_completion_date', 'actual_completion_date', 'is_public_work',
            'service_name', 'client_name', 'description',
            'character_count', 'alternative_count', 'pose_count', 'references',
            'is_nsfw', 'total_price', 'tags', 'updates', 'is_owner',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def _viewer(self):
        viewer = self.context.get('viewer')
        if viewer is not None and viewer.is_authenticated:
            return viewer
        return None

    def get_is_owner(self, obj):
        viewer = self._viewer()
        return viewer is not None and obj.request.user_id == viewer.id

    def to_representation(self, instance):
        data = super().to_representation(instance)
        viewer = self._viewer()
        if viewer is not None and (data['is_owner'] or viewer.is_operator):
            data['client_email'] = instance.request.user.email
        return data


class CommissionPatchSerializer(serializers.Serializer):
    """Operator changes to a commission; every field is optional."""

    status = serializers.ChoiceField(choices=CommissionStatus.choices, required=False)
    progress = serializers.CharField(max_length=100, required=False, allow_blank=True)
    expected_completion_date = serializers.DateField(required=False, allow_null=True)
    is_public_work = serializers.BooleanField(required=False)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
    )


class CommissionUpdateCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    image = serializers.FileField(required=False, allow_null=True, default=None)


# === Profile ===

class ProfileCommissionSerializer(serializers.ModelSerializer):
    """A client's commission as listed on their profile."""

    request_id = serializers.IntegerField(read_only=True)
    service_name = serializers.CharField(source='request.service.name', read_only=True)
    description = serializers.CharField(source='request.description', read_only=True)
    character_count = serializers.IntegerField(source='request.character_count', read_only=True)
    alternative_count = serializers.IntegerField(source='request.alternative_count', read_only=True)
    pose_count = serializers.IntegerField(source='request.pose_count', read_only=True)
    total_price = serializers.DecimalField(
        source='request.total_price', max_digits=10, decimal_places=2, read_only=True
    )
    latest_update = serializers.CharField(source='latest_update_image', read_only=True, default=None)

    class Meta:
        model = Commission
        fields = [
            'id', 'request_id', 'status', 'progress', 'complexity',
            'expected_completion_date', 'actual_completion_date',
            'service_name', 'description',
            'character_count', 'alternative_count', 'pose_count',
            'total_price', 'latest_update', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
