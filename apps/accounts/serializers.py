from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for session and profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'is_vip',
            'is_staff',
        ]
        read_only_fields = fields


class UserProfileSerializer(serializers.ModelSerializer):
    """Full profile of the current user."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'profile_picture',
            'banner',
            'description',
            'is_vip',
            'created_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    username = serializers.CharField(max_length=50)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """Serializer for profile updates."""

    username = serializers.CharField(max_length=50)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProfilePictureSerializer(serializers.Serializer):
    profile_picture = serializers.FileField()


class BannerSerializer(serializers.Serializer):
    banner = serializers.FileField()
