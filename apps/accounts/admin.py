# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Provides client management for the operator:
    - User listing with key fields
    - Filtering by VIP and staff status
    - Search by username and email
    - Bulk actions for VIP status and activation
    """

    list_display = [
        'username',
        'email',
        'is_active_badge',
        'is_vip_badge',
        'is_staff',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_vip',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'username',
        'email',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('username', 'email', 'password')
        }),
        ('Profile', {
            'fields': ('description', 'profile_picture', 'banner'),
        }),
        ('Pricing', {
            'fields': ('is_vip',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_vip', 'is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def is_vip_badge(self, obj):
        if obj.is_vip:
            return format_html(
                '<span style="background: #A47449; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">VIP</span>'
            )
        return '-'
    is_vip_badge.short_description = 'VIP'
    is_vip_badge.admin_order_field = 'is_vip'

    actions = [
        'grant_vip',
        'revoke_vip',
        'activate_users',
        'deactivate_users',
    ]

    @admin.action(description='Grant VIP discount')
    def grant_vip(self, request, queryset):
        count = queryset.update(is_vip=True)
        self.message_user(request, f'Granted VIP to {count} user(s).')

    @admin.action(description='Revoke VIP discount')
    def revoke_vip(self, request, queryset):
        count = queryset.update(is_vip=False)
        self.message_user(request, f'Revoked VIP from {count} user(s).')

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)
