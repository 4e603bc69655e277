# ==========================================
# apps/commissions/admin.py
# ==========================================

from django import forms
from django.contrib import admin, messages
from django.utils.html import format_html

from .models import Commission, CommissionRequest, CommissionUpdate, RequestStatus, Tag
from .services import (
    accept_request,
    decline_request,
    update_commission,
    InvalidRequestStateError,
)

STATUS_COLORS = {
    'Requested': '#8C8C8C',
    'Declined': '#B85C5C',
    'Accepted': '#5E7E8E',
    'Working': '#A47449',
    'Waiting': '#C9A227',
    'Finished': '#6B8E5E',
}


def status_badge(status):
    return format_html(
        '<span style="background: {}; color: white; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        STATUS_COLORS.get(status, '#8C8C8C'),
        status,
    )


@admin.register(CommissionRequest)
class CommissionRequestAdmin(admin.ModelAdmin):
    """
    Admin interface for commission requests.

    The accept / decline actions go through the service layer so the
    commission is created and the client is notified the same way as via
    the API.
    """

    list_display = [
        'id',
        'user',
        'service',
        'status_badge',
        'total_price',
        'complexity',
        'is_nsfw',
        'requested_at',
    ]
    list_filter = ['status', 'complexity', 'is_nsfw', 'service']
    search_fields = ['user__username', 'user__email', 'description']
    ordering = ['-requested_at']
    date_hierarchy = 'requested_at'
    readonly_fields = ['total_price', 'complexity', 'references', 'requested_at', 'updated_at']

    actions = ['accept_requests', 'decline_requests']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'service')

    def status_badge(self, obj):
        return status_badge(obj.status)
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def _handle(self, request, queryset, handler, verb):
        done = 0
        for commission_request in queryset.filter(status=RequestStatus.REQUESTED):
            try:
                handler(request_id=commission_request.pk)
            except InvalidRequestStateError as e:
                self.message_user(request, str(e), level=messages.WARNING)
                continue
            done += 1
        skipped = queryset.count() - done
        msg = f'{verb} {done} request(s).'
        if skipped:
            msg += f' Skipped {skipped} already handled.'
        self.message_user(request, msg)

    @admin.action(description='Accept selected requests')
    def accept_requests(self, request, queryset):
        self._handle(request, queryset, accept_request, 'Accepted')

    @admin.action(description='Decline selected requests')
    def decline_requests(self, request, queryset):
        self._handle(request, queryset, decline_request, 'Declined')


class CommissionUpdateInline(admin.StackedInline):
    model = CommissionUpdate
    extra = 0
    fields = ['title', 'description', 'image_path', 'video_path', 'created_at']
    readonly_fields = ['created_at']


class CommissionAdminForm(forms.ModelForm):
    """Rejects status changes that skip a pipeline step."""

    class Meta:
        model = Commission
        fields = '__all__'

    def clean_status(self):
        status = self.cleaned_data['status']
        current = self.instance.status
        if self.instance.pk and status != current and not self.instance.can_transition_to(status):
            raise forms.ValidationError(f'Cannot move commission from {current} to {status}')
        return status


@admin.register(Commission)
class CommissionAdmin(admin.ModelAdmin):
    """Admin interface for Commissions."""

    list_display = [
        'id',
        'client_name',
        'service_name',
        'status_badge',
        'progress',
        'complexity',
        'is_public_work',
        'expected_completion_date',
        'updated_at',
    ]
    list_filter = ['status', 'complexity', 'is_public_work', 'tags']
    search_fields = ['request__user__username', 'request__description', 'progress']
    ordering = ['-updated_at']
    filter_horizontal = ['tags']
    form = CommissionAdminForm
    readonly_fields = ['request', 'complexity', 'actual_completion_date', 'created_at', 'updated_at']
    inlines = [CommissionUpdateInline]

    def has_add_permission(self, request):
        # Commissions are opened by accepting a request
        return False

    def save_model(self, request, obj, form, change):
        """Route status changes through the service so the request follows and the client is notified."""
        if change and 'status' in form.changed_data:
            new_status = obj.status
            obj.status = form.initial['status']
            super().save_model(request, obj, form, change)
            update_commission(commission_id=obj.pk, status=new_status)
            obj.refresh_from_db()
        else:
            super().save_model(request, obj, form, change)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('request__user', 'request__service')

    def client_name(self, obj):
        return obj.request.user.username
    client_name.short_description = 'Client'
    client_name.admin_order_field = 'request__user__username'

    def service_name(self, obj):
        return obj.request.service.name
    service_name.short_description = 'Service'

    def status_badge(self, obj):
        return status_badge(obj.status)
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ['name', 'commission_count', 'created_at']
    search_fields = ['name']

    def commission_count(self, obj):
        return obj.commissions.count()
    commission_count.short_description = 'Commissions'
