from django.contrib import admin
from .models import Service, ServiceOption


class ServiceOptionInline(admin.TabularInline):
    model = ServiceOption
    extra = 1
    fields = ['name', 'price_formula', 'min_value', 'max_value', 'is_active']


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """Admin interface for Services."""

    list_display = ['name', 'base_price', 'option_count', 'is_active', 'updated_at']
    list_filter = ['is_active']
    search_fields = ['name', 'description']
    ordering = ['name']
    inlines = [ServiceOptionInline]

    def option_count(self, obj):
        """Show how many options the service has."""
        return obj.options.count()
    option_count.short_description = 'Options'


@admin.register(ServiceOption)
class ServiceOptionAdmin(admin.ModelAdmin):
    """Admin interface for Service Options."""

    list_display = ['name', 'service', 'price_formula', 'min_value', 'max_value', 'is_active']
    list_filter = ['service', 'is_active']
    search_fields = ['name', 'service__name']

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('service')
