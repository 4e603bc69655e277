from rest_framework import serializers
from .models import Service, ServiceOption


class ServiceOptionSerializer(serializers.ModelSerializer):
    """Serializer for service options."""

    class Meta:
        model = ServiceOption
        fields = ['id', 'name', 'description', 'price_formula', 'min_value', 'max_value']
        read_only_fields = fields


class ServiceSerializer(serializers.ModelSerializer):
    """Service with its active options."""

    options = serializers.SerializerMethodField()

    class Meta:
        model = Service
        fields = ['id', 'name', 'description', 'base_price', 'options']
        read_only_fields = fields

    def get_options(self, obj):
        options = getattr(obj, 'active_option_list', None)
        if options is None:
            options = obj.active_options()
        return ServiceOptionSerializer(options, many=True).data


class OptionSelectionSerializer(serializers.Serializer):
    option_id = serializers.IntegerField()
    value = serializers.IntegerField()


class PriceRequestSerializer(serializers.Serializer):
    """Input for a price calculation."""

    service_id = serializers.IntegerField()
    options = OptionSelectionSerializer(many=True, required=False, default=list)


class LineItemSerializer(serializers.Serializer):
    option_id = serializers.IntegerField()
    name = serializers.CharField()
    value = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceQuoteSerializer(serializers.Serializer):
    """Output of a price calculation."""

    base_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    complexity = serializers.CharField()
    line_items = LineItemSerializer(many=True)


class TermsSectionSerializer(serializers.Serializer):
    title = serializers.CharField()
    items = serializers.ListField(child=serializers.CharField())


class TermsOfServiceSerializer(serializers.Serializer):
    title = serializers.CharField()
    last_updated = serializers.CharField()
    sections = TermsSectionSerializer(many=True)
