# ==========================================
# apps/catalog/models.py
# ==========================================

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal

from .pricing import FormulaError, OptionSpec, parse_formula


class Service(models.Model):
    """A kind of commission the artist offers (e.g. a character illustration)."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'services'
        ordering = ['name']

    def __str__(self):
        return self.name

    def active_options(self):
        return self.options.filter(is_active=True)


def validate_price_formula(value):
    try:
        parse_formula(value)
    except FormulaError as e:
        raise ValidationError(f'Invalid price formula: {e}')


class ServiceOption(models.Model):
    """
    Priced add-on of a service.

    The price formula is evaluated with ``[value]`` bound to the client's
    selection, clamped to ``[min_value, max_value]``.
    """

    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name='options')
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price_formula = models.CharField(
        max_length=200,
        blank=True,
        validators=[validate_price_formula],
        help_text='Arithmetic over [value], e.g. "+3+([value]*2)"',
    )
    min_value = models.IntegerField(default=0)
    max_value = models.IntegerField(default=10)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'service_options'
        ordering = ['service', 'id']
        unique_together = [['service', 'name']]

    def __str__(self):
        return f"{self.service.name} - {self.name}"

    def clean(self):
        if self.min_value > self.max_value:
            raise ValidationError({'max_value': 'Maximum must not be lower than minimum'})

    def as_spec(self) -> OptionSpec:
        return OptionSpec(
            id=self.id,
            name=self.name,
            price_formula=self.price_formula,
            min_value=self.min_value,
            max_value=self.max_value,
        )
