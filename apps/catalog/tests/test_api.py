import pytest
from django.urls import reverse
from rest_framework import status

from apps.catalog.models import ServiceOption


# =============================================================================
# Service Listing Tests
# =============================================================================

@pytest.mark.django_db
class TestServiceList:
    """Tests for GET /api/services/"""

    def test_list_active_services(self, api_client, service, character_option, inactive_service):
        response = api_client.get(reverse('services:service-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [s['name'] for s in response.data] == ['Character Illustration']
        assert response.data[0]['options'][0]['price_formula'] == '+3+([value]*2)'

    def test_inactive_options_hidden(self, api_client, service, character_option, inactive_option):
        response = api_client.get(reverse('services:service-list'))

        names = [option['name'] for option in response.data[0]['options']]
        assert names == ['Characters']


@pytest.mark.django_db
class TestServiceDetail:
    """Tests for GET /api/services/{id}/"""

    def test_get_service(self, api_client, service, character_option):
        response = api_client.get(reverse('services:service-detail', args=[service.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['base_price'] == '35.00'
        assert len(response.data['options']) == 1

    def test_inactive_service_not_found(self, api_client, inactive_service):
        response = api_client.get(reverse('services:service-detail', args=[inactive_service.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_service(self, api_client, db):
        response = api_client.get(reverse('services:service-detail', args=[9999]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data


# =============================================================================
# Price Calculation Tests
# =============================================================================

@pytest.mark.django_db
class TestCalculatePrice:
    """Tests for POST /api/services/calculate-price/"""

    def test_low_complexity(self, api_client, service, character_option):
        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': character_option.id, 'value': 1}],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_price'] == '40.00'
        assert response.data['complexity'] == 'Low'

    def test_mid_complexity(self, api_client, service, character_option):
        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': character_option.id, 'value': 5}],
        }, format='json')

        assert response.data['total_price'] == '48.00'
        assert response.data['complexity'] == 'Mid'
        assert response.data['line_items'][0]['amount'] == '13.00'

    def test_clamps_out_of_range(self, api_client, service, character_option):
        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': character_option.id, 'value': 500}],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['line_items'][0]['value'] == 10

    def test_oversized_formula_is_skipped(self, api_client, service):
        huge = ServiceOption.objects.create(
            service=service,
            name='Huge',
            price_formula='[value]*[value]*[value]*[value]*[value]',
            min_value=0,
            max_value=1000,
        )

        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': huge.id, 'value': 1000}],
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_price'] == '35.00'
        assert response.data['line_items'] == []

    def test_vip_discount(self, vip_client, service, character_option):
        response = vip_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': character_option.id, 'value': 5}],
        }, format='json')

        assert response.data['subtotal'] == '48.00'
        assert response.data['discount'] == '12.00'
        assert response.data['total_price'] == '36.00'
        assert response.data['complexity'] == 'Mid'

    def test_regular_client_no_discount(self, authenticated_client, service, character_option):
        response = authenticated_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': character_option.id, 'value': 5}],
        }, format='json')

        assert response.data['discount'] == '0.00'

    def test_invalid_token_is_anonymous(self, api_client, service):
        """A stale token doesn't block the public calculator."""
        api_client.credentials(HTTP_AUTHORIZATION='Bearer stale-token')

        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_price'] == '35.00'

    def test_missing_service_id(self, api_client, db):
        response = api_client.post(reverse('services:calculate-price'), {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Service ID is required'

    def test_unknown_service(self, api_client, db):
        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': 9999,
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_inactive_option_ignored(self, api_client, service, inactive_option):
        response = api_client.post(reverse('services:calculate-price'), {
            'service_id': service.id,
            'options': [{'option_id': inactive_option.id, 'value': 1}],
        }, format='json')

        assert response.data['total_price'] == '35.00'


# =============================================================================
# Terms of Service Tests
# =============================================================================

@pytest.mark.django_db
class TestTermsOfService:

    def test_terms(self, api_client):
        response = api_client.get(reverse('services:terms-of-service'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Commission Terms of Service'
        assert len(response.data['sections']) > 0
