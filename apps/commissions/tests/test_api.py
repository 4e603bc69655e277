import json

import pytest
from django.core import mail
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import User
from apps.commissions.models import Commission, CommissionRequest, CommissionUpdate


def image_file(name='ref.png', size=16):
    return SimpleUploadedFile(name, b'x' * size, content_type='image/png')


# =============================================================================
# Request Submission Tests
# =============================================================================

@pytest.mark.django_db
class TestSubmitRequest:
    """Tests for POST /api/requests/"""

    def test_submit_authenticated(
        self, authenticated_client, client_user, service, media_root,
        artist_email, django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = authenticated_client.post(reverse('requests:submit'), {
                'service_id': service.id,
                'description': 'Two knights',
                'character_count': 2,
                'alternative_count': 0,
                'pose_count': 1,
                'references': [image_file('a.png'), image_file('b.jpg')],
            }, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['tokens'] is None

        commission_request = CommissionRequest.objects.get(id=response.data['request_id'])
        assert commission_request.user == client_user
        assert commission_request.status == 'Requested'
        assert commission_request.total_price == 40
        assert commission_request.complexity == 'Low'
        assert len(commission_request.references) == 2
        assert all(path.startswith('/uploads/references/') for path in commission_request.references)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [artist_email]
        assert mail.outbox[0].subject == 'New Commission Request Received'

    def test_submit_with_option_selections(self, authenticated_client, service, character_option):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'Group shot',
            'options': json.dumps([{'option_id': character_option.id, 'value': 5}]),
        }, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_price'] == 48
        assert response.data['complexity'] == 'Mid'

    def test_client_sent_price_is_ignored(self, authenticated_client, service):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'Cheap please',
            'total_price': '1.00',
        }, format='multipart')

        commission_request = CommissionRequest.objects.get(id=response.data['request_id'])
        assert commission_request.total_price == 35

    def test_vip_gets_discount(self, vip_client, service):
        response = vip_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'VIP piece',
            'character_count': 3,
        }, format='json')

        commission_request = CommissionRequest.objects.get(id=response.data['request_id'])
        # 35 + 3 + 4 = 42, minus 25%
        assert commission_request.total_price == 31.5
        assert commission_request.complexity == 'Low'

    def test_submit_anonymous_registers_account(self, api_client, service):
        response = api_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'First commission',
            'username': 'newclient',
            'password': 'SecurePass123!',
            'email': 'newclient@example.com',
        }, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']

        new_user = User.objects.get(username='newclient')
        assert CommissionRequest.objects.get(id=response.data['request_id']).user == new_user

    def test_submit_anonymous_without_account_details(self, api_client, service):
        response = api_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'Who am I',
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Username, password, and email are required for new users'
        assert not CommissionRequest.objects.exists()

    def test_submit_anonymous_taken_username(self, api_client, service, client_user):
        response = api_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'Sneaky',
            'username': client_user.username,
            'password': 'SecurePass123!',
            'email': 'fresh@example.com',
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['is_username_taken'] is True
        assert not CommissionRequest.objects.exists()

    def test_submit_unknown_service(self, authenticated_client, db):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': 9999,
            'description': 'Nothing',
        }, format='multipart')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_submit_rejects_non_image_reference(self, authenticated_client, service, media_root):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'With a document',
            'references': [SimpleUploadedFile('notes.pdf', b'%PDF', content_type='application/pdf')],
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Only image files are allowed!'

    def test_submit_too_many_references(self, authenticated_client, service, media_root):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': service.id,
            'description': 'Lots of refs',
            'references': [image_file(f'{i}.png') for i in range(11)],
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_requires_description(self, authenticated_client, service):
        response = authenticated_client.post(reverse('requests:submit'), {
            'service_id': service.id,
        }, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Request Read Tests
# =============================================================================

@pytest.mark.django_db
class TestRequestRead:

    def test_my_requests(self, authenticated_client, pending_request, nsfw_request):
        response = authenticated_client.get(reverse('requests:my-requests'))

        assert response.status_code == status.HTTP_200_OK
        assert [r['id'] for r in response.data] == [nsfw_request.id, pending_request.id]

    def test_my_requests_only_own(self, other_client_api, pending_request):
        response = other_client_api.get(reverse('requests:my-requests'))

        assert response.data == []

    def test_my_requests_unauthenticated(self, api_client):
        response = api_client.get(reverse('requests:my-requests'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_request_detail_owner(self, authenticated_client, commission):
        response = authenticated_client.get(
            reverse('requests:request-detail', args=[commission.request_id])
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['references'] == ['/uploads/references/reference-abc.png']
        assert response.data['commission_id'] == commission.id

    def test_request_detail_operator(self, operator_client, pending_request):
        response = operator_client.get(reverse('requests:request-detail', args=[pending_request.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['commission_id'] is None

    def test_request_detail_other_user(self, other_client_api, pending_request):
        response = other_client_api.get(reverse('requests:request-detail', args=[pending_request.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_request_detail_not_found(self, authenticated_client):
        response = authenticated_client.get(reverse('requests:request-detail', args=[9999]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Accept / Decline Tests
# =============================================================================

@pytest.mark.django_db
class TestRequestDecision:

    def test_accept(self, operator_client, pending_request, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = operator_client.post(
                reverse('requests:accept', args=[pending_request.id]),
                {'expected_completion_date': '2030-01-15'},
                format='json',
            )

        assert response.status_code == status.HTTP_201_CREATED
        commission = Commission.objects.get(request=pending_request)
        assert commission.status == 'Accepted'
        assert commission.complexity == pending_request.complexity
        assert str(commission.expected_completion_date) == '2030-01-15'

        pending_request.refresh_from_db()
        assert pending_request.status == 'Accepted'

        assert mail.outbox[0].to == [pending_request.user.email]
        assert mail.outbox[0].subject == 'Commission Update: Accepted'

    def test_accept_twice(self, operator_client, pending_request):
        operator_client.post(reverse('requests:accept', args=[pending_request.id]))

        response = operator_client.post(reverse('requests:accept', args=[pending_request.id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Commission.objects.filter(request=pending_request).count() == 1

    def test_accept_requires_operator(self, authenticated_client, pending_request):
        response = authenticated_client.post(reverse('requests:accept', args=[pending_request.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Commission.objects.exists()

    def test_accept_unauthenticated(self, api_client, pending_request):
        response = api_client.post(reverse('requests:accept', args=[pending_request.id]))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_accept_not_found(self, operator_client):
        response = operator_client.post(reverse('requests:accept', args=[9999]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_decline(self, operator_client, pending_request):
        response = operator_client.post(reverse('requests:decline', args=[pending_request.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'Declined'
        assert not Commission.objects.exists()

    def test_decline_accepted_request(self, operator_client, commission):
        response = operator_client.post(reverse('requests:decline', args=[commission.request_id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Commission List / Kanban Tests
# =============================================================================

@pytest.mark.django_db
class TestCommissionList:
    """Tests for GET /api/commissions/"""

    def test_anonymous_never_sees_private_nsfw(
        self, api_client, commission, nsfw_commission, public_nsfw_commission,
    ):
        response = api_client.get(reverse('commissions:commission-list'))

        ids = {row['id'] for row in response.data}
        assert ids == {commission.id, public_nsfw_commission.id}

    def test_anonymous_gets_limited_fields(self, api_client, commission, commission_update):
        response = api_client.get(reverse('commissions:commission-list'))

        row = response.data[0]
        assert 'client_name' not in row
        assert 'total_price' not in row
        assert 'description' not in row
        # Not public work: no preview image
        assert row['latest_update'] is None

    def test_anonymous_sees_preview_of_public_work(self, api_client, commission, commission_update):
        commission.is_public_work = True
        commission.save()

        response = api_client.get(reverse('commissions:commission-list'))

        assert response.data[0]['latest_update'] == commission_update.image_path

    def test_authenticated_sees_everything(
        self, other_client_api, commission, nsfw_commission, commission_update,
    ):
        response = other_client_api.get(reverse('commissions:commission-list'))

        assert len(response.data) == 2
        row = next(r for r in response.data if r['id'] == commission.id)
        assert row['client_name'] == 'client'
        assert row['latest_update'] == commission_update.image_path

    def test_status_filter(self, other_client_api, commission, public_nsfw_commission):
        response = other_client_api.get(reverse('commissions:commission-list'), {'status': 'Finished'})

        assert [r['id'] for r in response.data] == [public_nsfw_commission.id]


@pytest.mark.django_db
class TestKanban:
    """Tests for GET /api/commissions/kanban/"""

    def test_columns(self, api_client, db):
        response = api_client.get(reverse('commissions:kanban'))

        assert response.status_code == status.HTTP_200_OK
        assert list(response.data.keys()) == ['Requested', 'Accepted', 'Working', 'Waiting', 'Finished']

    def test_anonymous_board(
        self, api_client, pending_request, nsfw_request, commission, nsfw_commission,
    ):
        response = api_client.get(reverse('commissions:kanban'))

        requested = response.data['Requested']
        assert [card['id'] for card in requested] == [pending_request.id]
        assert 'description' not in requested[0]
        # 2 characters: 35 + 3 + 2 = 40
        assert requested[0]['complexity'] == 'Low'
        assert [card['id'] for card in response.data['Working']] == [commission.id]

    def test_authenticated_board(self, other_client_api, pending_request, nsfw_request, nsfw_commission):
        response = other_client_api.get(reverse('commissions:kanban'))

        assert {card['id'] for card in response.data['Requested']} == {pending_request.id, nsfw_request.id}
        assert response.data['Requested'][0]['client_name'] == 'client'
        assert [card['id'] for card in response.data['Working']] == [nsfw_commission.id]

    def test_declined_requests_not_on_board(self, api_client, pending_request):
        pending_request.status = 'Declined'
        pending_request.save()

        response = api_client.get(reverse('commissions:kanban'))

        assert response.data['Requested'] == []


# =============================================================================
# Commission Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestCommissionDetail:
    """Tests for GET /api/commissions/{id}/"""

    def test_owner_sees_full_detail(self, authenticated_client, commission, commission_update):
        response = authenticated_client.get(reverse('commissions:commission-detail', args=[commission.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_owner'] is True
        assert response.data['client_email'] == 'client@example.com'
        assert response.data['references'] == ['/uploads/references/reference-abc.png']
        assert [u['id'] for u in response.data['updates']] == [commission_update.id]

    def test_other_user_no_email(self, other_client_api, commission):
        response = other_client_api.get(reverse('commissions:commission-detail', args=[commission.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_owner'] is False
        assert 'client_email' not in response.data

    def test_operator_sees_email(self, operator_client, commission):
        response = operator_client.get(reverse('commissions:commission-detail', args=[commission.id]))

        assert response.data['client_email'] == 'client@example.com'

    def test_anonymous_private_nsfw_forbidden(self, api_client, nsfw_commission):
        response = api_client.get(reverse('commissions:commission-detail', args=[nsfw_commission.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['is_nsfw'] is True

    def test_anonymous_public_nsfw_allowed(self, api_client, public_nsfw_commission):
        response = api_client.get(
            reverse('commissions:commission-detail', args=[public_nsfw_commission.id])
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'updates' in response.data
        assert 'client_email' not in response.data

    def test_anonymous_non_public_limited(self, api_client, commission, commission_update):
        response = api_client.get(reverse('commissions:commission-detail', args=[commission.id]))

        assert response.status_code == status.HTTP_200_OK
        assert 'updates' not in response.data
        assert 'references' not in response.data
        assert response.data['status'] == 'Working'

    def test_not_found(self, api_client, db):
        response = api_client.get(reverse('commissions:commission-detail', args=[9999]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Commission Update (PATCH) Tests
# =============================================================================

@pytest.mark.django_db
class TestCommissionPatch:
    """Tests for PATCH /api/commissions/{id}/"""

    def test_move_to_waiting(self, operator_client, commission, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = operator_client.patch(
                reverse('commissions:commission-detail', args=[commission.id]),
                {'status': 'Waiting', 'progress': 'Waiting on feedback'},
                format='json',
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'Waiting'

        commission.refresh_from_db()
        assert commission.request.status == 'Waiting'
        assert mail.outbox[0].subject == 'Commission Update: Waiting'

    def test_finish_stamps_completion_date(self, operator_client, commission):
        response = operator_client.patch(
            reverse('commissions:commission-detail', args=[commission.id]),
            {'status': 'Finished'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['actual_completion_date'] is not None

    def test_invalid_transition(self, operator_client, commission):
        response = operator_client.patch(
            reverse('commissions:commission-detail', args=[commission.id]),
            {'status': 'Accepted'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        commission.refresh_from_db()
        assert commission.status == 'Working'

    def test_tags_and_visibility(self, operator_client, commission):
        response = operator_client.patch(
            reverse('commissions:commission-detail', args=[commission.id]),
            {'tags': ['Fantasy', 'Portrait'], 'is_public_work': True},
            format='json',
        )

        assert sorted(tag['name'] for tag in response.data['tags']) == ['Fantasy', 'Portrait']
        assert response.data['is_public_work'] is True

    def test_client_cannot_patch(self, authenticated_client, commission):
        response = authenticated_client.patch(
            reverse('commissions:commission-detail', args=[commission.id]),
            {'status': 'Finished'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_cannot_patch(self, api_client, commission):
        response = api_client.patch(
            reverse('commissions:commission-detail', args=[commission.id]),
            {'status': 'Finished'},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        commission.refresh_from_db()
        assert commission.status == 'Working'


# =============================================================================
# Commission Update Log Tests
# =============================================================================

@pytest.mark.django_db
class TestCommissionUpdates:
    """Tests for /api/commissions/{id}/updates/"""

    def test_post_image_update(
        self, operator_client, commission, media_root, django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = operator_client.post(
                reverse('commissions:commission-updates', args=[commission.id]),
                {'title': 'Colors', 'description': 'Flat colors done', 'image': image_file('colors.png')},
                format='multipart',
            )

        assert response.status_code == status.HTTP_201_CREATED
        update = CommissionUpdate.objects.get(id=response.data['update_id'])
        assert update.image_path.startswith(f'/uploads/commissions/commission-{commission.id}-')
        assert update.video_path == ''
        assert len(mail.outbox) == 1

    def test_post_video_update(self, operator_client, commission, media_root):
        video = SimpleUploadedFile('timelapse.mp4', b'\x00' * 32, content_type='video/mp4')

        response = operator_client.post(
            reverse('commissions:commission-updates', args=[commission.id]),
            {'title': 'Timelapse', 'image': video},
            format='multipart',
        )

        update = CommissionUpdate.objects.get(id=response.data['update_id'])
        assert update.video_path.endswith('.mp4')
        assert update.image_path == ''

    def test_post_text_only_update(self, operator_client, commission):
        response = operator_client.post(
            reverse('commissions:commission-updates', args=[commission.id]),
            {'title': 'Started', 'description': 'Work begins'},
            format='multipart',
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_post_rejects_other_files(self, operator_client, commission, media_root):
        response = operator_client.post(
            reverse('commissions:commission-updates', args=[commission.id]),
            {'title': 'Oops', 'image': SimpleUploadedFile('x.exe', b'MZ')},
            format='multipart',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Only image and video files are allowed!'

    def test_client_cannot_post(self, authenticated_client, commission):
        response = authenticated_client.post(
            reverse('commissions:commission-updates', args=[commission.id]),
            {'title': 'Hacked'},
            format='multipart',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not CommissionUpdate.objects.exists()

    def test_post_unknown_commission(self, operator_client, db):
        response = operator_client.post(
            reverse('commissions:commission-updates', args=[9999]),
            {'title': 'Lost'},
            format='multipart',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_updates(self, authenticated_client, commission, commission_update):
        response = authenticated_client.get(reverse('commissions:commission-updates', args=[commission.id]))

        assert response.status_code == status.HTTP_200_OK
        assert [u['title'] for u in response.data] == ['Sketch']

    def test_list_updates_anonymous_private_nsfw(self, api_client, nsfw_commission):
        response = api_client.get(reverse('commissions:commission-updates', args=[nsfw_commission.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_updates_anonymous_non_public(self, api_client, commission, commission_update):
        response = api_client.get(reverse('commissions:commission-updates', args=[commission.id]))

        assert response.data == []


# =============================================================================
# Profile Commission Tests
# =============================================================================

@pytest.mark.django_db
class TestProfileCommissions:

    def test_profile_lists_own_commissions(
        self, authenticated_client, commission, commission_update, nsfw_commission,
    ):
        response = authenticated_client.get(reverse('users:profile'))

        assert response.status_code == status.HTTP_200_OK
        rows = {row['id']: row for row in response.data['commissions']}
        assert set(rows) == {commission.id, nsfw_commission.id}
        assert rows[commission.id]['latest_update'] == commission_update.image_path
        assert rows[nsfw_commission.id]['latest_update'] is None
