"""
Tests for the JSON HTTP routes through the Flask test client.
"""

from datetime import date, timedelta

import pytest


def days_from_today(n):
    return (date.today() + timedelta(days=n)).isoformat()


def create_reservation(client, listing_id, space=10, start='2026-03-01', end='2026-03-03', **extra):
    body = {'listing_id': listing_id, 'space_requested': space, 'start_date': start, 'end_date': end}
    body.update(extra)
    return client.post('/market/reservations', json=body)


class TestHealthAndErrors:

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['database'] == 'ok'
        assert data['app'] == 'SpaceShare'

    def test_unauthenticated_api_gets_401_json(self, client):
        response = client.get('/market/reservations')
        assert response.status_code == 401
        assert response.get_json()['code'] == 'unauthorized'

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/nope')
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_wrong_method_is_json_405(self, client):
        response = client.put('/api/health')
        assert response.status_code == 405
        assert response.get_json()['code'] == 'method_not_allowed'


class TestAuth:

    def test_register_login_me_logout(self, client):
        response = client.post('/auth/register', json={
            'email': 'newbie@example.com', 'password': 'Storage2026',
            'first_name': 'Nina', 'last_name': 'Newbie'
        })
        assert response.status_code == 201
        assert response.get_json()['data']['email'] == 'newbie@example.com'

        me = client.get('/auth/me')
        assert me.status_code == 200
        assert me.get_json()['data']['first_name'] == 'Nina'

        assert client.post('/auth/logout').status_code == 200
        assert client.get('/auth/me').status_code == 401

        login = client.post('/auth/login', json={'email': 'newbie@example.com', 'password': 'Storage2026'})
        assert login.status_code == 200

    def test_register_duplicate_email(self, client, users):
        response = client.post('/auth/register', json={
            'email': 'host@example.com', 'password': 'Storage2026', 'first_name': 'Dup'
        })
        assert response.status_code == 409

    def test_register_weak_password(self, client):
        response = client.post('/auth/register', json={
            'email': 'weak@example.com', 'password': 'password', 'first_name': 'Weak'
        })
        assert response.status_code == 400
        assert 'password' in response.get_json()['fields']

    def test_login_wrong_password(self, client, users):
        response = client.post('/auth/login', json={'email': 'host@example.com', 'password': 'wrong'})
        assert response.status_code == 401
        assert response.get_json()['code'] == 'invalid_credentials'


class TestListingRoutes:

    def test_create_listing(self, host_client):
        response = host_client.post('/market/listings', json={
            'title': 'Cellar', 'price': 3.5, 'space_available': 20,
            'latitude': 40.4, 'longitude': -3.7
        })
        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['title'] == 'Cellar'
        assert data['is_active'] is True

    def test_create_listing_validation(self, host_client):
        response = host_client.post('/market/listings', json={'title': 'Cellar', 'price': -1, 'space_available': 20})
        assert response.status_code == 400
        assert 'price' in response.get_json()['fields']

    @pytest.mark.parametrize('field', ['price', 'space_available', 'latitude'])
    def test_create_listing_rejects_non_finite_numbers(self, host_client, field):
        values = {'price': '3.5', 'space_available': '20', 'latitude': '40.4'}
        values[field] = 'NaN'
        body = ('{"title": "Cellar", "price": %(price)s, "space_available": %(space_available)s, '
                '"latitude": %(latitude)s, "longitude": -3.7}' % values)
        response = host_client.post('/market/listings', data=body, content_type='application/json')
        assert response.status_code == 400
        assert field in response.get_json()['fields']

    def test_update_listing_rejects_infinite_space(self, host_client, listing_id):
        response = host_client.patch(f'/market/listings/{listing_id}', data='{"space_available": Infinity}',
                                     content_type='application/json')
        assert response.status_code == 400
        assert 'space_available' in response.get_json()['fields']

    def test_update_and_delete(self, host_client, client_client, listing_id):
        assert client_client.patch(f'/market/listings/{listing_id}', json={'price': 1}).status_code == 403

        response = host_client.patch(f'/market/listings/{listing_id}', json={'price': 11.25})
        assert response.status_code == 200
        assert response.get_json()['data']['price'] == 11.25
        assert response.get_json()['data']['title'] == 'Dry garage'

        assert host_client.delete(f'/market/listings/{listing_id}').status_code == 200
        assert host_client.get(f'/market/listings/{listing_id}').status_code == 404

    def test_search_and_host_listing(self, host_client, client_client, listing_id):
        response = client_client.get('/market/listings?lat=40.4168&lng=-3.7038&radius=5&sort_by=closest')
        assert response.status_code == 200
        assert [l['id'] for l in response.get_json()['data']] == [listing_id]

        assert host_client.get('/market/listings').get_json()['data'] == []
        mine = host_client.get('/market/listings?host=me').get_json()['data']
        assert [l['id'] for l in mine] == [listing_id]

    def test_search_bad_sort(self, client_client, listing_id):
        response = client_client.get('/market/listings?sort_by=RANDOM')
        assert response.status_code == 400

    def test_availability_and_estimate(self, client_client, listing_id):
        response = client_client.get(
            f'/market/listings/{listing_id}/availability?start_date=2026-03-01&end_date=2026-03-02'
        )
        assert response.status_code == 200
        assert response.get_json()['data'] == [
            {'date': '2026-03-01', 'available': 100.0},
            {'date': '2026-03-02', 'available': 100.0},
        ]

        estimate = client_client.get(
            f'/market/listings/{listing_id}/estimate?space=10&start_date=2026-03-01&end_date=2026-03-03'
        ).get_json()['data']
        assert estimate['total_cost'] == 200.0
        assert estimate['fits'] is True

        missing = client_client.get(f'/market/listings/{listing_id}/availability?start_date=2026-03-01')
        assert missing.status_code == 400

    def test_price_recommendation(self, client_client, listing_id):
        response = client_client.get('/market/listings/price-recommendation?lat=40.4168&lng=-3.7038')
        assert response.status_code == 200
        assert response.get_json()['data'] == {'recommended_price': 10.0, 'count': 1}


class TestReservationRoutes:

    def test_create_reservation(self, client_client, listing_id):
        response = create_reservation(client_client, listing_id, items=['bike', 'boxes'])
        assert response.status_code == 201
        data = response.get_json()['data']
        assert data['status'] == 'PENDING'
        assert data['total_cost'] == 200.0
        assert data['items'] == ['bike', 'boxes']

    def test_create_errors(self, host_client, client_client, listing_id):
        own = create_reservation(host_client, listing_id)
        assert own.status_code == 400
        assert own.get_json()['error'] == 'Cannot reserve your own listing'

        assert create_reservation(client_client, 9999).status_code == 404

        bad_range = create_reservation(client_client, listing_id, start='2026-03-03', end='2026-03-01')
        assert bad_range.status_code == 400
        assert 'end_date' in bad_range.get_json()['fields']

        too_big = create_reservation(client_client, listing_id, space=101)
        assert too_big.status_code == 400
        assert too_big.get_json()['error'] == 'Not enough space available'

    @pytest.mark.parametrize('literal', ['NaN', 'Infinity', '-Infinity'])
    def test_create_rejects_non_finite_space(self, client_client, listing_id, literal):
        body = ('{"listing_id": %d, "space_requested": %s, '
                '"start_date": "2026-03-01", "end_date": "2026-03-03"}' % (listing_id, literal))
        response = client_client.post('/market/reservations', data=body, content_type='application/json')
        assert response.status_code == 400
        assert 'space_requested' in response.get_json()['fields']

    @pytest.mark.parametrize('space', ['nan', 'inf'])
    def test_estimate_rejects_non_finite_space(self, client_client, listing_id, space):
        response = client_client.get(
            f'/market/listings/{listing_id}/estimate?space={space}&start_date=2026-03-01&end_date=2026-03-03'
        )
        assert response.status_code == 400
        assert response.get_json()['code'] == 'invalid_input'

    def test_approve_flow(self, host_client, client_client, listing_id):
        reservation_id = create_reservation(client_client, listing_id).get_json()['data']['id']

        forbidden = client_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})
        assert forbidden.status_code == 403

        approved = host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})
        assert approved.status_code == 200
        assert approved.get_json()['data']['status'] == 'APPROVED'

        again = host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})
        assert again.status_code == 400
        assert again.get_json()['code'] == 'invalid_transition'

    def test_approval_conflict_is_409(self, app, host_client, client_client, listing_id):
        first = create_reservation(client_client, listing_id, space=70).get_json()['data']['id']
        second = create_reservation(client_client, listing_id, space=70).get_json()['data']['id']

        assert host_client.patch(f'/market/reservations/{first}', json={'status': 'APPROVED'}).status_code == 200
        response = host_client.patch(f'/market/reservations/{second}', json={'status': 'APPROVED'})
        assert response.status_code == 409
        assert response.get_json()['code'] == 'conflict'

    def test_patch_requires_body(self, client_client, listing_id):
        reservation_id = create_reservation(client_client, listing_id).get_json()['data']['id']
        response = client_client.patch(f'/market/reservations/{reservation_id}', json={})
        assert response.status_code == 400

    def test_list_pay_clear(self, host_client, client_client, listing_id):
        reservation_id = create_reservation(client_client, listing_id).get_json()['data']['id']
        host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})

        paid = client_client.post(f'/market/reservations/{reservation_id}/pay')
        assert paid.status_code == 200
        assert paid.get_json()['data']['payment_completed'] is True

        assert client_client.post(f'/market/reservations/{reservation_id}/clear').status_code == 400

        client_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'CANCELLED'})
        assert client_client.post(f'/market/reservations/{reservation_id}/clear').status_code == 200

        assert client_client.get('/market/reservations').get_json()['count'] == 0
        assert client_client.get('/market/reservations?cleared=true').get_json()['count'] == 1
        assert host_client.get('/market/reservations?as_host=true').get_json()['count'] == 1

    def test_rate_listing(self, host_client, client_client, listing_id):
        reservation_id = create_reservation(
            client_client, listing_id, start=days_from_today(-3), end=days_from_today(3)
        ).get_json()['data']['id']
        host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})

        response = client_client.post(f'/market/listings/{listing_id}/rate',
                                      json={'reservation_id': reservation_id, 'liked': True})
        assert response.status_code == 200
        assert client_client.get(f'/market/listings/{listing_id}').get_json()['data']['likes'] == 1

        again = client_client.post(f'/market/listings/{listing_id}/rate',
                                   json={'reservation_id': reservation_id, 'liked': True})
        assert again.status_code == 400
        assert again.get_json()['code'] == 'already_rated'

    def test_rate_before_start(self, host_client, client_client, listing_id):
        reservation_id = create_reservation(
            client_client, listing_id, start=days_from_today(5), end=days_from_today(7)
        ).get_json()['data']['id']
        host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})

        response = client_client.patch(f'/market/reservations/{reservation_id}', json={'rated': True})
        assert response.status_code == 400
        assert response.get_json()['code'] == 'not_started'

    def test_complete_before_end(self, host_client, client_client, listing_id):
        reservation_id = create_reservation(
            client_client, listing_id, start=days_from_today(-2), end=days_from_today(4)
        ).get_json()['data']['id']
        host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'APPROVED'})

        response = host_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'COMPLETED'})
        assert response.status_code == 400
        assert response.get_json()['code'] == 'not_ended'

    @pytest.mark.parametrize('status', ['approved', 'Approved'])
    def test_status_case_insensitive(self, host_client, client_client, listing_id, status):
        reservation_id = create_reservation(client_client, listing_id).get_json()['data']['id']
        response = host_client.patch(f'/market/reservations/{reservation_id}', json={'status': status})
        assert response.status_code == 200

    def test_third_party_cannot_see_reservation(self, client_client, other_client, listing_id):
        reservation_id = create_reservation(client_client, listing_id).get_json()['data']['id']

        assert client_client.get(f'/market/reservations/{reservation_id}').status_code == 200
        assert other_client.get(f'/market/reservations/{reservation_id}').status_code == 403
        response = other_client.patch(f'/market/reservations/{reservation_id}', json={'status': 'CANCELLED'})
        assert response.status_code == 403
