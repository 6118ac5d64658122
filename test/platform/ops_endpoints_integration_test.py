import pytest


@pytest.mark.integration
class TestOpsEndpoints:
    async def test_health(self, client) -> None:
        response = await client.get('/health')

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['environment'] == 'test'
        assert body['uptime'] >= 0

    async def test_metrics_after_booking(self, client, seed, token_for) -> None:
        ids = await seed.default_show()
        await client.post(
            '/api/bookings/create',
            json={
                'showId': ids['show_id'],
                'seats': ['A1'],
                'userDetails': {'email': 'viewer@example.com', 'mobile': '9876543210'},
            },
            headers=token_for(),
        )

        response = await client.get('/metrics')

        assert response.status_code == 200
        assert 'cinema_bookings_created_total' in response.text
