"""
Integration tests: /orders endpoints and their effect on product deletion.

Seed orders: 1 (Maria: products 1 x2, 3 x1), 2 (Alex: product 3), 3 (Maria: product 1).
"""
import pytest
from fastapi import status

from tests.conftest import EXISTING_PRODUCT_ID, NON_EXISTING_PRODUCT_ID, auth_headers


class TestGetOrder:

    @pytest.mark.api
    async def test_owner_reads_order(self, client, client_token):
        response = await client.get("/orders/1", headers=auth_headers(client_token))

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["id"] == 1
        assert body["status"] == "PAID"
        assert body["client"] == {"id": 1, "name": "Maria Brown"}
        assert [i["productId"] for i in body["items"]] == [1, 3]
        assert body["items"][0]["subTotal"] == 181.0
        assert body["total"] == 181.0 + 1250.0

    @pytest.mark.api
    async def test_admin_reads_any_order(self, client, admin_token):
        response = await client.get("/orders/1", headers=auth_headers(admin_token))
        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.api
    async def test_other_client_forbidden(self, client, client_token):
        response = await client.get("/orders/2", headers=auth_headers(client_token))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.api
    async def test_unknown_order_not_found(self, client, admin_token):
        response = await client.get("/orders/999", headers=auth_headers(admin_token))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.api
    async def test_requires_token(self, client):
        response = await client.get("/orders/1")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestPlaceOrder:

    @pytest.mark.api
    async def test_client_places_order(self, client, client_token):
        response = await client.post(
            "/orders",
            json={"items": [{"productId": 2, "quantity": 1}, {"productId": 5, "quantity": 2}]},
            headers=auth_headers(client_token),
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["status"] == "WAITING_PAYMENT"
        assert body["client"]["id"] == 1
        assert body["total"] == pytest.approx(2190.0 + 2 * 100.99)
        assert response.headers["Location"] == f"/orders/{body['id']}"

    @pytest.mark.api
    async def test_repeated_product_lines_are_merged(self, client, client_token):
        response = await client.post(
            "/orders",
            json={"items": [{"productId": 2, "quantity": 1}, {"productId": 2, "quantity": 2}]},
            headers=auth_headers(client_token),
        )

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3

    @pytest.mark.api
    async def test_ordered_product_can_no_longer_be_deleted(self, client, client_token, admin_token):
        await client.post(
            "/orders",
            json={"items": [{"productId": EXISTING_PRODUCT_ID, "quantity": 1}]},
            headers=auth_headers(client_token),
        )

        response = await client.delete(f"/products/{EXISTING_PRODUCT_ID}", headers=auth_headers(admin_token))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.api
    async def test_unknown_product_not_found(self, client, client_token):
        response = await client.post(
            "/orders",
            json={"items": [{"productId": NON_EXISTING_PRODUCT_ID, "quantity": 1}]},
            headers=auth_headers(client_token),
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.api
    async def test_empty_order_unprocessable(self, client, client_token):
        response = await client.post("/orders", json={"items": []}, headers=auth_headers(client_token))
        assert response.status_code == 422

    @pytest.mark.api
    async def test_admin_cannot_place_order(self, client, admin_token):
        response = await client.post(
            "/orders",
            json={"items": [{"productId": 2, "quantity": 1}]},
            headers=auth_headers(admin_token),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
