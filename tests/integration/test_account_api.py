from __future__ import annotations

from uuid import uuid4

import pytest

pytestmark = pytest.mark.integration


class TestCurrentUser:
    def test_me(self, customer_client, customer):
        response = customer_client.get("/api/v1/me/")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(customer.id)
        assert data["role"] == "USER"

    def test_me_requires_authentication(self, api_client):
        assert api_client.get("/api/v1/me/").status_code == 401


class TestUserDirectory:
    def test_admin_lists_users(self, admin_client, customer):
        response = admin_client.get("/api/v1/users/")

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["total"] == 2
        assert {u["email"] for u in data["users"]} == {
            "admin@example.com",
            "customer@example.com",
        }

    def test_customer_is_forbidden(self, customer_client):
        assert customer_client.get("/api/v1/users/").status_code == 403

    def test_retrieve(self, admin_client, customer):
        response = admin_client.get(f"/api/v1/users/{customer.id}/")
        assert response.status_code == 200
        assert response.json()["name"] == "Test Customer"

    def test_retrieve_unknown(self, admin_client):
        response = admin_client.get(f"/api/v1/users/{uuid4()}/")
        assert response.status_code == 404
        assert response.json()["code"] == "user_not_found"

    def test_superuser_is_admin(self, api_client):
        from django.contrib.auth import get_user_model

        root = get_user_model().objects.create_superuser(
            "root", email="root@example.com", password="testpass123"
        )
        api_client.force_authenticate(user=root)
        assert api_client.get("/api/v1/users/").status_code == 200


class TestUserManagement:
    def test_create(self, admin_client):
        response = admin_client.post(
            "/api/v1/users/",
            {
                "name": "New Clerk",
                "email": "Clerk@Example.com",
                "password": "longenough",
                "role": "ADMIN",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "clerk@example.com"
        assert data["role"] == "ADMIN"
        assert data["is_active"] is True

        from django.contrib.auth import get_user_model

        created = get_user_model().objects.get(id=data["id"])
        assert created.username == "clerk@example.com"
        assert created.check_password("longenough")

    def test_created_user_can_obtain_a_token(self, admin_client, api_client):
        admin_client.post(
            "/api/v1/users/",
            {"name": "Shopper", "email": "shopper@example.com", "password": "longenough"},
            format="json",
        )
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "shopper@example.com", "password": "longenough"},
            format="json",
        )
        assert response.status_code == 200

    def test_create_duplicate_email_conflicts(self, admin_client, customer):
        response = admin_client.post(
            "/api/v1/users/",
            {
                "name": "Copy",
                "email": "CUSTOMER@example.com",
                "password": "longenough",
            },
            format="json",
        )

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "email_already_registered"
        assert body["severity"] == "state"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "X", "email": "not-an-email", "password": "longenough"},
            {"name": "X", "email": "x@example.com", "password": "short"},
            {"name": " ", "email": "x@example.com", "password": "longenough"},
            {"name": "X", "email": "x@example.com", "password": "longenough", "role": "ROOT"},
        ],
    )
    def test_create_rejects_bad_input(self, admin_client, payload):
        response = admin_client.post("/api/v1/users/", payload, format="json")
        assert response.status_code == 400

    def test_customer_cannot_create(self, customer_client):
        response = customer_client.post(
            "/api/v1/users/",
            {"name": "X", "email": "x@example.com", "password": "longenough"},
            format="json",
        )
        assert response.status_code == 403

    def test_update(self, admin_client, customer):
        response = admin_client.put(
            f"/api/v1/users/{customer.id}/",
            {"name": "Renamed", "role": "ADMIN", "isActive": False},
            format="json",
        )

        assert response.status_code == 200
        customer.refresh_from_db()
        assert customer.name == "Renamed"
        assert customer.role == "ADMIN"
        assert customer.is_active is False
        assert customer.email == "customer@example.com"

    def test_update_to_taken_email_conflicts(self, admin_client, customer):
        response = admin_client.patch(
            f"/api/v1/users/{customer.id}/",
            {"email": "admin@example.com"},
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["code"] == "email_already_registered"

    def test_update_keeping_own_email(self, admin_client, customer):
        response = admin_client.patch(
            f"/api/v1/users/{customer.id}/",
            {"email": "Customer@example.com"},
            format="json",
        )
        assert response.status_code == 200

    def test_update_unknown(self, admin_client):
        response = admin_client.patch(
            f"/api/v1/users/{uuid4()}/", {"name": "Ghost"}, format="json"
        )
        assert response.status_code == 404

    def test_delete(self, admin_client, customer):
        response = admin_client.delete(f"/api/v1/users/{customer.id}/")

        assert response.status_code == 204
        assert admin_client.get(f"/api/v1/users/{customer.id}/").status_code == 404

    def test_delete_unknown(self, admin_client):
        response = admin_client.delete(f"/api/v1/users/{uuid4()}/")
        assert response.status_code == 404
        assert response.json()["code"] == "user_not_found"

    def test_delete_user_with_orders_conflicts(
        self, admin_client, customer_client, customer, make_product
    ):
        product = make_product()
        customer_client.post(
            "/api/v1/orders/",
            {"items": [{"product_id": str(product.id), "quantity": 1}]},
            format="json",
        )

        response = admin_client.delete(f"/api/v1/users/{customer.id}/")

        assert response.status_code == 409
        assert response.json()["code"] == "user_has_orders"
        assert admin_client.get(f"/api/v1/users/{customer.id}/").status_code == 200
