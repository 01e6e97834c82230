"""
Component tests for the basket routes

Validates the anonymous -> authenticated basket journey:
create, item mutation, promo, pricing against the catalog,
binding to a user and merging the anonymous basket into the user one.
"""
from decimal import Decimal

from fastapi.testclient import TestClient

from helpers import refresh_cookie, registration_payload


def new_basket(client: TestClient, *titles: str) -> str:
    response = client.post("/basket/create")
    assert response.status_code == 200
    basket_id = response.json()
    for title in titles:
        assert client.post(f"/basket/{basket_id}/add-item", json={"title": title}).status_code == 200
    return basket_id


def items_of(client: TestClient, basket_id: str) -> dict:
    return client.get(f"/basket/{basket_id}/get-basket-items").json()


class TestItemFlow:
    def test_create_and_add_items(self, test_client: TestClient):
        # Arrange
        basket_id = new_basket(test_client)

        # Act
        response = test_client.post(f"/basket/{basket_id}/add-item", json={"title": "Hades"})

        # Assert
        assert response.status_code == 200
        assert response.json() == basket_id
        assert items_of(test_client, basket_id) == {"basket_id": basket_id, "items": {"Hades": 1}, "promo": ""}

    def test_duplicate_add_is_bad_request(self, test_client: TestClient):
        basket_id = new_basket(test_client, "Hades")

        response = test_client.post(f"/basket/{basket_id}/add-item", json={"title": "Hades"})

        assert response.status_code == 400
        assert "already" in response.json()["message"]
        assert items_of(test_client, basket_id)["items"] == {"Hades": 1}

    def test_change_quantity(self, test_client: TestClient):
        basket_id = new_basket(test_client, "Hades", "Portal 2")

        response = test_client.patch(
            f"/basket/{basket_id}/change-quantity",
            json={"item_updates": {"Hades": 3, "Portal 2": 0}},
        )

        assert response.status_code == 200
        assert items_of(test_client, basket_id)["items"] == {"Hades": 3, "Portal 2": 0}

    def test_change_quantity_failure_changes_nothing(self, test_client: TestClient):
        basket_id = new_basket(test_client, "Hades", "Portal 2")

        negative = test_client.patch(
            f"/basket/{basket_id}/change-quantity",
            json={"item_updates": {"Hades": 3, "Portal 2": -2}},
        )
        absent = test_client.patch(
            f"/basket/{basket_id}/change-quantity",
            json={"item_updates": {"Hades": 3, "Elden Ring": 1}},
        )

        assert negative.status_code == 400
        assert absent.status_code == 400
        assert items_of(test_client, basket_id)["items"] == {"Hades": 1, "Portal 2": 1}

    def test_remove_item(self, test_client: TestClient):
        basket_id = new_basket(test_client, "Hades", "Portal 2")

        removed = test_client.post(f"/basket/{basket_id}/remove-item", json={"title": "Hades"})
        absent = test_client.post(f"/basket/{basket_id}/remove-item", json={"title": "Hades"})

        assert removed.status_code == 200
        assert absent.status_code == 400
        assert items_of(test_client, basket_id)["items"] == {"Portal 2": 1}

    def test_clear(self, test_client: TestClient):
        basket_id = new_basket(test_client, "Hades")
        test_client.post(f"/basket/{basket_id}/add-promo", json={"promo": "SAVE10"})

        response = test_client.delete(f"/basket/{basket_id}/clear")

        assert response.status_code == 200
        assert items_of(test_client, basket_id) == {"basket_id": basket_id, "items": {}, "promo": ""}

    def test_unknown_basket(self, test_client: TestClient):
        response = test_client.get("/basket/doesnotexist/get-basket-items")

        assert response.status_code == 400
        assert "not found" in response.json()["message"]


class TestPromoAndPricing:
    def test_promo_round_trip(self, test_client: TestClient):
        basket_id = new_basket(test_client)

        added = test_client.post(f"/basket/{basket_id}/add-promo", json={"promo": "SAVE10"})
        assert added.status_code == 200
        assert items_of(test_client, basket_id)["promo"] == "SAVE10"

        deleted = test_client.delete(f"/basket/{basket_id}/delete-promo")
        assert deleted.status_code == 200
        assert deleted.json()["promo"] == ""

    def test_invalid_promo(self, test_client: TestClient):
        basket_id = new_basket(test_client)

        response = test_client.post(f"/basket/{basket_id}/add-promo", json={"promo": "HALF OFF"})

        assert response.status_code == 400
        assert items_of(test_client, basket_id)["promo"] == ""

    def test_priced_basket(self, test_client: TestClient, catalog):
        basket_id = new_basket(test_client, "Elden Ring", "Hades", "Unreleased Game")
        test_client.post(f"/basket/{basket_id}/add-promo", json={"promo": "FIRST ORDER"})

        response = test_client.get(f"/basket/{basket_id}/get-basket-full")

        assert response.status_code == 200
        lines = response.json()
        assert set(lines) == {"Elden Ring", "Hades"}
        assert Decimal(str(lines["Elden Ring"]["price"])) == Decimal("100.00")
        assert Decimal(str(lines["Elden Ring"]["promo_price"])) == Decimal("75.00")
        assert Decimal(str(lines["Hades"]["promo_price"])) == Decimal("15.00")
        assert lines["Hades"]["quantity"] == 1


class TestUserBasket:
    def test_attach_and_merge(self, test_client: TestClient):
        # Arrange: signed-in user with a basket, plus an anonymous basket
        tokens = test_client.post("/registration", json=registration_payload()).json()
        cookie = refresh_cookie(test_client, tokens["refresh_token"])

        user_basket = new_basket(test_client, "x")
        anon_basket = new_basket(test_client, "x", "y")
        test_client.patch(f"/basket/{anon_basket}/change-quantity", json={"item_updates": {"x": 2}})

        attached = test_client.post("/basket/add-to-user", json={"basket_id": user_basket}, headers=cookie)
        assert attached.status_code == 200
        assert attached.json() == user_basket

        # Act
        merged = test_client.post(
            "/basket/merge-baskets",
            json={"basket_anon_id": anon_basket, "basket_user_id": user_basket},
        )

        # Assert
        assert merged.status_code == 200
        assert merged.json() == user_basket
        assert items_of(test_client, user_basket)["items"] == {"x": 3, "y": 1}
        assert test_client.get(f"/basket/{anon_basket}/get-basket-items").status_code == 400

    def test_second_basket_for_user_is_rejected(self, test_client: TestClient):
        tokens = test_client.post("/registration", json=registration_payload()).json()
        cookie = refresh_cookie(test_client, tokens["refresh_token"])
        first = new_basket(test_client)
        second = new_basket(test_client)

        test_client.post("/basket/add-to-user", json={"basket_id": first}, headers=cookie)
        response = test_client.post("/basket/add-to-user", json={"basket_id": second}, headers=cookie)

        assert response.status_code == 400
        assert response.json()["message"] == "User already has a basket."

    def test_attach_without_session_is_unauthorized(self, test_client: TestClient):
        basket_id = new_basket(test_client)
        test_client.cookies.clear()

        response = test_client.post("/basket/add-to-user", json={"basket_id": basket_id})

        assert response.status_code == 401
