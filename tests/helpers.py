from decimal import Decimal

from fastapi.testclient import TestClient


class FakeMailService:
    def __init__(self):
        self.sent = []

    def send_activation_mail(self, to: str, link: str) -> None:
        self.sent.append((to, link))


CATALOG = [
    {
        "title": "Elden Ring",
        "price": Decimal("100.00"),
        "discount_price": None,
        "dev_company": "FromSoftware",
        "header_img": "elden.jpg",
        "categories": ["RPG", "Open World", "Steam Achievements"],
        "genres": ["Action", "RPG"],
        "themes": ["Fantasy", "Dark"],
    },
    {
        "title": "Hades",
        "price": Decimal("25.00"),
        "discount_price": Decimal("20.00"),
        "dev_company": "Supergiant Games",
        "header_img": "hades.jpg",
        "categories": ["Roguelike", "Indie"],
        "genres": ["Roguelike", "Action"],
        "themes": ["Mythology", "Fantasy"],
    },
    {
        "title": "Stardew Valley",
        "price": Decimal("15.00"),
        "discount_price": None,
        "dev_company": "ConcernedApe",
        "header_img": "stardew.jpg",
        "categories": ["Farming", "Indie"],
        "genres": ["Simulation"],
        "themes": ["Cozy", "Fantasy"],
    },
    {
        "title": "Portal 2",
        "price": Decimal("9.99"),
        "discount_price": None,
        "dev_company": "Valve",
        "header_img": "portal2.jpg",
        "categories": ["Puzzle", "Indie", "Valve Anti-Cheat"],
        "genres": ["Puzzle", "Action"],
        "themes": ["Sci-fi"],
    },
]


def registration_payload(email: str = "gamer@example.com", **overrides) -> dict:
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": email,
        "password": "secret-pass",
        "dob": "1990-12-10",
        "default_shipping": True,
        "ship_country": "UK",
        "ship_city": "London",
        "ship_street": "Baker Street 221b",
        "ship_postal_code": "NW1 6XE",
    }
    payload.update(overrides)
    return payload


def refresh_cookie(client: TestClient, refresh_token: str) -> dict:
    """Drop whatever the client stored and send exactly this refresh token."""
    client.cookies.clear()
    return {"Cookie": f"refreshToken={refresh_token}"}


def bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}
