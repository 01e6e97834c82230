"""
Shared fixtures.

The database is an in-memory SQLite shared through a StaticPool; the schema is
recreated for every test. Outbound mail is replaced by a recording fake.
"""
import os

# must be set before storefront.* is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret-0123456789abcdef"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["COOKIE_SECURE"] = "false"
os.environ["PROMO_CODES"] = "SAVE10,SAVE20,FIRST ORDER"

import pytest
from fastapi.testclient import TestClient

import storefront.data.models  # noqa: F401
from storefront.api.deps import get_mail_service
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models.product import ProductModel
from storefront.domain.schemas import RegistrationIn
from storefront.main import app
from storefront.services.basket_service import BasketService
from storefront.services.token_service import TokenService
from storefront.services.user_service import UserService

from helpers import CATALOG, FakeMailService, registration_payload


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mail():
    fake = FakeMailService()
    app.dependency_overrides[get_mail_service] = lambda: fake
    return fake


@pytest.fixture
def token_service(db):
    return TokenService(db)


@pytest.fixture
def basket_service(db, token_service):
    return BasketService(db, token_service=token_service)


@pytest.fixture
def user_service(db, token_service, mail):
    return UserService(db, token_service=token_service, mail_service=mail)


@pytest.fixture
def registered(user_service):
    """A registered user: {"access_token", "refresh_token", "user"}."""
    return user_service.register(RegistrationIn(**registration_payload()))


@pytest.fixture
def catalog():
    session = SessionLocal()
    try:
        for data in CATALOG:
            effective = data["discount_price"] or data["price"]
            session.add(
                ProductModel(
                    description=f"{data['title']} description",
                    sort_price=effective,
                    **data,
                )
            )
        session.commit()
    finally:
        session.close()
    return CATALOG


@pytest.fixture
def test_client(mail):
    return TestClient(app)
