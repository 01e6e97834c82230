# storefront/api/deps.py
from typing import Any, Dict

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.exceptions import UnauthorizedError
from storefront.services.basket_service import BasketService
from storefront.services.mail_service import MailService
from storefront.services.product_service import ProductService
from storefront.services.token_service import TokenService
from storefront.services.user_service import UserService

REFRESH_COOKIE = "refreshToken"


def get_mail_service() -> MailService:
    return MailService()


def get_token_service(db: Session = Depends(get_db)) -> TokenService:
    return TokenService(db)


def get_user_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    mail_service: MailService = Depends(get_mail_service),
) -> UserService:
    return UserService(db, token_service=token_service, mail_service=mail_service)


def get_basket_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> BasketService:
    return BasketService(db, token_service=token_service)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_refresh_token(request: Request) -> str | None:
    return request.cookies.get(REFRESH_COOKIE)


def get_current_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    #Authorization: Bearer <access token>
    header = request.headers.get("Authorization")
    if not header:
        raise UnauthorizedError()

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError()

    identity = token_service.verify_access(token)
    if not identity:
        raise UnauthorizedError()
    return identity
