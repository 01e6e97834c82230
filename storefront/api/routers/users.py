from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import (
    REFRESH_COOKIE,
    get_current_identity,
    get_refresh_token,
    get_user_service,
)
from storefront.domain.exceptions import BadRequestError
from storefront.domain.schemas import (
    AddressesUpdateIn,
    AddressOut,
    AuthOut,
    LoginIn,
    PasswordCheckIn,
    RegistrationIn,
    UserOut,
    UserUpdateIn,
)
from storefront.services.user_service import UserService
from storefront.utils.settings import COOKIE_SECURE, REFRESH_TOKEN_TTL_SECONDS

router = APIRouter(tags=["users"])


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        max_age=REFRESH_TOKEN_TTL_SECONDS,
        httponly=True,
        samesite="none" if COOKIE_SECURE else "lax",
        secure=COOKIE_SECURE,
    )


def clear_refresh_cookie(response: Response) -> None:
    # browsers only drop the cookie when the attributes match the ones it was set with
    response.delete_cookie(
        key=REFRESH_COOKIE,
        httponly=True,
        samesite="none" if COOKIE_SECURE else "lax",
        secure=COOKIE_SECURE,
    )


@router.post("/registration", response_model=AuthOut)
def registration(
    payload: RegistrationIn,
    response: Response,
    svc: UserService = Depends(get_user_service),
):
    data = svc.register(payload)
    set_refresh_cookie(response, data["refresh_token"])
    return data


@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    response: Response,
    svc: UserService = Depends(get_user_service),
):
    data = svc.login(payload.email, payload.password)
    set_refresh_cookie(response, data["refresh_token"])
    return data


@router.post("/logout")
def logout(
    response: Response,
    refresh_token: str | None = Depends(get_refresh_token),
    svc: UserService = Depends(get_user_service),
):
    deleted = svc.logout(refresh_token)
    clear_refresh_cookie(response)
    return {"deleted_count": deleted}


@router.get("/activate/{link}")
def activate(link: str, svc: UserService = Depends(get_user_service)):
    svc.activate(link)
    return {"message": "User successfully activated"}


@router.get("/refresh", response_model=AuthOut)
def refresh(
    response: Response,
    refresh_token: str | None = Depends(get_refresh_token),
    svc: UserService = Depends(get_user_service),
):
    data = svc.refresh(refresh_token)
    set_refresh_cookie(response, data["refresh_token"])
    return data


@router.get("/user", response_model=UserOut)
def get_user(
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    return svc.get_user(identity["id"])


@router.put("/user", response_model=UserOut)
def update_user(
    payload: UserUpdateIn,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    return svc.update_user(identity["id"], payload)


@router.delete("/user")
def delete_user(
    response: Response,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    user_id = svc.delete_user(identity["id"])
    clear_refresh_cookie(response)
    return {"deleted": user_id}


@router.post("/user/check-password")
def check_password(
    payload: PasswordCheckIn,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    if not svc.check_password(identity["id"], payload.password):
        raise BadRequestError("Incorrect password")
    return {"message": "Password is correct"}


@router.get("/user/address/{kind}", response_model=List[AddressOut])
def get_addresses(
    kind: str,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    return svc.get_addresses(identity["id"], kind)


@router.put("/user/address/{kind}", response_model=List[AddressOut])
def update_addresses(
    kind: str,
    payload: AddressesUpdateIn,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    return svc.update_addresses(identity["id"], kind, payload.addresses)


@router.delete("/user/address/{address_id}")
def delete_address(
    address_id: int,
    identity: Dict[str, Any] = Depends(get_current_identity),
    svc: UserService = Depends(get_user_service),
):
    return {"deleted": svc.delete_address(identity["id"], address_id)}
