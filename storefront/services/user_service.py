from typing import Any, Dict, List
from uuid import uuid4

import bcrypt
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import BadRequestError, UnauthorizedError
from storefront.domain.schemas import (
    AddressOut,
    AddressUpdate,
    MAX_PASSWORD_BYTES,
    RegistrationIn,
    UserOut,
    UserUpdateIn,
)
from storefront.repos.address_repo import AddressRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.mail_service import MailService
from storefront.services.token_service import TokenService
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADDRESS_KINDS = ("billing", "shipping")
INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    raw = password.encode("utf-8")
    # never stored, so it cannot match
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(raw, hashed.encode("utf-8"))


class UserService:
    """
    Registration, login/logout/refresh, activation,
    plus profile and address management for the authenticated user.
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        mail_service: MailService,
        bcrypt_rounds: int | None = None,
    ):
        self.repo = UserRepo(db)
        self.address_repo = AddressRepo(db)
        self.token_service = token_service
        self.mail_service = mail_service
        self.bcrypt_rounds = bcrypt_rounds or settings.BCRYPT_ROUNDS

    @staticmethod
    def _identity(user: UserModel) -> Dict[str, Any]:
        return {"id": user.id, "email": user.email, "is_activated": user.is_activated}

    def _issue_for(self, user: UserModel) -> Dict[str, Any]:
        tokens = self.token_service.issue(self._identity(user))
        self.token_service.persist(user.id, tokens["refresh_token"])
        return {**tokens, "user": UserOut.model_validate(user)}

    def _get_or_fail(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            # identity from a still valid access token of a deleted account
            raise UnauthorizedError()
        return user

    #session flow
    def register(self, payload: RegistrationIn) -> Dict[str, Any]:
        email = str(payload.email).lower()
        if self.repo.get_user_by_email(email):
            raise BadRequestError(f"User with email {email} already exists")

        activation_link = str(uuid4())
        user = UserModel(
            email=email,
            password=hash_password(payload.password, self.bcrypt_rounds),
            first_name=payload.first_name,
            last_name=payload.last_name,
            birthday=payload.dob,
            is_activated=False,
            activation_link=activation_link,
        )
        user.addresses.append(
            AddressModel(
                kind="shipping",
                country=payload.ship_country,
                city=payload.ship_city,
                street=payload.ship_street,
                postal_code=payload.ship_postal_code,
                is_default=payload.default_shipping,
            )
        )
        user.addresses.append(
            AddressModel(
                kind="billing",
                country=payload.bill_country or payload.ship_country,
                city=payload.bill_city or payload.ship_city,
                street=payload.bill_street or payload.ship_street,
                postal_code=payload.bill_postal_code or payload.ship_postal_code,
                is_default=payload.default_billing,
            )
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id} ({email})")

        self.mail_service.send_activation_mail(
            email, f"{settings.API_URL.rstrip('/')}/activate/{activation_link}"
        )
        return self._issue_for(created)

    def activate(self, activation_link: str) -> None:
        user = self.repo.get_user_by_activation_link(activation_link)
        if not user:
            raise BadRequestError("Invalid activation link")

        if user.is_activated:
            logger.info(f"User {user.id} is already activated")
            return

        user.is_activated = True
        self.repo.save(user)
        logger.info(f"Activated user {user.id}")

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repo.get_user_by_email(email.lower())
        if not user or not verify_password(password, user.password):
            logger.warning(f"Failed login for {email}")
            raise BadRequestError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return self._issue_for(user)

    def logout(self, refresh_token: str | None) -> int:
        return self.token_service.revoke(refresh_token)

    def refresh(self, refresh_token: str | None) -> Dict[str, Any]:
        if not refresh_token:
            raise UnauthorizedError()

        identity = self.token_service.verify_refresh(refresh_token)
        stored = self.token_service.lookup(refresh_token)
        if not identity or not stored:
            raise UnauthorizedError()

        user = self.repo.get_user(identity.get("id"))
        if not user:
            raise UnauthorizedError()

        return self._issue_for(user)

    #profile
    def get_user(self, user_id: int) -> UserOut:
        return UserOut.model_validate(self._get_or_fail(user_id))

    def update_user(self, user_id: int, changes: UserUpdateIn) -> UserOut:
        user = self._get_or_fail(user_id)
        for field, value in changes.model_dump(exclude_unset=True).items():
            if value is None and field != "birthday":
                continue
            setattr(user, field, value)

        updated = self.repo.save(user)
        logger.info(f"Updated profile of user {user_id}")
        return UserOut.model_validate(updated)

    def delete_user(self, user_id: int) -> int:
        user = self._get_or_fail(user_id)
        self.token_service.revoke_user(user_id)
        self.repo.delete_user(user)
        logger.info(f"Deleted user {user_id}")
        return user_id

    def check_password(self, user_id: int, password: str) -> bool:
        user = self._get_or_fail(user_id)
        return verify_password(password, user.password)

    #addresses
    def get_addresses(self, user_id: int, kind: str) -> List[AddressOut]:
        if kind not in ADDRESS_KINDS:
            raise BadRequestError(f"Unknown address kind {kind!r}")
        return [AddressOut.model_validate(a) for a in self.address_repo.get_addresses(user_id, kind)]

    def update_addresses(self, user_id: int, kind: str, updates: List[AddressUpdate]) -> List[AddressOut]:
        if kind not in ADDRESS_KINDS:
            raise BadRequestError(f"Unknown address kind {kind!r}")

        # validate everything before touching a row
        owned = {a.id: a for a in self.address_repo.get_addresses(user_id, kind)}
        for update in updates:
            if update.id not in owned:
                raise BadRequestError(f"Address {update.id} not found")

        for update in updates:
            address = owned[update.id]
            for field, value in update.model_dump(exclude={"id"}, exclude_none=True).items():
                setattr(address, field, value)
        self.address_repo.commit()

        logger.info(f"Updated {len(updates)} {kind} address(es) of user {user_id}")
        return self.get_addresses(user_id, kind)

    def delete_address(self, user_id: int, address_id: int) -> int:
        address = self.address_repo.get_address(address_id)
        if not address or address.user_id != user_id:
            raise BadRequestError(f"Address {address_id} not found")

        self.address_repo.delete_address(address)
        logger.info(f"Deleted address {address_id} of user {user_id}")
        return address_id
