# storefront/services/token_service.py
from datetime import datetime, timezone, timedelta
from typing import Any, Dict
from uuid import uuid4

import jwt
from sqlalchemy.orm import Session

from storefront.data.models.token import TokenModel
from storefront.repos.token_repo import TokenRepo
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class TokenService:
    """
    Access/refresh token pair:
    - issue signs the identity payload with two secrets and two lifetimes
    - verify_* never raise, any failure is None
    - persist/revoke/lookup track the one stored refresh token per user
    """

    def __init__(
        self,
        db: Session,
        access_secret: str | None = None,
        refresh_secret: str | None = None,
        access_ttl: int | None = None,
        refresh_ttl: int | None = None,
    ):
        self.repo = TokenRepo(db)
        self.access_secret = access_secret or settings.JWT_ACCESS_SECRET
        self.refresh_secret = refresh_secret or settings.JWT_REFRESH_SECRET
        self.access_ttl = access_ttl if access_ttl is not None else settings.ACCESS_TOKEN_TTL_SECONDS
        self.refresh_ttl = refresh_ttl if refresh_ttl is not None else settings.REFRESH_TOKEN_TTL_SECONDS
        self.algorithm = settings.JWT_ALGORITHM

    def _sign(self, payload: Dict[str, Any], secret: str, ttl: int) -> str:
        now = datetime.now(timezone.utc)
        # jti keeps two tokens issued within the same second apart
        claims = {**payload, "iat": now, "exp": now + timedelta(seconds=ttl), "jti": uuid4().hex}
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def _verify(self, token: str | None, secret: str) -> Dict[str, Any] | None:
        if not token:
            return None
        try:
            return jwt.decode(token, secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

    def issue(self, payload: Dict[str, Any]) -> Dict[str, str]:
        return {
            "access_token": self._sign(payload, self.access_secret, self.access_ttl),
            "refresh_token": self._sign(payload, self.refresh_secret, self.refresh_ttl),
        }

    def verify_access(self, token: str | None) -> Dict[str, Any] | None:
        return self._verify(token, self.access_secret)

    def verify_refresh(self, token: str | None) -> Dict[str, Any] | None:
        return self._verify(token, self.refresh_secret)

    def persist(self, user_id: int, refresh_token: str) -> TokenModel:
        record = self.repo.get_by_user(user_id)
        if record:
            record.refresh_token = refresh_token
        else:
            record = TokenModel(user_id=user_id, refresh_token=refresh_token)

        saved = self.repo.save(record)
        logger.info(f"Stored refresh token for user {user_id}")
        return saved

    def revoke(self, refresh_token: str | None) -> int:
        if not refresh_token:
            return 0
        deleted = self.repo.delete_by_token(refresh_token)
        logger.info(f"Revoked {deleted} refresh token record(s)")
        return deleted

    def lookup(self, refresh_token: str | None) -> TokenModel | None:
        if not refresh_token:
            return None
        return self.repo.get_by_token(refresh_token)

    def revoke_user(self, user_id: int) -> int:
        return self.repo.delete_by_user(user_id)
