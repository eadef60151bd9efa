# app/core/security.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .config import settings
from .exceptions import InvalidToken

logger = logging.getLogger(__name__)


class PasswordHasher:
    """One-way salted bcrypt hashing; comparison is left to passlib (constant time)."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        self._dummy_hash: Optional[str] = None

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self, plain_password: str) -> None:
        """Run one verification against a throwaway hash and discard the result."""
        if self._dummy_hash is None:
            self._dummy_hash = self._context.hash("not-a-real-password")
        self._context.verify(plain_password or "", self._dummy_hash)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and verifies HS256 bearer tokens signed with a server-held key."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(minutes=60)):
        if not secret_key:
            raise ValueError("secret_key must not be blank")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = expires_delta

    @property
    def expires_in(self) -> int:
        return int(self._expires_delta.total_seconds())

    def issue(self, user_id: int, username: str, issued_at: Optional[datetime] = None) -> str:
        iat = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": iat,
            "exp": iat + self._expires_delta,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidToken("token_blank")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("token_expired")
        except jwt.InvalidSignatureError:
            raise InvalidToken("signature_invalid")
        except (jwt.InvalidTokenError, ValueError) as e:
            raise InvalidToken(f"token_malformed: {type(e).__name__}")

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidToken("token_missing_username")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidToken("token_sub_not_int")

        return TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)

token_service = TokenService(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
)
