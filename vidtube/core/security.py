"""安全工具：密码哈希与 JWT 签发/校验

依赖安装: uv add pyjwt "pwdlib[argon2]"
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Protocol
from uuid import UUID, uuid4

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pydantic import BaseModel

from vidtube.config import TokenConfig, get_settings
from vidtube.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
)


# token 下发所用的 cookie 名称
ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenClaims(BaseModel):
    """校验通过后的 token 载荷"""

    sub: UUID
    type: TokenType
    iat: datetime
    exp: datetime
    jti: str


class TokenSubject(Protocol):
    id: UUID
    email: str
    username: str
    full_name: str


class PasswordHasher:
    """密码哈希（默认 Argon2）"""

    def __init__(self, password_hash: PasswordHash | None = None) -> None:
        self._hash = password_hash or PasswordHash.recommended()

    def hash(self, password: str) -> str:
        return self._hash.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        """校验密码，不匹配或哈希格式未知时返回 False"""
        try:
            return self._hash.verify(password=password, hash=hashed_password)
        except UnknownHashError:
            return False


class TokenService:
    """
    JWT 签发与校验

    access / refresh 使用独立密钥与有效期，
    `type` 声明用于防止两类 token 互相冒用。
    """

    def __init__(self, config: TokenConfig) -> None:
        self.config = config
        self._secrets = {
            TokenType.ACCESS: config.access_secret,
            TokenType.REFRESH: config.refresh_secret,
        }
        self._lifetimes = {
            TokenType.ACCESS: timedelta(minutes=config.access_expire_minutes),
            TokenType.REFRESH: timedelta(days=config.refresh_expire_days),
        }

    def issue_access_token(self, user: TokenSubject) -> str:
        """签发短期 access token（携带基本身份信息）"""
        return self._encode(
            user.id,
            TokenType.ACCESS,
            email=user.email,
            username=user.username,
            full_name=user.full_name,
        )

    def issue_refresh_token(self, user: TokenSubject) -> str:
        """签发长期 refresh token（仅携带 sub）"""
        return self._encode(user.id, TokenType.REFRESH)

    def issue_pair(self, user: TokenSubject) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user),
            refresh_token=self.issue_refresh_token(user),
        )

    def _encode(self, user_id: UUID, token_type: TokenType, **extra: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "type": token_type.value,
            "iat": now,
            "exp": now + self._lifetimes[token_type],
            # 同一秒内签发的 token 也必须互不相同
            "jti": uuid4().hex,
            **extra,
        }
        return jwt.encode(
            payload,
            self._secrets[token_type].get_secret_value(),
            algorithm=self.config.algorithm,
        )

    def verify(self, token: str, expected_type: TokenType) -> TokenClaims:
        """校验签名、过期时间与类型，返回载荷"""
        try:
            payload = jwt.decode(
                token,
                self._secrets[expected_type].get_secret_value(),
                algorithms=[self.config.algorithm],
                options={"require": ["sub", "exp", "iat", "type", "jti"]},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except InvalidSignatureError as exc:
            raise TokenInvalidError() from exc
        except DecodeError as exc:
            raise TokenMalformedError() from exc
        except InvalidTokenError as exc:
            raise TokenInvalidError() from exc

        if payload.get("type") != expected_type.value:
            raise TokenInvalidError("Unexpected token type")
        try:
            return TokenClaims.model_validate(payload)
        except ValueError as exc:
            raise TokenMalformedError() from exc


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(get_settings().token)
