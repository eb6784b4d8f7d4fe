"""认证模块 - 业务逻辑层（会话管理）

状态流转：匿名 -> 已登录（refresh 有效）-> 已轮换 -> 已登出。
每个用户最多持有一个有效 refresh token，任何一次签发都会覆盖旧值。
"""

from uuid import UUID

from fastapi import UploadFile
from jwt.exceptions import PyJWTError
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import (
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from vidtube.core.security import PasswordHasher, TokenPair, TokenService, TokenType
from vidtube.core.storage import MediaStorage
from vidtube.modules.user.models import User
from vidtube.modules.user.repository import UserRepository
from vidtube.modules.user.schemas import UserResponse

from .schemas import LoginResult

TOKEN_GENERATION_FAILED = "Something went wrong while generating access and refresh token"


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        storage: MediaStorage,
    ) -> None:
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens
        self.storage = storage

    # ============================================================
    # 注册
    # ============================================================

    async def register(
        self,
        *,
        full_name: str | None,
        email: str | None,
        username: str | None,
        password: str | None,
        avatar: UploadFile | None,
        cover_image: UploadFile | None = None,
    ) -> UserResponse:
        """注册新用户，头像必填、封面可选"""
        if any(not (field or "").strip() for field in (full_name, email, username, password)):
            raise ValidationError("All fields are required")

        username = username.strip().lower()
        email = email.strip()

        if await self.user_repo.get_by_username_or_email(username, email):
            raise ConflictError(
                "User with username or email already exists",
                code=ErrorCode.USER_ALREADY_EXISTS,
            )

        if avatar is None:
            raise ValidationError("Avatar file is required", code=ErrorCode.FILE_REQUIRED)
        avatar_url = await self.storage.upload(avatar, folder="avatars")
        if not avatar_url:
            raise ValidationError("Avatar file is required", code=ErrorCode.FILE_REQUIRED)
        cover_url = (
            await self.storage.upload(cover_image, folder="covers") if cover_image else None
        )

        user = User(
            full_name=full_name.strip(),
            email=email,
            username=username,
            hashed_password=self.hasher.hash(password),
            avatar=avatar_url,
            cover_image=cover_url or "",
        )
        try:
            user = await self.user_repo.create(user)
        except IntegrityError as exc:
            await self._discard_uploads(avatar_url, cover_url)
            raise ConflictError(
                "User with username or email already exists",
                code=ErrorCode.USER_ALREADY_EXISTS,
            ) from exc
        except SQLAlchemyError as exc:
            await self._discard_uploads(avatar_url, cover_url)
            raise InternalError("Something went wrong while registering the user") from exc

        logger.info("用户注册成功 user_id={} username={}", user.id, user.username)
        return UserResponse.model_validate(user)

    async def _discard_uploads(self, *urls: str | None) -> None:
        for url in urls:
            if url:
                await self.storage.delete(url)

    # ============================================================
    # 登录 / 登出
    # ============================================================

    async def login(
        self,
        *,
        password: str,
        username: str | None = None,
        email: str | None = None,
    ) -> LoginResult:
        """校验凭证并签发新的 access / refresh token"""
        username = (username or "").strip().lower() or None
        email = (email or "").strip() or None
        if not username and not email:
            raise ValidationError("username or email is required")

        user = await self.user_repo.get_by_username_or_email(username, email)
        if not user:
            raise NotFoundError("User does not exist", code=ErrorCode.USER_NOT_FOUND)

        if not self.hasher.verify(password, user.hashed_password):
            raise InvalidCredentialsError()

        pair = await self._generate_tokens(user)
        logger.info("用户登录 user_id={}", user.id)
        return LoginResult(
            user=UserResponse.model_validate(user),
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    async def logout(self, user_id: UUID) -> None:
        """清除持久化的 refresh token（重复调用不报错）"""
        await self.user_repo.set_refresh_token(user_id, None)
        logger.info("用户登出 user_id={}", user_id)

    async def _generate_tokens(self, user: User) -> TokenPair:
        try:
            pair = self.tokens.issue_pair(user)
            await self.user_repo.set_refresh_token(user.id, pair.refresh_token)
        except (PyJWTError, SQLAlchemyError) as exc:
            raise InternalError(
                TOKEN_GENERATION_FAILED, code=ErrorCode.TOKEN_GENERATION_FAILED
            ) from exc
        return pair

    # ============================================================
    # 刷新
    # ============================================================

    async def refresh(self, incoming_refresh_token: str | None) -> TokenPair:
        """
        用 refresh token 换取新的 token 对

        除签名与过期校验外，还要求与数据库中保存的值完全一致；
        已被轮换或登出作废的 token 即使尚未过期也会被拒绝。
        """
        if not incoming_refresh_token:
            raise UnauthorizedError("Unauthorized request")

        claims = self.tokens.verify(incoming_refresh_token, TokenType.REFRESH)

        user = await self.user_repo.get_by_id(claims.sub)
        if not user:
            raise UnauthorizedError("Invalid refresh token", code=ErrorCode.TOKEN_INVALID)

        if user.refresh_token != incoming_refresh_token:
            logger.warning("refresh token 重放或已作废 user_id={}", user.id)
            raise UnauthorizedError(
                "Refresh token is expired or used",
                code=ErrorCode.REFRESH_TOKEN_REUSED,
            )

        try:
            pair = self.tokens.issue_pair(user)
            rotated = await self.user_repo.rotate_refresh_token(
                user.id, incoming_refresh_token, pair.refresh_token
            )
        except (PyJWTError, SQLAlchemyError) as exc:
            raise InternalError(
                TOKEN_GENERATION_FAILED, code=ErrorCode.TOKEN_GENERATION_FAILED
            ) from exc

        if not rotated:
            # 并发刷新中已被其他请求轮换
            logger.warning("refresh token 并发轮换冲突 user_id={}", user.id)
            raise UnauthorizedError(
                "Refresh token is expired or used",
                code=ErrorCode.REFRESH_TOKEN_REUSED,
            )

        logger.info("access token 已刷新 user_id={}", user.id)
        return pair

    # ============================================================
    # 修改密码
    # ============================================================

    async def change_password(
        self, user_id: UUID, old_password: str, new_password: str
    ) -> None:
        """修改密码（不作废现有 refresh token）"""
        if not old_password or not new_password:
            raise ValidationError("Old and new password are required")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User does not exist", code=ErrorCode.USER_NOT_FOUND)

        if not self.hasher.verify(old_password, user.hashed_password):
            raise InvalidCredentialsError("Invalid old password")

        user.hashed_password = self.hasher.hash(new_password)
        await self.user_repo.update(user)
        logger.info("密码已修改 user_id={}", user.id)
