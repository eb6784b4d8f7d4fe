"""用户模块 - 业务逻辑层（资料维护）"""

from typing import Literal

from fastapi import UploadFile
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import ConflictError, InternalError, ValidationError
from vidtube.core.storage import MediaStorage

from .models import User
from .repository import UserRepository
from .schemas import AccountUpdate, UserResponse


class UserService:
    def __init__(self, repository: UserRepository, storage: MediaStorage) -> None:
        self.repository = repository
        self.storage = storage

    async def update_account(self, user: User, data: AccountUpdate) -> UserResponse:
        """更新姓名 / 邮箱"""
        full_name = (data.full_name or "").strip()
        email = (data.email or "").strip()
        if not full_name or not email:
            raise ValidationError("All fields are required")

        if email != user.email and await self.repository.email_taken(
            email, exclude_id=user.id
        ):
            raise ConflictError(
                "Email is already in use", code=ErrorCode.EMAIL_ALREADY_EXISTS
            )

        user.full_name = full_name
        user.email = email
        user = await self.repository.update(user)
        return UserResponse.model_validate(user)

    async def update_avatar(self, user: User, avatar: UploadFile | None) -> UserResponse:
        return await self._replace_file(
            user, "avatar", avatar, folder="avatars", label="Avatar"
        )

    async def update_cover_image(
        self, user: User, cover_image: UploadFile | None
    ) -> UserResponse:
        return await self._replace_file(
            user, "cover_image", cover_image, folder="covers", label="Cover image"
        )

    async def _replace_file(
        self,
        user: User,
        field: Literal["avatar", "cover_image"],
        file: UploadFile | None,
        *,
        folder: str,
        label: str,
    ) -> UserResponse:
        """
        上传新文件并替换用户字段

        旧文件只在提交成功后删除；提交失败时删除刚上传的新文件，
        数据库里始终指向一个存在的对象。
        """
        if file is None:
            raise ValidationError(f"{label} file is missing", code=ErrorCode.FILE_REQUIRED)
        url = await self.storage.upload(file, folder=folder)
        if not url:
            raise ValidationError(
                f"Error while uploading {label.lower()}", code=ErrorCode.FILE_REQUIRED
            )

        previous = getattr(user, field)
        setattr(user, field, url)
        try:
            user = await self.repository.update(user)
            await self.repository.commit()
        except SQLAlchemyError as exc:
            await self.storage.delete(url)
            raise InternalError(
                f"Something went wrong while updating {label.lower()}"
            ) from exc

        if previous:
            await self.storage.delete(previous)
            logger.debug("已删除旧文件 {}", previous)
        return UserResponse.model_validate(user)
