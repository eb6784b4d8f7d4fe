"""媒体文件存储（头像、封面等）"""

from functools import lru_cache
from pathlib import PurePosixPath
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from loguru import logger
from starlette.concurrency import run_in_threadpool
from uuid_utils.compat import uuid7

from vidtube.config import S3Config, get_settings


class MediaStorage(Protocol):
    """对象存储接口：上传失败返回 None，由调用方决定如何处理"""

    async def upload(self, file: UploadFile, *, folder: str) -> str | None: ...

    async def delete(self, url: str) -> None: ...


class S3MediaStorage:
    """基于 S3 的媒体存储"""

    def __init__(self, config: S3Config) -> None:
        self.bucket = config.bucket
        self.base_url = (
            config.public_url or f"https://{config.bucket}.s3.{config.region}.amazonaws.com"
        ).rstrip("/")
        self._client = boto3.client(
            "s3",
            region_name=config.region,
            aws_access_key_id=(
                config.access_key_id.get_secret_value() if config.access_key_id else None
            ),
            aws_secret_access_key=(
                config.secret_access_key.get_secret_value()
                if config.secret_access_key
                else None
            ),
        )

    async def upload(self, file: UploadFile, *, folder: str) -> str | None:
        suffix = PurePosixPath(file.filename or "").suffix
        key = f"{folder}/{uuid7().hex}{suffix}"
        content = await file.read()
        if not content:
            return None

        try:
            await run_in_threadpool(
                self._client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=file.content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError):
            logger.exception("上传文件失败 key={}", key)
            return None
        return f"{self.base_url}/{key}"

    async def delete(self, url: str) -> None:
        if not url.startswith(f"{self.base_url}/"):
            return
        key = url[len(self.base_url) + 1 :]
        try:
            await run_in_threadpool(
                self._client.delete_object, Bucket=self.bucket, Key=key
            )
        except (BotoCoreError, ClientError):
            logger.exception("删除文件失败 key={}", key)


@lru_cache
def get_media_storage() -> MediaStorage:
    return S3MediaStorage(get_settings().s3)
