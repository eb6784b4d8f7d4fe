import os

# 在导入应用前准备配置
os.environ.setdefault("DB_DSN", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TOKEN_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("TOKEN_REFRESH_SECRET", "test-refresh-secret")

from collections.abc import AsyncIterator  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi import UploadFile  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from vidtube.core.database import (  # noqa: E402
    Base,
    build_engine,
    build_sessionmaker,
    get_db,
)
from vidtube.core.storage import get_media_storage  # noqa: E402
from vidtube.main import app  # noqa: E402
from vidtube.modules.video.models import Video  # noqa: E402

API = "/api/v1"
PASSWORD = "P@ssw0rd!"


class FakeMediaStorage:
    """内存版媒体存储"""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail = False

    async def upload(self, file: UploadFile, *, folder: str) -> str | None:
        if self.fail:
            return None
        content = await file.read()
        if not content:
            return None
        url = f"https://media.test/{folder}/{len(self.objects)}-{file.filename}"
        self.objects[url] = content
        return url

    async def delete(self, url: str) -> None:
        self.deleted.append(url)
        self.objects.pop(url, None)


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_sessionmaker(engine)
    await engine.dispose()


@pytest.fixture
def storage() -> FakeMediaStorage:
    return FakeMediaStorage()


@pytest.fixture
async def client(session_factory, storage) -> AsyncIterator[AsyncClient]:
    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: storage
    # http 基础地址：secure cookie 不会被自动回传，token 由测试显式携带
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register_user(
    client: AsyncClient,
    username: str,
    *,
    email: str | None = None,
    password: str = PASSWORD,
    full_name: str | None = None,
):
    return await client.post(
        f"{API}/users/register",
        data={
            "full_name": full_name or username.title(),
            "email": email or f"{username.lower()}@x.com",
            "username": username,
            "password": password,
        },
        files={"avatar": ("avatar.png", b"avatar-bytes", "image/png")},
    )


async def login_user(
    client: AsyncClient, username: str, password: str = PASSWORD
) -> dict:
    response = await client.post(
        f"{API}/users/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def create_video(
    session_factory: async_sessionmaker[AsyncSession],
    owner_id: UUID | str,
    title: str = "video",
) -> UUID:
    async with session_factory() as session:
        video = Video(
            owner_id=UUID(str(owner_id)),
            title=title,
            video_file=f"https://media.test/videos/{title}.mp4",
        )
        session.add(video)
        await session.commit()
        return video.id
