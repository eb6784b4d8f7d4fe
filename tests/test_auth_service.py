"""AuthService 的单元测试（直接使用数据库会话）"""

from types import SimpleNamespace
from uuid import uuid4

import pytest
from jwt.exceptions import PyJWTError

from vidtube.config import TokenConfig
from vidtube.core.error_codes import ErrorCode
from vidtube.core.exceptions import InternalError, UnauthorizedError
from vidtube.core.security import PasswordHasher, TokenService
from vidtube.modules.auth.service import AuthService
from vidtube.modules.user.models import User
from vidtube.modules.user.repository import UserRepository

from tests.conftest import PASSWORD, FakeMediaStorage

token_config = TokenConfig(access_secret="svc-access", refresh_secret="svc-refresh")


class BrokenTokenService(TokenService):
    def issue_pair(self, user):
        raise PyJWTError("signing failed")


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def alice(session, hasher) -> User:
    user = User(
        username="alice",
        email="alice@x.com",
        full_name="Alice",
        hashed_password=hasher.hash(PASSWORD),
        avatar="https://media.test/avatars/alice.png",
    )
    return await UserRepository(session).create(user)


def make_service(session, hasher, tokens=None) -> AuthService:
    return AuthService(
        UserRepository(session),
        hasher,
        tokens or TokenService(token_config),
        FakeMediaStorage(),
    )


async def test_rotate_refresh_token_is_compare_and_set(session, alice):
    repo = UserRepository(session)
    await repo.set_refresh_token(alice.id, "r1")

    assert await repo.rotate_refresh_token(alice.id, "r1", "r2") is True
    # 第二个并发请求持有的仍是旧值
    assert await repo.rotate_refresh_token(alice.id, "r1", "r3") is False

    await session.refresh(alice)
    assert alice.refresh_token == "r2"


async def test_login_persists_refresh_token(session, hasher, alice):
    service = make_service(session, hasher)
    result = await service.login(username="alice", password=PASSWORD)

    await session.refresh(alice)
    assert alice.refresh_token == result.refresh_token
    assert result.user.id == alice.id


async def test_refresh_loses_race_after_concurrent_rotation(session, hasher, alice):
    service = make_service(session, hasher)
    result = await service.login(username="alice", password=PASSWORD)
    session.expire_all()

    # 模拟另一个请求在本次校验之后、写入之前完成了轮换
    original_rotate = service.user_repo.rotate_refresh_token

    async def rotate_after_competitor(user_id, expected, new_token):
        await original_rotate(user_id, expected, "competitor-token")
        return await original_rotate(user_id, expected, new_token)

    service.user_repo.rotate_refresh_token = rotate_after_competitor

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.refresh(result.refresh_token)
    assert exc_info.value.code == ErrorCode.REFRESH_TOKEN_REUSED


async def test_refresh_for_deleted_user(session, hasher):
    service = make_service(session, hasher)
    ghost = SimpleNamespace(
        id=uuid4(),
        email="g@x.com",
        username="ghost",
        full_name="Ghost",
    )
    token = service.tokens.issue_refresh_token(ghost)

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.refresh(token)
    assert exc_info.value.message == "Invalid refresh token"


async def test_token_generation_failure_is_internal_error(session, hasher, alice):
    service = make_service(session, hasher, BrokenTokenService(token_config))

    with pytest.raises(InternalError) as exc_info:
        await service.login(username="alice", password=PASSWORD)

    error = exc_info.value
    assert error.status_code == 500
    assert error.code == ErrorCode.TOKEN_GENERATION_FAILED
    assert error.message == (
        "Something went wrong while generating access and refresh token"
    )


async def test_logout_clears_refresh_token(session, hasher, alice):
    service = make_service(session, hasher)
    await service.login(username="alice", password=PASSWORD)

    await service.logout(alice.id)
    await service.logout(alice.id)

    await session.refresh(alice)
    assert alice.refresh_token is None
