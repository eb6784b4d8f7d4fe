from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from vidtube.core.error_codes import ErrorCode
from vidtube.modules.comment.models import Comment

from tests.conftest import API, bearer, create_video, login_user, register_user


async def _signup(client, username: str) -> dict:
    await register_user(client, username)
    return await login_user(client, username)


class TestChannelProfile:
    async def test_subscription_toggle_updates_profile(self, client):
        alice = await _signup(client, "alice")
        bob = await _signup(client, "bob")
        bob_headers = bearer(bob["access_token"])

        anonymous = await client.get(f"{API}/users/channel/alice")
        assert anonymous.status_code == 200
        profile = anonymous.json()["data"]
        assert profile["username"] == "alice"
        assert profile["subscribers_count"] == 0
        assert profile["channels_subscribed_to_count"] == 0
        assert profile["is_subscribed"] is False

        toggled = await client.post(
            f"{API}/subscriptions/c/{alice['user']['id']}", headers=bob_headers
        )
        assert toggled.status_code == 200
        assert toggled.json()["data"]["subscribed"] is True

        viewed_by_bob = await client.get(
            f"{API}/users/channel/alice", headers=bob_headers
        )
        profile = viewed_by_bob.json()["data"]
        assert profile["subscribers_count"] == 1
        assert profile["is_subscribed"] is True

        bob_channel = (await client.get(f"{API}/users/channel/bob")).json()["data"]
        assert bob_channel["channels_subscribed_to_count"] == 1
        assert bob_channel["subscribers_count"] == 0

        # 匿名访问时 is_subscribed 总是 false
        anonymous = (await client.get(f"{API}/users/channel/alice")).json()["data"]
        assert anonymous["subscribers_count"] == 1
        assert anonymous["is_subscribed"] is False

        untoggled = await client.post(
            f"{API}/subscriptions/c/{alice['user']['id']}", headers=bob_headers
        )
        assert untoggled.json()["data"]["subscribed"] is False
        profile = (
            await client.get(f"{API}/users/channel/alice", headers=bob_headers)
        ).json()["data"]
        assert profile["subscribers_count"] == 0
        assert profile["is_subscribed"] is False

    async def test_profile_lookup_is_case_insensitive(self, client):
        await register_user(client, "alice")

        response = await client.get(f"{API}/users/channel/ALICE")
        assert response.status_code == 200

    async def test_unknown_channel(self, client):
        response = await client.get(f"{API}/users/channel/ghost")

        assert response.status_code == 404
        assert response.json()["message"] == "channel does not exist"

    async def test_invalid_token_is_treated_as_anonymous(self, client):
        await register_user(client, "alice")

        response = await client.get(
            f"{API}/users/channel/alice", headers=bearer("garbage")
        )
        assert response.status_code == 200
        assert response.json()["data"]["is_subscribed"] is False

    async def test_cannot_subscribe_to_self(self, client):
        alice = await _signup(client, "alice")

        response = await client.post(
            f"{API}/subscriptions/c/{alice['user']['id']}",
            headers=bearer(alice["access_token"]),
        )
        assert response.status_code == 400

    async def test_subscribe_to_invalid_channel(self, client):
        alice = await _signup(client, "alice")
        headers = bearer(alice["access_token"])

        invalid = await client.post(f"{API}/subscriptions/c/not-a-uuid", headers=headers)
        assert invalid.status_code == 400
        missing = await client.post(f"{API}/subscriptions/c/{uuid4()}", headers=headers)
        assert missing.status_code == 404


class TestWatchHistory:
    async def test_history_order_and_owner_projection(self, client, session_factory):
        alice = await _signup(client, "alice")
        bob = await _signup(client, "bob")
        headers = bearer(bob["access_token"])
        first = await create_video(session_factory, alice["user"]["id"], "first")
        second = await create_video(session_factory, alice["user"]["id"], "second")

        for video_id in (first, second, first):
            response = await client.post(
                f"{API}/videos/{video_id}/watch", headers=headers
            )
            assert response.status_code == 200

        response = await client.get(f"{API}/users/history", headers=headers)
        assert response.status_code == 200
        history = response.json()["data"]
        assert [UUID(item["id"]) for item in history] == [first, second]
        assert history[0]["views"] == 2
        assert history[0]["owner"] == {
            "full_name": "Alice",
            "username": "alice",
            "avatar": alice["user"]["avatar"],
        }

    async def test_empty_history(self, client):
        bob = await _signup(client, "bob")

        response = await client.get(
            f"{API}/users/history", headers=bearer(bob["access_token"])
        )
        assert response.json()["data"] == []

    async def test_watch_unknown_video(self, client):
        bob = await _signup(client, "bob")

        response = await client.post(
            f"{API}/videos/{uuid4()}/watch", headers=bearer(bob["access_token"])
        )
        assert response.status_code == 404
        assert response.json()["code"] == ErrorCode.VIDEO_NOT_FOUND


class TestComments:
    async def test_pagination(self, client, session_factory):
        alice = await _signup(client, "alice")
        owner_id = UUID(alice["user"]["id"])
        video_id = await create_video(session_factory, owner_id)
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        async with session_factory() as session:
            session.add_all(
                Comment(
                    video_id=video_id,
                    owner_id=owner_id,
                    content=f"comment {i}",
                    created_at=base + timedelta(seconds=i),
                )
                for i in range(15)
            )
            await session.commit()

        first_page = await client.get(f"{API}/videos/{video_id}/comments")
        body = first_page.json()
        assert first_page.status_code == 200
        assert body["total"] == 15
        assert body["page"] == 1
        assert body["limit"] == 10
        assert [c["content"] for c in body["data"]][:2] == ["comment 14", "comment 13"]

        second_page = await client.get(
            f"{API}/videos/{video_id}/comments", params={"page": 2, "limit": 10}
        )
        body = second_page.json()
        assert body["total"] == 15
        assert [c["content"] for c in body["data"]] == [
            f"comment {i}" for i in range(4, -1, -1)
        ]

    async def test_no_comments(self, client):
        response = await client.get(f"{API}/videos/{uuid4()}/comments")

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["total"] == 0

    async def test_invalid_video_id(self, client):
        response = await client.get(f"{API}/videos/not-a-uuid/comments")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid video ID"

    async def test_invalid_page_params(self, client):
        video_id = uuid4()
        assert (
            await client.get(f"{API}/videos/{video_id}/comments", params={"page": 0})
        ).status_code == 400
        assert (
            await client.get(f"{API}/videos/{video_id}/comments", params={"limit": 101})
        ).status_code == 400

    async def test_page_far_beyond_the_end(self, client, session_factory):
        alice = await _signup(client, "alice")
        headers = bearer(alice["access_token"])
        video_id = await create_video(session_factory, alice["user"]["id"])
        await client.post(
            f"{API}/videos/{video_id}/comments", json={"content": "hi"}, headers=headers
        )

        for target in (video_id, uuid4()):
            response = await client.get(
                f"{API}/videos/{target}/comments", params={"page": 10**19, "limit": 100}
            )
            assert response.status_code == 200
            body = response.json()
            assert body["data"] == []
            assert body["page"] == 10**19
        assert body["total"] == 0

        commented = await client.get(
            f"{API}/videos/{video_id}/comments", params={"page": 10**19}
        )
        assert commented.json()["total"] == 1

    async def test_add_comment(self, client, session_factory):
        alice = await _signup(client, "alice")
        headers = bearer(alice["access_token"])
        video_id = await create_video(session_factory, alice["user"]["id"])

        created = await client.post(
            f"{API}/videos/{video_id}/comments",
            json={"content": "  nice video  "},
            headers=headers,
        )
        assert created.status_code == 201
        assert created.json()["data"]["content"] == "nice video"

        empty = await client.post(
            f"{API}/videos/{video_id}/comments", json={"content": " "}, headers=headers
        )
        assert empty.status_code == 400

        listing = (await client.get(f"{API}/videos/{video_id}/comments")).json()
        assert listing["total"] == 1


class TestLikes:
    async def test_like_lifecycle(self, client, session_factory):
        alice = await _signup(client, "alice")
        headers = bearer(alice["access_token"])
        video_id = await create_video(session_factory, alice["user"]["id"])
        url = f"{API}/likes/videos/{video_id}"

        liked = await client.post(url, headers=headers)
        assert liked.status_code == 201
        like = liked.json()["data"]
        assert like["video_id"] == str(video_id)
        assert like["user_id"] == alice["user"]["id"]

        again = await client.post(url, headers=headers)
        assert again.status_code == 409
        assert again.json()["message"] == "You have already liked this video"

        likes = (await client.get(url)).json()["data"]
        assert len(likes) == 1
        assert likes[0]["username"] == "alice"

        removed = await client.delete(url, headers=headers)
        assert removed.status_code == 200

        missing = await client.delete(url, headers=headers)
        assert missing.status_code == 404
        assert missing.json()["message"] == "Like not found"

        relike = await client.post(url, headers=headers)
        assert relike.status_code == 201

    async def test_like_unknown_video(self, client):
        alice = await _signup(client, "alice")

        response = await client.post(
            f"{API}/likes/videos/{uuid4()}", headers=bearer(alice["access_token"])
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Video not found"

    async def test_like_invalid_video_id(self, client):
        alice = await _signup(client, "alice")

        response = await client.post(
            f"{API}/likes/videos/abc", headers=bearer(alice["access_token"])
        )
        assert response.status_code == 400

    async def test_like_requires_login(self, client):
        response = await client.post(f"{API}/likes/videos/{uuid4()}")
        assert response.status_code == 401
