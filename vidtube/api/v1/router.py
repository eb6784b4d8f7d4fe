"""API v1 路由聚合"""

from fastapi import APIRouter

from vidtube.modules.auth.router import router as auth_router
from vidtube.modules.comment.router import router as comment_router
from vidtube.modules.like.router import router as like_router
from vidtube.modules.subscription.router import router as subscription_router
from vidtube.modules.user.router import router as user_router
from vidtube.modules.video.router import router as video_router

api_router = APIRouter()

# 认证与用户资料共用 /users 前缀
api_router.include_router(auth_router, prefix="/users", tags=["auth"])
api_router.include_router(user_router, prefix="/users", tags=["users"])
api_router.include_router(video_router, prefix="/videos", tags=["videos"])
api_router.include_router(comment_router, prefix="/videos", tags=["comments"])
api_router.include_router(like_router, prefix="/likes", tags=["likes"])
api_router.include_router(
    subscription_router, prefix="/subscriptions", tags=["subscriptions"]
)
