"""订阅模块 - 路由"""

from fastapi import APIRouter

from vidtube.modules.auth.dependencies import CurrentUser
from vidtube.schemas.response import ApiResponse

from .dependencies import SubscriptionServiceDep
from .schemas import SubscriptionState

router = APIRouter()


@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionState])
async def toggle_subscription(
    channel_id: str,
    user: CurrentUser,
    service: SubscriptionServiceDep,
) -> ApiResponse[SubscriptionState]:
    """订阅 / 取消订阅频道"""
    state = await service.toggle(user.id, channel_id)
    message = "Subscribed" if state.subscribed else "Unsubscribed"
    return ApiResponse(data=state, message=message)
