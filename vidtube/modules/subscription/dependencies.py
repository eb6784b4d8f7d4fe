"""订阅模块 - 依赖注入"""

from typing import Annotated

from fastapi import Depends

from vidtube.dependencies import DBSession

from .repository import SubscriptionRepository
from .service import SubscriptionService


def get_subscription_service(db: DBSession) -> SubscriptionService:
    return SubscriptionService(SubscriptionRepository(db))


SubscriptionServiceDep = Annotated[SubscriptionService, Depends(get_subscription_service)]
