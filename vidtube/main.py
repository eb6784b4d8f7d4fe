"""
VidTube API 入口

- create_app 工厂模式，便于测试和多实例
- setup_xxx 函数分离注册逻辑
- 三层架构：Router → Service → Repository
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vidtube import __version__
from vidtube.config import get_settings
from vidtube.core.database import close_database, init_database
from vidtube.core.exception_handlers import setup_exception_handlers
from vidtube.core.logging import setup_logging
from vidtube.core.middlewares import setup_middlewares
from vidtube.core.routers import setup_routers
from vidtube.schemas.response import ApiResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # 启动：开发环境自动创建表
    await init_database()
    yield
    # 关闭：释放连接池
    await close_database()


def create_app() -> FastAPI:
    """应用工厂函数"""
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    application = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # 注册组件（顺序重要）
    setup_middlewares(application)
    setup_routers(application)
    setup_exception_handlers(application)

    @application.get("/health", response_model=ApiResponse[dict[str, str]])
    async def health_check() -> ApiResponse[dict[str, str]]:
        return ApiResponse(data={"status": "ok"})

    return application


app = create_app()
