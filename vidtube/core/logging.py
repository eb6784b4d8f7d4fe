"""日志配置（Loguru）

标准库日志（uvicorn、SQLAlchemy、botocore）统一转发到 Loguru，
每条记录都带 request_id / user_id，未处于请求中时为 "-"。
"""

import inspect
import logging
import sys
from typing import Literal

from loguru import logger

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[request_id]} {extra[user_id]} | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# 第三方库只保留 WARNING 以上
QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "uvicorn.access", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """把标准库 logging 记录转交给 Loguru，保留原始调用位置"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: LogLevel = "INFO", *, json_format: bool = False) -> None:
    """
    配置日志输出

    Args:
        level: 日志级别
        json_format: 输出 JSON（生产环境交给日志采集）
    """
    logger.remove()
    logger.configure(extra={"request_id": "-", "user_id": "-"})
    if json_format:
        logger.add(sys.stderr, level=level, serialize=True, enqueue=True)
    else:
        logger.add(sys.stderr, level=level, format=TEXT_FORMAT, enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
