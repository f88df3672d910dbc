from __future__ import annotations
import logging
import sys
from typing import Any, Optional
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # aiohttp 는 레벨만 조정
    for noisy in ("aiohttp", "asyncio"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- 콘솔 포맷(사람 친화, extra 미노출) ----
DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", sink: Optional[Any] = None) -> int:
    """
    loguru 초기화.
    - sink 미지정 시 표준 출력
    - stdlib logging 흡수

    Returns:
        추가된 sink id
    """
    logger.remove()  # 기본 sink 제거
    logger.configure(extra={"name": "notifier"})
    handler_id = logger.add(
        sink=sink if sink is not None else sys.stdout,
        format=DEFAULT_FORMAT,
        colorize=sink is None,
        backtrace=False,
        diagnose=False,
        level=log_level.upper(),
        enqueue=False,
    )
    _hook_stdlib_logging()
    return handler_id

def get_logger(name: str = "notifier", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)
