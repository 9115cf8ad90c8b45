"""
Logging setup for EventControl.

Configures loguru sinks for the console and an optional rotating
log file, and funnels stdlib logging (uvicorn, fastapi, asyncio)
into the same sinks. Components log through get_logger(), which
binds a component name shown in every line.
"""

from __future__ import annotations
import inspect
import logging
import sys
from typing import Optional
from loguru import logger

# stdlib 로거 중 loguru로 넘길 것들
STDLIB_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "asyncio")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {extra[name]} | {file}:{line} - {message}"

class InterceptHandler(logging.Handler):
    """stdlib logging 레코드를 loguru로 전달하는 핸들러"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # logging 모듈 내부 프레임을 건너뛰어 실제 호출 위치를 찾음
        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )

def _default_name(record) -> None:
    record["extra"].setdefault("name", record["name"])

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in STDLIB_LOGGERS:
        std = logging.getLogger(name)
        std.handlers = [InterceptHandler()]
        std.propagate = False

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    loguru 싱크를 초기화합니다.

    Args:
        log_level: 최소 로그 레벨
        log_file: 지정하면 10 MB 단위로 회전하는 파일 싱크를 추가
    """
    logger.remove()
    logger.configure(patcher=_default_name)
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=False,
        diagnose=False,
        level=log_level.upper(),
    )
    if log_file:
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level.upper(),
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )
    _hook_stdlib_logging()

def get_logger(name: str = "eventcontrol", **ctx):
    """컴포넌트 이름과 선택적 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """컨텍스트 매니저로 일시 컨텍스트 부여."""
    return logger.contextualize(**ctx)
