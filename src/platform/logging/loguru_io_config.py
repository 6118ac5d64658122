"""
loguru sinks for the cinema service.

Every record carries three extra fields:
- service_context: `<SERVICE_NAME>@<ENVIRONMENT>:<pid>`, so interleaved worker
  output can be told apart
- call_target: the `@Logger.io` function the record belongs to
- chain_start_time: start of the outermost traced call of the current task

stdout always receives the records; with DEBUG on they are also written to an
hourly rotating file under LOG_DIR. stdlib logging (uvicorn, sqlalchemy,
alembic) is routed through the same sinks.
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings


# Argument names and repr() fields whose values never reach a sink
SENSITIVE_KEYWORDS = {
    'password',
    'token',
    'access_token',
    'mobile',
    'user_mobile',
    'authorization',
}

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def service_context() -> str:
    return f'{settings.SERVICE_NAME}@{settings.ENVIRONMENT}:{os.getpid()}'


def default_extra() -> dict[str, Any]:
    return {
        ExtraField.SERVICE_CONTEXT: service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


# Noise from libraries that is never useful at DEBUG
_SUPPRESSED_DEBUG_FRAGMENTS = ('Using selector:',)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records into loguru, keeping the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and any(
            fragment in message for fragment in _SUPPRESSED_DEBUG_FRAGMENTS
        ):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        loguru_logger.bind(**default_extra()).opt(depth=depth, exception=record.exc_info).log(
            level, message
        )


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path() -> str:
    stamp = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
    prefix = 'test_' if settings.ENVIRONMENT == 'test' else ''
    return str(settings.LOG_DIR / f'{prefix}{stamp}.log')


def configure_sinks(bound: 'LoguruLogger') -> None:
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    loguru_logger.remove()
    bound.add(sys.stdout, format=io_log_format, level=level, enqueue=True)
    if settings.DEBUG:
        bound.add(
            _log_file_path(),
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


custom_logger: 'LoguruLogger' = loguru_logger.bind(**default_extra())
configure_sinks(custom_logger)
