"""
Call tracing for use cases, repositories, services and controllers.

    @Logger.io
    async def execute(self, *, booking_id: int, ...) -> PaymentResolved: ...

With DEBUG on, each traced call logs its masked arguments and its return
value under the call target's name. A failure is logged once, by the
innermost traced frame it passes through: `CustomBaseError` subclasses as a
single ERROR line (they are expected outcomes such as a seat conflict or an
expired hold), anything else with its traceback. The exception is re-raised
unless the decorator was built with `reraise=False`.
"""

from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, call_depth_var, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_nested,
    normalize_args_kwargs,
    reset_call_depth,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')

_LOGGED_MARKER = '_has_logged'


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.call_target = ''

    def _emit(self) -> 'LoguruLogger':
        # depth 2: skip this tracer's hook and the wrapper, report the caller
        return self._custom_logger.bind(
            **{
                ExtraField.CALL_TARGET: self.call_target,
                ExtraField.CHAIN_START_TIME: get_chain_start_time(),
            }
        ).opt(depth=2)

    def mask_sensitive(self, data: Any) -> Any:
        masked = mask_nested(data)
        return truncate_content(masked) if self.truncate_content else masked

    def on_enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        if settings.DEBUG:
            self._emit().debug(
                f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
            )
        else:
            get_chain_start_time()

    def on_return(self, value: Any) -> None:
        if settings.DEBUG:
            self._emit().debug(f'return: {self.mask_sensitive(value)}')

    def on_error(self, error: Exception) -> None:
        if getattr(error, _LOGGED_MARKER, False):
            return
        setattr(error, _LOGGED_MARKER, True)
        if isinstance(error, CustomBaseError):
            self._emit().error(f'{type(error).__name__} ({error.status_code}): {error.message}')
        else:
            self._emit().exception(f'{type(error).__name__}: {error}')

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.call_target = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self.on_enter(args, kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    value = await func(*args, **kwargs)
                    self.on_return(value)
                    return value
                except Exception as e:
                    self.on_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self.on_enter(args, kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                value = func(*args, **kwargs)
                self.on_return(value)
                return value
            except Exception as e:
                self.on_error(e)
                if self.reraise:
                    raise
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


class Logger:
    """`Logger.base` for free-form events, `Logger.io` to trace a call."""

    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        tracer = LoguruIO(custom_logger, reraise=reraise, truncate_content=truncate_content)
        return tracer(func) if func else tracer
