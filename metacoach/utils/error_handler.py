import asyncio
import functools
from typing import Callable, Dict, Optional, Type, TypeVar

from loguru import logger

from ..exceptions import MetaCoachException

T = TypeVar('T')


def log_exceptions(
    log_level: str = "ERROR",
    include_traceback: bool = True,
    custom_message: Optional[str] = None
):
    """
    Decorator to log exceptions before re-raising them.

    Args:
        log_level: Log level for exception logging
        include_traceback: Whether to include traceback in log
        custom_message: Custom message to include in log
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        def _log(e: Exception):
            message = custom_message or f"Exception in {func.__name__}"
            if include_traceback:
                logger.opt(exception=True).log(log_level, f"{message}: {e}")
            else:
                logger.log(log_level, f"{message}: {e}")

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _log(e)
                raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log(e)
                raise

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def convert_exceptions(exception_map: Dict[Type[Exception], Type[MetaCoachException]]):
    """
    Decorator to convert library exceptions to MetaCoach exceptions.

    Exceptions that already belong to the MetaCoach hierarchy pass through untouched.

    Args:
        exception_map: Dictionary mapping exception types to MetaCoach exception types
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        def _convert(e: Exception):
            if isinstance(e, MetaCoachException):
                return None
            for source_exc, target_exc in exception_map.items():
                if isinstance(e, source_exc):
                    return target_exc(str(e), details={"original_exception": type(e).__name__})
            return None

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                converted = _convert(e)
                if converted is None:
                    raise
                raise converted from e

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                converted = _convert(e)
                if converted is None:
                    raise
                raise converted from e

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
