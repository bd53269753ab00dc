import inspect
import functools
from typing import TypeVar, Callable, Optional
from loguru import logger
from ..exceptions import BlobStorageException, ProviderException

T = TypeVar('T')


def _translate(e: Exception, exception_map: dict) -> Optional[BlobStorageException]:
    if isinstance(e, BlobStorageException):
        return None
    for source_exc, target_exc in exception_map.items():
        if isinstance(e, source_exc):
            return target_exc(
                str(e),
                error_code=getattr(e, "error_code", None),
                details={"original_exception": type(e).__name__},
            )
    return None


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

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator


def convert_exceptions(exception_map: dict):
    """
    Decorator to convert third-party exceptions to client exceptions.

    Exceptions that already belong to the client hierarchy pass through
    untouched, so validation and not-found errors keep their type.

    Args:
        exception_map: Dictionary mapping exception types to client exception types
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                converted = _translate(e, exception_map)
                if converted is not None:
                    raise converted from e
                raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                converted = _translate(e, exception_map)
                if converted is not None:
                    raise converted from e
                raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator


class ErrorHandler:
    """Centralized error handling utilities."""

    @staticmethod
    def handle_provider_error(e: Exception, operation: str) -> ProviderException:
        """Convert an SDK exception raised during `operation` to ProviderException."""
        error_code = getattr(e, "error_code", None)
        error_details = {
            "operation": operation,
            "original_exception": type(e).__name__,
            "message": str(e)
        }

        logger.error(f"Blob storage {operation} failed ({error_code}): {e}")
        return ProviderException(
            f"Blob storage {operation} failed: {e}",
            error_code=error_code or "PROVIDER_ERROR",
            details=error_details
        )

