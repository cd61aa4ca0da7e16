"""Logging setup and request latency tracking."""

import asyncio
import logging
import time
from functools import wraps
from typing import Callable, Union

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO):
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # botocore is chatty at DEBUG and would dump signed request headers
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))


def _log_outcome(logger: logging.Logger, operation_name: str, start: float, error: Exception = None):
    latency_ms = (time.perf_counter() - start) * 1000
    if error is None:
        logger.info(f"{operation_name} | latency_ms={latency_ms:.2f} | status=success")
    else:
        logger.error(
            f"{operation_name} | latency_ms={latency_ms:.2f} | status=error | "
            f"error_type={type(error).__name__}"
        )


def log_latency(operation_name: str):
    def decorator(func: Callable):
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_outcome(logger, operation_name, start, e)
                raise
            _log_outcome(logger, operation_name, start)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_outcome(logger, operation_name, start, e)
                raise
            _log_outcome(logger, operation_name, start)
            return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
