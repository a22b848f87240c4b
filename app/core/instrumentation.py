"""Логирование и метрики вокруг операций сервисов."""

import functools
import logging
import time

from app.core.exceptions import ServiceException
from app.core.metrics import OPERATION_DURATION, OPERATION_ERRORS

logger = logging.getLogger("app.service")


def instrumented(operation: str):
    """Обернуть асинхронную операцию сервиса.

    Доменные ошибки пишутся в лог как WARNING с кодом, остальные как ERROR
    с трассировкой. Исключение всегда пробрасывается дальше.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except ServiceException as exc:
                OPERATION_ERRORS.labels(operation=operation, code=exc.code.value).inc()
                logger.warning("%s failed: %s", operation, exc)
                raise
            except Exception:
                OPERATION_ERRORS.labels(operation=operation, code="INTERNAL").inc()
                logger.exception("%s failed", operation)
                raise
            finally:
                OPERATION_DURATION.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
            logger.debug("%s succeeded", operation)
            return result

        return wrapper

    return decorator
