import logging
import time
from functools import wraps
from typing import Callable, Type, Tuple

import requests

logger = logging.getLogger("zeptomail_transport")

class RetryManager:
    """
    Sequential retry with a fixed delay between attempts.
    """

    RETRYABLE_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})

    @staticmethod
    def is_transient_error(exception: Exception) -> bool:
        """
        Network failures, timeouts and retryable HTTP statuses are transient.
        """
        if isinstance(exception, (requests.ConnectionError, requests.Timeout)):
            return True

        status_code = getattr(exception, "status_code", None)
        return status_code in RetryManager.RETRYABLE_STATUS_CODES

    @staticmethod
    def with_retry(
        max_attempts: int = 2,
        delay_seconds: float = 0.2,
        retry_on: Tuple[Type[Exception], ...] = (Exception,)
    ):
        """
        Decorator that retries a function up to `max_attempts` times in total.
        """
        max_attempts = max(1, int(max_attempts))

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                attempt = 0
                while True:
                    try:
                        return func(*args, **kwargs)
                    except retry_on as e:
                        attempt += 1
                        if not RetryManager.is_transient_error(e):
                            logger.warning(f"Non-transient error encountered in {func.__name__}: {e}. Not retrying.")
                            raise

                        if attempt >= max_attempts:
                            logger.warning(f"Max retry attempts ({max_attempts}) reached for {func.__name__}. Last error: {e}")
                            raise

                        logger.info(f"Transient error in {func.__name__}: {e}. Retrying in {delay_seconds:.2f}s (Attempt {attempt}/{max_attempts})")
                        time.sleep(delay_seconds)
            return wrapper
        return decorator
