# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from storefront.utils.settings import RETRY_ATTEMPTS


def _retry_on(errors, base: float, cap: float):
    # last error is re-raised so callers see the real exception, not RetryError
    return retry(
        reraise=True,
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=base, min=base, max=cap),
        retry=retry_if_exception_type(errors),
    )


def http_retry():
    """Geocoder calls: connection errors, timeouts and 5xx raised by raise_for_status."""
    return _retry_on(requests.RequestException, 0.3, 3)


def redis_retry():
    """Session store calls."""
    return _retry_on(redis.RedisError, 0.2, 2)
