import time
import logging
from functools import wraps

logger = logging.getLogger(__name__)

def time_api_call(func):
    """Log how long a Google API call took, at DEBUG, whether or not it raised."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start_time
            logger.debug(f"API call '{func.__qualname__}' took {duration:.4f} seconds.")
    return wrapper
