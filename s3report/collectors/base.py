"""Base collector abstract class."""

from abc import ABC, abstractmethod
from datetime import date
from functools import wraps
from typing import Any, List
import logging

from botocore.exceptions import BotoCoreError, ClientError

from ..errors import UpstreamError


class BaseCollector(ABC):
    """Abstract base class for metric collectors."""

    def __init__(self, config: Any, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            config: Collector configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    def collect(self, day: date) -> List[Any]:
        """
        Collect metrics for a day and return results.

        Raises:
            UpstreamError: If the metrics service cannot be queried
        """
        pass


def upstream_call(operation: str):
    """
    Decorator translating AWS SDK errors into UpstreamError.

    There is no retry: the first failure aborts the run.

    Args:
        operation: CloudWatch operation name used in the error message
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except ClientError as e:
                error_code = e.response.get('Error', {}).get('Code')
                error_message = e.response.get('Error', {}).get('Message', str(e))
                self.logger.debug(f"{operation} failed: {error_code}", exc_info=True)
                raise UpstreamError(
                    f"{operation} failed: {error_message}",
                    error_code=error_code,
                    details={"operation": operation}
                ) from e
            except BotoCoreError as e:
                self.logger.debug(f"{operation} failed", exc_info=True)
                raise UpstreamError(
                    f"{operation} failed: {e}",
                    details={"operation": operation}
                ) from e
        return wrapper
    return decorator
