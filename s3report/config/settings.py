"""Environment settings and validation."""

import os
from typing import Optional

from ..errors import ConfigurationError


class Settings:
    """Application settings from environment variables."""

    REQUIRED_VARS = [
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_REGION",
    ]

    @staticmethod
    def get(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set
            required: Whether the variable is required

        Returns:
            str: Environment variable value

        Raises:
            ConfigurationError: If required variable is not set
        """
        value = os.getenv(key, default)
        if required and not value:
            raise ConfigurationError(
                f"Required environment variable not set: {key}",
                details={"variable": key}
            )
        return value or ""

    @staticmethod
    def validate_required() -> None:
        """
        Validate that all required environment variables are set and non-empty.

        Raises:
            ConfigurationError: If any required variable is missing
        """
        missing = [var for var in Settings.REQUIRED_VARS if not os.getenv(var)]
        if missing:
            raise ConfigurationError(
                f"Please set the environment variables {', '.join(missing)}",
                details={"missing": missing}
            )
