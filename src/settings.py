"""Configuration values sourced from environment variables."""

import os
from typing import Final

from src.enums import TagPrecedence

_tag_precedence = os.getenv(key="TAG_PRECEDENCE", default="system").lower()


AWS_REGION: Final[str | None] = os.getenv(key="AWS_REGION")
CONNECT_TIMEOUT_SECONDS: Final[float] = float(
    os.getenv(key="CONNECT_TIMEOUT_SECONDS", default="10")
)
READ_TIMEOUT_SECONDS: Final[float] = float(os.getenv(key="READ_TIMEOUT_SECONDS", default="30"))
TAG_PRECEDENCE: Final[TagPrecedence] = TagPrecedence(_tag_precedence)
DEFAULT_PROVIDER_CONFIG: Final[str] = os.getenv(key="DEFAULT_PROVIDER_CONFIG", default="default")
LOG_LEVEL: Final[str] = os.getenv(key="LOG_LEVEL", default="INFO")
LOGGER_NAME: Final[str] = os.getenv(key="LOGGER_NAME", default="table-reconciler")
LOG_COLOUR_ENABLED: Final[bool] = bool(
    os.getenv(key="LOG_COLOUR_ENABLED", default="True").upper() == "TRUE"
)
