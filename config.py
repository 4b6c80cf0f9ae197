"""
Application configuration loaded from environment variables.
"""

import os
from typing import Final

from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_DATABASE_URI: Final[str] = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(os.getcwd(), "data", "expense.db"),
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: Final[bool] = False
    LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")
    # Used when a request carries no X-User-Id header; empty means reject.
    DEFAULT_USER_ID: Final[str] = os.getenv("DEFAULT_USER_ID", "")
