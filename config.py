"""
config.py — application settings from environment variables.
Every variable uses the STACKMATH_ prefix (e.g. STACKMATH_LOG_LEVEL=DEBUG).
"""
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Evaluation
    default_program: str = "1 2 3 * 4 / - 5 +"
    max_tokens: int = 10_000

    # Rendering
    max_nesting: int = 64     # fractions, radicals, powers and parentheses

    # Output
    default_format: Literal["text", "mathml", "tree"] = "text"

    # App
    app_title: str = "StackMath"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="STACKMATH_", env_file=".env", extra="ignore")
