"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FUSEMODS_ prefix (e.g., FUSEMODS_RESCAN_INTERVAL_MS=250).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FUSEMODS_ prefix.

    Examples:
        FUSEMODS_MESSAGE_CLASS=chat-line
        FUSEMODS_RESCAN_INTERVAL_MS=1000
        FUSEMODS_THEME_FILE=themes/dark.yaml
    """

    model_config = SettingsConfigDict(
        env_prefix="FUSEMODS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Decoding configuration
    marker: str = Field(
        default="&",
        description="Character that introduces an inline markup code",
    )

    # Document configuration
    message_class: str = Field(
        default="message",
        description="Class name of text containers eligible for decoration",
    )

    formatted_class: str = Field(
        default="message-formatted",
        description="Class added to a container once it has been decorated",
    )

    status_class: str = Field(
        default="status-value",
        description="Class name of status indicator elements",
    )

    styles_id: str = Field(
        default="fusemods-styles",
        description="id attribute of the injected <style> element",
    )

    # Scheduling configuration
    rescan_interval_ms: int = Field(
        default=500,
        gt=0,
        description="Interval between periodic document rescans, in milliseconds",
    )

    # Presentation configuration
    theme_file: Optional[str] = Field(
        default=None,
        description="Optional theme YAML overriding the built-in presentation values",
    )

    @field_validator("marker")
    @classmethod
    def marker_validate(cls, value: str) -> str:
        """The marker must be exactly one character."""
        if len(value) != 1:
            raise ValueError(f"marker must be a single character, got {value!r}")
        return value

    def rescanInterval_seconds(self) -> float:
        """
        Rescan interval expressed in seconds.

        Example:
            >>> AppSettings(rescan_interval_ms=500).rescanInterval_seconds()
            0.5
        """
        return self.rescan_interval_ms / 1000.0


# Singleton instance - import this in your code
appsettings = AppSettings()
