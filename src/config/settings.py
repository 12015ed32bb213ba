"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STAPLEGUN_ prefix (e.g., STAPLEGUN_MARKER_TAG=sg).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STAPLEGUN_ prefix.

    Examples:
        STAPLEGUN_MARKER_TAG=sg
        STAPLEGUN_COMMENT_OPEN="/*"
        STAPLEGUN_COMMENT_CLOSE="*/"
    """

    model_config = SettingsConfigDict(
        env_prefix="STAPLEGUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Marker configuration
    marker_tag: str = Field(
        default="sg",
        description="Tag opening every substitution marker (e.g. sg:block:start:NAME)",
    )

    comment_open: str = Field(
        default="<!--",
        description="Comment opener wrapped around substitution markers",
    )

    comment_close: str = Field(
        default="-->",
        description="Comment closer wrapped around substitution markers",
    )

    # I/O configuration
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read templates and write output",
    )

    # Diagnostics configuration
    log_indent: str = Field(
        default="    ",
        description="Indentation prepended to verbose messages once per recursion depth",
    )

    def marker_make(self, kind: str, edge: str, name: str) -> str:
        """
        Generate a marker comment bracketing a substitution.

        Args:
            kind: Substitution kind ("block" or "file")
            edge: "start" or "end"
            name: Block name or imported file path

        Returns:
            Marker line without indentation

        Example:
            >>> settings = AppSettings()
            >>> settings.marker_make("block", "start", "greet")
            '<!-- sg:block:start:greet -->'
        """
        return f"{self.comment_open} {self.marker_tag}:{kind}:{edge}:{name} {self.comment_close}"


# Singleton instance - import this in your code
appsettings = AppSettings()
