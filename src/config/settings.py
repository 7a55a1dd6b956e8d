"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MDPLAYSCRIPT_ prefix (e.g., MDPLAYSCRIPT_HEADING_ANCHORS=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MDPLAYSCRIPT_ prefix.

    Examples:
        MDPLAYSCRIPT_SPEECH_CLASS=line
        MDPLAYSCRIPT_DISABLED_IN_DEFAULT=true
        MDPLAYSCRIPT_ANCHOR_PREFIX=line-
    """

    model_config = SettingsConfigDict(
        env_prefix="MDPLAYSCRIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Markup configuration
    speech_class: str = Field(
        default="speech",
        description="CSS class of the <div> wrapping every speech",
    )

    character_class: str = Field(
        default="character",
        description="CSS class of the <span> holding a speaker name",
    )

    direction_class: str = Field(
        default="direction",
        description="CSS class of the <span> holding a stage direction",
    )

    title_class: str = Field(default="title", description="CSS class of the title heading")
    subtitle_class: str = Field(default="subtitle", description="CSS class of the subtitle heading")
    authors_class: str = Field(default="authors", description="CSS class of the authors block")
    author_class: str = Field(default="author", description="CSS class of one author name")
    cover_class: str = Field(default="cover", description="CSS class of the default title block")

    heading_tag: str = Field(
        default="h5",
        description="HTML tag used for speech headings",
    )

    anchor_prefix: str = Field(
        default="speech-",
        description="Prefix of the id given to speech headings when anchors are enabled",
    )

    # Engine defaults
    softbreak_replacement: Optional[str] = Field(
        default=" ",
        description="Text substituted for soft breaks inside speeches (None keeps soft breaks)",
    )

    disabled_in_default: bool = Field(
        default=False,
        description="Start documents with play-script conversion turned off",
    )

    heading_anchors: bool = Field(
        default=False,
        description="Give speech headings auto-numbered anchor ids",
    )

    # Output configuration
    stylesheet_name: str = Field(
        default="play.css",
        description="File name of the stylesheet written next to converted pages",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used when highlighting fenced code blocks",
    )

    def anchorId_make(self, index: int) -> str:
        """
        Generate the anchor id of the speech heading at a given index.

        Args:
            index: Zero-based heading counter value

        Returns:
            Anchor id string (e.g., "speech-0")

        Example:
            >>> settings = AppSettings()
            >>> settings.anchorId_make(0)
            'speech-0'
        """
        return f"{self.anchor_prefix}{index}"


# Singleton instance - import this in your code
appsettings = AppSettings()
