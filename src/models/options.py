"""
Engine configuration models

Options and document metadata supplied once when an engine is built, and
the rendering mode the engine switches between.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple


class Mode(Enum):
    """
    Rendering mode of the play-script engine

    OFF: paragraphs pass through unmodified
    PLAYSCRIPT: paragraphs are rendered as dialogue
    MONOLOGUE: paragraphs are rendered as speeches without headings
    """
    OFF = "off"
    PLAYSCRIPT = "playscript"
    MONOLOGUE = "monologue"


@dataclass(frozen=True)
class Options:
    """
    Engine options

    Attributes:
        replace_softbreaks_with: Text substituted for soft breaks inside
                                 speeches, None keeps them as soft breaks
        disabled_in_default: Start in OFF mode instead of PLAYSCRIPT
        heading_anchors: Give every speech heading an id and a self link
        streaming_segmentation: Segment paragraphs with the streaming
                                one-token-cache segmenter instead of the
                                materialized lookahead segmenter
    """
    replace_softbreaks_with: Optional[str] = " "
    disabled_in_default: bool = False
    heading_anchors: bool = False
    streaming_segmentation: bool = False

    @classmethod
    def options_fromSettings(cls, **overrides) -> "Options":
        """
        Build options whose defaults come from the application settings.

        Args:
            **overrides: Field values taking precedence over the settings

        Returns:
            Options instance
        """
        from ..config import appsettings

        values = {
            "replace_softbreaks_with": appsettings.softbreak_replacement,
            "disabled_in_default": appsettings.disabled_in_default,
            "heading_anchors": appsettings.heading_anchors,
        }
        values.update(overrides)
        return cls(**values)

    def mode_initial(self) -> Mode:
        return Mode.OFF if self.disabled_in_default else Mode.PLAYSCRIPT


@dataclass(frozen=True)
class Params:
    """
    Document metadata read by the metadata directives

    Attributes:
        title: Play title
        subtitle: Play subtitle
        authors: Author names in display order
    """
    title: Optional[str] = None
    subtitle: Optional[str] = None
    authors: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "authors", tuple(self.authors))


# Caller-supplied title block generator: Params -> raw HTML
TitleMaker = Callable[[Params], str]
