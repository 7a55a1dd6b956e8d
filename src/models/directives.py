"""
Directive specification and metadata models

Defines the structure and categories of play-script directive comments
(`<!-- playscript-on -->` and friends) for registry management and
documentation.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable


class DirectiveCategory(Enum):
    """
    Categories of directive comments

    MODE directives switch the engine's rendering mode, METADATA directives
    splice generated fragments built from the document Params.
    """
    MODE = "mode"            # playscript-on, playscript-monologue-begin
    METADATA = "metadata"    # playscript-title, playscript-make-title


@dataclass
class DirectiveSpec:
    """
    Specification for a directive comment

    Attributes:
        name: Directive name as written inside the comment
        category: Category for organization
        handler: Function (engine) -> List[Event] run when the directive
                 is recognized; returns the events to emit in its place
    """
    name: str
    category: DirectiveCategory
    handler: Callable


# All directive names share this prefix
DIRECTIVE_PREFIX = "playscript-"
