"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputSubdir,
                   title, subtitle, authors, paramsFile, language, disabled,
                   keepSoftbreaks, headingAnchors, highlight
        - env_check: inputSourceFile, htmlOutputdir, envOK
        - params_resolve: params
        - source_convert: convertedHtml
        - html_write: convertResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the Markdown play source
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        inputFile: Input .md filename (relative to inputdir)
        outputSubdir: Subdirectory within outputdir for output
        title: Play title from the command line
        subtitle: Play subtitle from the command line
        authors: Author names from the command line
        paramsFile: Optional YAML metadata file (relative to inputdir)
        language: Document language for the html lang attribute
        disabled: Start with play-script conversion off
        keepSoftbreaks: Keep soft breaks instead of replacing them by spaces
        headingAnchors: Emit anchor ids on speech headings
        highlight: Highlight fenced code blocks with Pygments
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        params: Resolved document Params
        convertedHtml: HTML body produced by the engine
        convertResult: Conversion results (output_file, stylesheet, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputSubdir: str = field(default=".")
    title: Optional[str] = field(default=None)
    subtitle: Optional[str] = field(default=None)
    authors: List[str] = field(default_factory=list)
    paramsFile: Optional[str] = field(default=None)
    language: str = field(default="en")
    disabled: bool = field(default=False)
    keepSoftbreaks: bool = field(default=False)
    headingAnchors: bool = field(default=False)
    highlight: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    params: Optional[Any] = field(default=None)  # Params at runtime
    convertedHtml: Optional[str] = field(default=None)
    convertResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the conversion pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, title, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for conversion output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that are ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        if merged_args.get("authors") is None:
            merged_args["authors"] = []

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            params_resolve,
            source_convert,
            html_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
