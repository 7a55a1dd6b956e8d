#!/usr/bin/env python3
"""
mdplayscript - Play-script dialect for Markdown

Converts a Markdown play, written with `Name> line` speeches and
`(direction)` parentheticals, into a standalone styled HTML page.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Source conventions:
    - `Name> text` starts a speech by Name
    - `Name (aside)> text` adds a direction to the speech heading
    - `(text)` inside a speech is a stage direction
    - `<!-- playscript-off -->` / `<!-- playscript-on -->` toggle conversion
    - `<!-- playscript-monologue-begin -->` / `-end` bracket a monologue
    - `<!-- playscript-make-title -->` inserts the title block

Usage:
    mdplayscript inputdir/ outputdir/ --inputFile play.md

    The converted play is written to outputdir/ as play.html together
    with the play.css stylesheet.

Examples:
    # Basic conversion
    mdplayscript . output/ --inputFile figaro.md

    # With metadata for the title directives
    mdplayscript . output/ --inputFile figaro.md --title "Figaro" --authors Beaumarchais

    # Metadata from a YAML file, anchors on every speech heading
    mdplayscript . output/ --inputFile figaro.md --paramsFile figaro.yaml --headingAnchors

    # Verbose output
    mdplayscript . output/ --inputFile figaro.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import (
    __version__,
    LOG,
    state_connectToLogger,
    markdown_convert,
    document_build,
    params_load,
    stylesheet_copy,
    ParamsError,
)
from .models import ProgramState, Options, Params, pipeline


DISPLAY_TITLE = r"""
               _       _                             _       _
  _ __ ___  __| |_ __ | | __ _ _   _ ___  ___ _ __(_)_ __ | |_
 | '_ ` _ \/ _` | '_ \| |/ _` | | | / __|/ __| '__| | '_ \| __|
 | | | | | | (_| | |_) | | (_| | |_| \__ \ (__| |  | | |_) | |_
 |_| |_| |_|\__,_| .__/|_|\__,_|\__, |___/\___|_|  |_| .__/ \__|
                 |_|            |___/                |_|

  Play-script dialect for Markdown
"""

# Define CLI arguments
parser = ArgumentParser(
    description="mdplayscript - Convert Markdown play scripts to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input Markdown file (relative to inputdir)"
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the converted play",
)

parser.add_argument("--title", default=None, type=str, help="Play title")
parser.add_argument("--subtitle", default=None, type=str, help="Play subtitle")
parser.add_argument("--authors", nargs="*", default=None, help="Author names")

parser.add_argument(
    "--paramsFile",
    default=None,
    type=str,
    help="YAML file with title, subtitle and authors (relative to inputdir)",
)

parser.add_argument("--language", default="en", type=str, help="Document language")

parser.add_argument(
    "--disabled",
    action="store_true",
    help="Start with play-script conversion off (enable with <!-- playscript-on -->)",
)

parser.add_argument(
    "--keepSoftbreaks",
    action="store_true",
    help="Keep soft breaks inside speeches instead of replacing them with spaces",
)

parser.add_argument("--headingAnchors", action="store_true", help="Add anchor ids to speech headings")
parser.add_argument("--highlight", action="store_true", help="Highlight fenced code blocks")

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the Markdown input file
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file or the params file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.paramsFile and not (state.inputdir / state.paramsFile).exists():
        print(f"Error: Params file not found: {state.inputdir / state.paramsFile}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def params_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Merge document metadata from the params file and the command line.

    Command line values take precedence over the params file.

    Args:
        inputstate: Program state after env_check

    Returns:
        ProgramState with added field:
            - params: Params for the metadata directives

    Exits:
        1 if the params file is unusable
    """

    state = inputstate.copy()

    params = Params()
    if state.paramsFile:
        LOG(f"Loading params from {state.paramsFile}...", level=2)
        try:
            params = params_load(state.inputdir / state.paramsFile)
        except ParamsError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    state.params = Params(
        title=state.title if state.title is not None else params.title,
        subtitle=state.subtitle if state.subtitle is not None else params.subtitle,
        authors=state.authors if state.authors else params.authors,
    )
    LOG(f"Params: {state.params}", level=3)
    return state


def source_convert(inputstate: ProgramState) -> ProgramState:
    """
    Read the Markdown source and convert it to an HTML fragment.

    Args:
        inputstate: Program state with inputSourceFile and params set

    Returns:
        ProgramState with added field:
            - convertedHtml: HTML fragment produced by the engine

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        source = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(source)} characters from {state.inputSourceFile.name}", level=2)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    # Flags only switch settings on; unset flags keep the configured defaults
    overrides = {}
    if state.disabled:
        overrides["disabled_in_default"] = True
    if state.headingAnchors:
        overrides["heading_anchors"] = True
    if state.keepSoftbreaks:
        overrides["replace_softbreaks_with"] = None
    options = Options.options_fromSettings(**overrides)

    LOG("Converting play script...", level=1)
    state.convertedHtml = markdown_convert(
        source, options=options, params=state.params, highlight=state.highlight
    )
    LOG(f"Converted to {len(state.convertedHtml)} characters of HTML", level=2)
    return state


def html_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the standalone page and its stylesheet.

    Args:
        inputstate: Program state with convertedHtml

    Returns:
        ProgramState with added field:
            - convertResult: Dict containing:
                - status: bool (write success)
                - output_file: str (path to the written page)
                - stylesheet: str (path to the copied stylesheet)

    Exits:
        1 if convertedHtml is None or writing fails
    """

    state = inputstate.copy()

    if state.convertedHtml is None:
        print("Error: No converted source available", file=sys.stderr)
        sys.exit(1)

    output_file = state.htmlOutputdir / f"{Path(state.inputFile).stem}.html"
    page = document_build(state.convertedHtml, state.params, state.language)

    try:
        output_file.write_text(page, encoding="utf-8")
        stylesheet = stylesheet_copy(state.htmlOutputdir)
    except OSError as e:
        print(f"Write error: {e}", file=sys.stderr)
        sys.exit(1)

    state.convertResult = {
        "status": True,
        "output_file": str(output_file),
        "stylesheet": str(stylesheet),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results to the user.

    Args:
        inputstate: Program state with convertResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if convertResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.convertResult:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Conversion successful!", level=1)
    LOG(f"  Output: {state.convertResult['output_file']}", level=1)
    LOG(f"  Stylesheet: {state.convertResult['stylesheet']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="mdplayscript - Markdown play-script converter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert a Markdown play to HTML.

    Orchestrates the full conversion pipeline:
        1. env_check: Validate paths and environment
        2. params_resolve: Merge metadata from file and CLI
        3. source_convert: Read and convert the Markdown source
        4. html_write: Write the page and stylesheet
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the Markdown source
        outputdir: Directory where the converted play will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, params_resolve, source_convert, html_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
