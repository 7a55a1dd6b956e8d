"""
Document-level helpers: conversion entry point, standalone page, metadata

markdown_convert() runs the full chain

    Markdown -> events_fromMarkdown -> PlayScript -> html_render

and document_build() wraps the resulting fragment in a complete page
linking the packaged play.css stylesheet.
"""

import html
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..config import appsettings, AppSettings
from ..models.options import Options, Params, TitleMaker
from .engine import PlayScript
from .errors import ParamsError
from .html import html_render
from .log import LOG
from .markdown import events_fromMarkdown


ASSETS_DIR = Path(__file__).parent.parent / "assets"


def markdown_convert(
    source: str,
    options: Optional[Options] = None,
    params: Optional[Params] = None,
    title_maker: Optional[TitleMaker] = None,
    highlight: bool = False,
) -> str:
    """
    Convert Markdown play source to an HTML fragment

    Args:
        source: Markdown text
        options: Engine options (defaults to Options())
        params: Metadata for the title/subtitle/authors directives
        title_maker: Title block generator for playscript-make-title
        highlight: Highlight fenced code blocks with Pygments

    Returns:
        HTML fragment

    Example:
        >>> markdown_convert("A> Hello!")
        '<div class="speech"><h5><span class="character">A</span></h5><p><span>Hello!</span></p></div>\\n'
    """
    engine = PlayScript(events_fromMarkdown(source), options=options, params=params, title_maker=title_maker)
    return html_render(engine, highlight=highlight)


def document_build(
    body_html: str,
    params: Optional[Params] = None,
    lang: str = "en",
    settings: AppSettings = appsettings,
) -> str:
    """
    Wrap a converted fragment in a standalone HTML page

    Args:
        body_html: Output of markdown_convert()
        params: Metadata; the title becomes the page <title>
        lang: Value of the html lang attribute
        settings: Source of the stylesheet name

    Returns:
        Complete HTML document
    """
    params = params or Params()
    title = html.escape(params.title or "")

    return f"""<!DOCTYPE html>
<html lang="{html.escape(lang)}">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <link rel="stylesheet" href="{html.escape(settings.stylesheet_name)}">
</head>
<body>
<div class="play">
{body_html}</div>
</body>
</html>
"""


def stylesheet_copy(output_dir: Path, settings: AppSettings = appsettings) -> Path:
    """
    Copy the packaged play.css into an output directory

    Returns:
        Path of the written stylesheet
    """
    target = output_dir / settings.stylesheet_name
    shutil.copy2(ASSETS_DIR / "play.css", target)
    LOG(f"Copied stylesheet to {target}", level=3)
    return target


def params_fromMapping(data: Dict[str, Any]) -> Params:
    """
    Build Params from a parsed mapping

    Raises:
        ParamsError: If a field has the wrong type
    """
    for key in ("title", "subtitle"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ParamsError(f"'{key}' must be a string, got {type(value).__name__}")

    authors = data.get("authors") or []
    if isinstance(authors, str):
        authors = [authors]
    if not isinstance(authors, list) or not all(isinstance(a, str) for a in authors):
        raise ParamsError("'authors' must be a string or a list of strings")

    unknown = sorted(set(data) - {"title", "subtitle", "authors"})
    if unknown:
        LOG(f"Ignoring unknown metadata keys: {', '.join(unknown)}", level=2)

    return Params(title=data.get("title"), subtitle=data.get("subtitle"), authors=authors)


def params_load(path: Path) -> Params:
    """
    Load document metadata from a YAML file

    The file holds a mapping with optional `title`, `subtitle` and
    `authors` (a string or a list of strings). An empty file yields empty
    Params.

    Raises:
        ParamsError: If the file is unreadable, not YAML, or not a valid mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParamsError(f"Failed to parse {path}: {e}")
    except OSError as e:
        raise ParamsError(f"Failed to read {path}: {e}")

    if data is None:
        return Params()
    if not isinstance(data, dict):
        raise ParamsError(f"{path} must contain a mapping, got {type(data).__name__}")

    return params_fromMapping(data)
