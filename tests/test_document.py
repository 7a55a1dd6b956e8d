"""
Document helper tests

Tests metadata file loading, the standalone page and settings.
"""

import tempfile
from dataclasses import fields
from pathlib import Path

import pytest

from mdplayscript.config import AppSettings
from mdplayscript.lib.directives import DirectiveRegistry, comment_extractDirective, titleBlock_make
from mdplayscript.lib.document import document_build, params_load, stylesheet_copy
from mdplayscript.lib.errors import ParamsError
from mdplayscript.models.directives import DirectiveCategory
from mdplayscript.models.options import Options, Params


def yaml_write(directory, text):
    path = Path(directory) / "meta.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestParamsLoad:
    """Test YAML metadata loading"""

    def test_full_mapping(self):
        """All fields are read"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = yaml_write(tmpdir, "title: Figaro\nsubtitle: Comedy\nauthors:\n  - A\n  - B\n")
            assert params_load(path) == Params(title="Figaro", subtitle="Comedy", authors=("A", "B"))

    def test_single_author_string(self):
        """A lone author string becomes a one-element list"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = yaml_write(tmpdir, "authors: Beaumarchais\n")
            assert params_load(path).authors == ("Beaumarchais",)

    def test_empty_file(self):
        """An empty file gives empty Params"""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert params_load(yaml_write(tmpdir, "")) == Params()

    @pytest.mark.parametrize("text", [
        "- just\n- a list\n",
        "title: [not, a, string]\n",
        "authors: {a: 1}\n",
        "authors: [1, 2]\n",
        "title: 'unterminated\n",
    ])
    def test_invalid_files(self, text):
        """Unusable files raise ParamsError"""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ParamsError):
                params_load(yaml_write(tmpdir, text))

    def test_missing_file(self):
        """A missing file raises ParamsError"""
        with pytest.raises(ParamsError):
            params_load(Path("/nonexistent/meta.yaml"))


class TestDocumentBuild:
    """Test the standalone page"""

    def test_page_structure(self):
        """The fragment is wrapped in a play div with stylesheet link"""
        page = document_build("<p>x</p>\n", Params(title="R&J"), lang="fr")
        assert page.startswith("<!DOCTYPE html>")
        assert '<html lang="fr">' in page
        assert "<title>R&amp;J</title>" in page
        assert '<link rel="stylesheet" href="play.css">' in page
        assert '<div class="play">\n<p>x</p>\n</div>' in page

    def test_stylesheet_copy(self):
        """The packaged stylesheet is copied"""
        with tempfile.TemporaryDirectory() as tmpdir:
            target = stylesheet_copy(Path(tmpdir))
            assert target.name == "play.css"
            assert ".speech" in target.read_text(encoding="utf-8")


class TestDirectiveRegistry:
    """Test directive lookup"""

    def test_builtin_directives(self):
        """All mode and metadata directives are registered"""
        registry = DirectiveRegistry()
        modes = {spec.name for spec in registry.directives_listByCategory(DirectiveCategory.MODE)}
        metadata = {spec.name for spec in registry.directives_listByCategory(DirectiveCategory.METADATA)}
        assert modes == {
            "playscript-monologue-begin",
            "playscript-monologue-end",
            "playscript-on",
            "playscript-off",
        }
        assert metadata == {
            "playscript-title",
            "playscript-subtitle",
            "playscript-authors",
            "playscript-make-title",
        }

    def test_specs_registered_once_by_name(self):
        """Every registered key is the name of its own spec"""
        registry = DirectiveRegistry()
        assert len(registry.specs) == 8
        assert all(name == spec.name for name, spec in registry.specs.items())

    def test_spec_holds_name_category_handler(self):
        """A spec is just what dispatch needs"""
        spec = DirectiveRegistry().spec_get("playscript-off")
        assert [f.name for f in fields(spec)] == ["name", "category", "handler"]
        assert spec.category == DirectiveCategory.MODE

    def test_unknown_name(self):
        """Unknown names have no handler"""
        assert DirectiveRegistry().get("playscript-nope") is None

    @pytest.mark.parametrize("text, expected", [
        ("<!-- playscript-on -->\n", "playscript-on"),
        ("<!--playscript-off-->", "playscript-off"),
        ("  <!--   spaced   -->  ", "spaced"),
        ("<div>", None),
        ("<!-- open", None),
    ])
    def test_comment_extract(self, text, expected):
        """Comment delimiters and whitespace are stripped"""
        assert comment_extractDirective(text) == expected

    def test_title_block_empty(self):
        """Empty Params still give the cover wrapper"""
        assert titleBlock_make(Params()) == '<div class="cover"></div>'


class TestSettings:
    """Test settings driven configuration"""

    def test_anchor_id(self):
        """Anchor ids use the configured prefix"""
        assert AppSettings(anchor_prefix="line-").anchorId_make(3) == "line-3"

    def test_env_override(self, monkeypatch):
        """Settings read MDPLAYSCRIPT_ environment variables"""
        monkeypatch.setenv("MDPLAYSCRIPT_SPEECH_CLASS", "line")
        assert AppSettings().speech_class == "line"

    def test_options_from_settings(self):
        """Explicit overrides take precedence over settings"""
        options = Options.options_fromSettings(heading_anchors=True)
        assert options.heading_anchors is True
        assert options.replace_softbreaks_with == " "
