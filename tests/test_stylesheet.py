"""Tests for style sheet generation and resolution."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from bookbinder.errors import StyleResolutionError
from bookbinder.stylesheet import (
    STYLESHEET_NAME,
    StyleSheet,
    resolve_stylesheet,
    write_stylesheet,
)


def test_render_default_rules() -> None:
    css = StyleSheet().render()

    assert css == (
        "p {text-align: justify}\n"
        "h2 {margin-bottom: 1em; text-indent: 2em; font-size: 1.5em;  }\n"
        "h2 span {display: block; font-size: 0.75em;}\n"
    )


def test_render_interpolates_named_fields() -> None:
    css = StyleSheet(align="left", bottom="0.5em", indent=4, line_height="1.8").render()

    assert "p {text-align: left}" in css
    assert "margin-bottom: 0.5em; text-indent: 4em; font-size: 1.5em; line-height: 1.8;" in css
    assert "embedfont" not in css
    assert "@font-face" not in css


def test_render_with_font_adds_family_and_font_face() -> None:
    css = StyleSheet(font_uri="../fonts/kai.ttf").render()

    assert 'font-family: "embedfont";' in css
    assert "@font-face" in css
    assert "src: url(../fonts/kai.ttf) format('truetype');" in css
    # font-face is a top-level rule after the h2 rules
    assert css.index("h2 span") < css.index("@font-face")


def test_render_keeps_braces_in_values_literal() -> None:
    css = StyleSheet(align="{indent}", bottom="{0}").render()

    assert "p {text-align: {indent}}" in css
    assert "margin-bottom: {0};" in css


def test_render_is_deterministic() -> None:
    sheet = StyleSheet(align="left", bottom="2em", indent=1, line_height="2", font_uri="../fonts/a.ttf")
    assert sheet.render() == StyleSheet(**sheet.__dict__).render()


def test_write_stylesheet_failure_raises(tmp_path: Path) -> None:
    with pytest.raises(StyleResolutionError) as excinfo:
        write_stylesheet(str(tmp_path / "missing" / "x.css"), StyleSheet())

    assert excinfo.value.stage == "style sheet"


def test_resolve_generates_sheet_without_font(recorder, make_book, tmp_path: Path) -> None:
    document = recorder("T")
    book = make_book(font=str(tmp_path / "nope.ttf"), line_height="1.5")

    path = resolve_stylesheet(book, document, str(tmp_path))

    assert path == os.path.join(str(tmp_path), STYLESHEET_NAME)
    css = Path(path).read_text(encoding="utf-8")
    assert "line-height: 1.5;" in css
    assert "embedfont" not in css
    assert "add_font" not in document.names()


def test_resolve_embeds_existing_font(recorder, make_book, tmp_path: Path) -> None:
    font = tmp_path / "kai.ttf"
    font.write_bytes(b"\x00\x01\x00\x00")
    document = recorder("T")

    path = resolve_stylesheet(make_book(font=str(font)), document, str(tmp_path))

    css = Path(path).read_text(encoding="utf-8")
    assert ("add_font", str(font)) in document.calls
    assert 'font-family: "embedfont";' in css
    assert "url(../fonts/embedded.ttf)" in css


def test_resolve_custom_sheet_is_used_verbatim(recorder, make_book, tmp_path: Path) -> None:
    custom = tmp_path / "custom.css"
    custom.write_text("p {color: red}", encoding="utf-8")
    font = tmp_path / "kai.ttf"
    font.write_bytes(b"font")
    workdir = tmp_path / "work"
    workdir.mkdir()
    document = recorder("T")

    path = resolve_stylesheet(
        make_book(css=str(custom), font=str(font), line_height="3"), document, str(workdir)
    )

    assert path == str(custom)
    assert list(workdir.iterdir()) == []
    assert "add_font" not in document.names()


def test_resolve_missing_custom_sheet_raises(recorder, make_book, tmp_path: Path) -> None:
    with pytest.raises(StyleResolutionError):
        resolve_stylesheet(make_book(css=str(tmp_path / "gone.css")), recorder("T"), str(tmp_path))
