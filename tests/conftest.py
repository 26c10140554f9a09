"""Shared fixtures: a recording stand-in for the EPUB document."""

from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from bookbinder.model import Book


class RecordingDocument:
    """Records every call the builder makes, in order."""

    def __init__(self, title: str) -> None:
        self.calls: List[Tuple[Any, ...]] = [("create", title)]
        self.stylesheets: List[str] = []
        self.fail_sections: set = set()
        self.fail_write = False
        self._next = 0

    def set_language(self, code: str) -> None:
        self.calls.append(("set_language", code))

    def set_author(self, name: str) -> None:
        self.calls.append(("set_author", name))

    def add_stylesheet(self, path: str) -> str:
        self.calls.append(("add_stylesheet", path))
        with open(path, encoding="utf-8") as f:
            self.stylesheets.append(f.read())
        return f"css:{path}"

    def add_image(self, path: str, name: str) -> str:
        self.calls.append(("add_image", path, name))
        return f"image:{name}"

    def set_cover(self, image: str) -> None:
        self.calls.append(("set_cover", image))

    def add_font(self, path: str) -> str:
        self.calls.append(("add_font", path))
        return "../fonts/embedded.ttf"

    def add_section(self, html: str, title: str, css: str) -> str:
        if title in self.fail_sections:
            raise ValueError(f"cannot add {title}")
        self._next += 1
        section_id = f"s{self._next}"
        self.calls.append(("add_section", title, html, css))
        return section_id

    def add_subsection(self, parent_id: str, html: str, title: str, css: str) -> str:
        if title in self.fail_sections:
            raise ValueError(f"cannot add {title}")
        self._next += 1
        self.calls.append(("add_subsection", parent_id, title, html, css))
        return f"s{self._next}"

    def write(self, output_path: str) -> None:
        if self.fail_write:
            raise OSError("disk full")
        self.calls.append(("write", output_path))

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def recorder():
    """Factory that creates RecordingDocuments and remembers the last one."""

    class Factory:
        document: RecordingDocument = None  # type: ignore[assignment]

        def __call__(self, title: str) -> RecordingDocument:
            self.document = RecordingDocument(title)
            return self.document

    return Factory()


@pytest.fixture
def make_book(tmp_path):
    """Build a Book with test-friendly defaults."""

    def _make(**overrides: Any) -> Book:
        fields = {
            "title": "T",
            "author": "A",
            "out": str(tmp_path / "book"),
        }
        fields.update(overrides)
        return Book(**fields)

    return _make
