"""
Book configuration: load, validate, and provide defaults for book.yaml.

A book directory looks like:

    my_book/
        book.yaml
        artifacts/      cover.jpg, fonts, custom css (optional)
        chapters/       1.html, 2.html, ... (used when book.yaml lists no sections)
"""

import os

import yaml

from bookbinder.model import Book, SubSection, TopSection
from bookbinder.resolve import (
    get_section_files,
    read_fragment,
    resolve_artifact,
)


# Fields required in every book.yaml
REQUIRED_FIELDS = ["title", "author"]

# Defaults applied if missing
DEFAULTS = {
    "lang": "zh",
    "out": "",
    "cover": "",
    "font": "",
    "css": "",
    "align": "justify",
    "bottom": "1em",
    "indent": 2,
    "line_height": "",
    "sections": [],
}

# Picked up from artifacts/ when book.yaml names no cover
DEFAULT_COVER = "cover.jpg"


class ConfigError(Exception):
    """Raised when book.yaml is missing or invalid."""
    pass


class BookConfig:
    """
    Loaded, validated book configuration.

    Usage:
        config = BookConfig.load(book_dir)
        config.get("title")   # "风起"
        config.get("font")    # "" if not set
        book = config.to_book()
    """

    def __init__(self, data, book_dir):
        self._data = data
        self.book_dir = book_dir

    @classmethod
    def load(cls, book_dir):
        """Load and validate book.yaml from a book directory."""
        yaml_path = os.path.join(book_dir, "book.yaml")
        if not os.path.exists(yaml_path):
            raise ConfigError(f"No book.yaml found in {book_dir}")

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"book.yaml is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"book.yaml must be a YAML mapping, got {type(data).__name__}")

        # Validate required fields
        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise ConfigError(
                f"book.yaml missing required fields: {', '.join(missing)}"
            )

        # Apply defaults
        for key, default in DEFAULTS.items():
            if data.get(key) is None:
                data[key] = list(default) if isinstance(default, list) else default

        if not data["out"]:
            data["out"] = os.path.basename(os.path.normpath(book_dir))

        try:
            data["indent"] = int(data["indent"])
        except (TypeError, ValueError):
            raise ConfigError(f"indent must be an integer, got {data['indent']!r}")

        if not isinstance(data["sections"], list):
            raise ConfigError("sections must be a list")

        return cls(data, book_dir)

    # ── Field access ───────────────────────────────────────

    def get(self, key, default=None):
        return self._data.get(key, default)

    def update(self, overrides):
        """Apply non-empty overrides (e.g. from the command line)."""
        for key, value in overrides.items():
            if value is not None:
                self._data[key] = value

    # ── Assets ─────────────────────────────────────────────

    def _required_artifact(self, key):
        name = self.get(key)
        if not name:
            return ""
        path = resolve_artifact(self.book_dir, name)
        if not path:
            raise ConfigError(f"{key} '{name}' not found in {self.book_dir}")
        return path

    def cover_path(self):
        if self.get("cover"):
            return self._required_artifact("cover")
        return resolve_artifact(self.book_dir, DEFAULT_COVER) or ""

    def font_path(self):
        """
        A missing font is not a config error: the builder skips
        embedding, so an unresolved name passes through unchanged.
        """
        name = self.get("font")
        if not name:
            return ""
        return resolve_artifact(self.book_dir, name) or os.path.join(self.book_dir, name)

    def css_path(self):
        return self._required_artifact("css")

    def output_base(self):
        out = self._data["out"]
        if out.endswith(".epub"):
            out = out[: -len(".epub")]
        return out

    # ── Sections ───────────────────────────────────────────

    def _content(self, entry, where):
        if "content" in entry:
            return str(entry["content"] or "")
        if "file" in entry:
            path = resolve_artifact(self.book_dir, entry["file"])
            if not path:
                raise ConfigError(f"{where}: file '{entry['file']}' not found")
            return read_fragment(path)
        raise ConfigError(f"{where}: needs 'content' or 'file'")

    def _entry(self, entry, where):
        if not isinstance(entry, dict) or not entry.get("title"):
            raise ConfigError(f"{where}: each section needs a title")
        return str(entry["title"]), self._content(entry, where)

    def sections(self):
        """Build the two-level section tree from book.yaml or chapters/."""
        entries = self.get("sections") or []
        if not entries:
            return tuple(
                TopSection(
                    title=os.path.splitext(os.path.basename(path))[0],
                    content=read_fragment(path),
                )
                for path in get_section_files(self.book_dir, "chapters")
            )

        result = []
        for i, entry in enumerate(entries, 1):
            title, content = self._entry(entry, f"sections[{i}]")
            subsections = []
            for j, sub in enumerate(entry.get("sections") or [], 1):
                where = f"sections[{i}].sections[{j}]"
                if isinstance(sub, dict) and sub.get("sections"):
                    raise ConfigError(f"{where}: sections nest at most two levels deep")
                sub_title, sub_content = self._entry(sub, where)
                subsections.append(SubSection(sub_title, sub_content))
            result.append(TopSection(title, content, tuple(subsections)))
        return tuple(result)

    # ── Convenience ────────────────────────────────────────

    def to_book(self):
        data = self._data
        return Book(
            title=str(data["title"]),
            author=str(data["author"]),
            out=self.output_base(),
            lang=str(data["lang"]),
            cover=self.cover_path(),
            font=self.font_path(),
            css=self.css_path(),
            align=str(data["align"]),
            bottom=str(data["bottom"]),
            indent=data["indent"],
            line_height=str(data["line_height"]),
            sections=self.sections(),
        )

    def summary(self, echo=print):
        """Print a short config summary."""
        echo(f"\n  Book:   {self._data['title']}")
        echo(f"  Author: {self._data['author']}")
        echo(f"  Source: {self.book_dir}")
