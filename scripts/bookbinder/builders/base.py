"""
Base builder class for output formats.

Subclasses implement `build()` and set `format_name` / `extension`.
Shared logic (output naming, progress reporting) lives here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class BuildResult:
    output_file: str
    elapsed: float
    sections: int
    cleanup_error: Optional[Exception] = None

    @property
    def ok(self):
        return self.cleanup_error is None


class BaseBuilder(ABC):
    """
    Abstract base for format builders.

    Subclasses must define:
        format_name:  str   — human-readable name ("EPUB", ...)
        extension:    str   — output file extension (".epub", ...)
        build():      method — the actual build logic

    Progress goes through `echo` (print by default), so callers can
    capture or silence it without touching global state.
    """

    format_name = None  # Override in subclass
    extension = None    # Override in subclass

    def __init__(self, book, echo=print, verbose=False):
        self.book = book
        self.echo = echo
        self.verbose = verbose

    # ── Output path ────────────────────────────────────────

    @property
    def output_file(self):
        return f"{self.book.out}{self.extension}"

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        if self.verbose:
            self.echo(msg)

    def header(self):
        self.echo(f"\n{'─' * 60}")
        self.echo(f"  Building {self.format_name}: {self.book.title}")
        self.echo(f"{'─' * 60}")

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def build(self):
        """
        Execute the build. Returns a BuildResult, raises BuildError.
        """
        ...
