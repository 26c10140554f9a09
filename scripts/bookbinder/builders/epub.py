"""
EPUB builder.

Pipeline: workspace → metadata → style sheet → cover → sections → write.
Each stage either completes or raises a BuildError naming it; the
temporary workspace is released on every path.
"""

import os
import time

from bookbinder.builders.base import BaseBuilder, BuildResult
from bookbinder.document import EpubDocument
from bookbinder.errors import (
    AssetRegistrationError,
    OutputWriteError,
    ResourceCreationError,
    StyleResolutionError,
    stage,
)
from bookbinder.sections import register_all
from bookbinder.stylesheet import resolve_stylesheet
from bookbinder.workspace import TemporaryWorkspace


class EpubBuilder(BaseBuilder):
    format_name = "EPUB"
    extension = ".epub"

    def __init__(self, book, document_factory=EpubDocument.create, **kwargs):
        super().__init__(book, **kwargs)
        self.document_factory = document_factory
        self.cleanup_error = None

    def _cleanup_failed(self, error):
        self.echo(f"  ✗ {error}")
        self.cleanup_error = error

    def build(self):
        self.header()
        start = time.monotonic()
        book = self.book
        self.cleanup_error = None

        with TemporaryWorkspace(on_cleanup_error=self._cleanup_failed) as workdir:
            self.log(f"  Workspace: {workdir}")

            with stage("create document", ResourceCreationError):
                document = self.document_factory(book.title)

            with stage("metadata", ResourceCreationError):
                document.set_language(book.lang)
                document.set_author(book.author)

            # ── Style sheet ────────────────────────────────
            with stage("style sheet", StyleResolutionError):
                css_path = resolve_stylesheet(book, document, workdir, log=self.log)
                css = document.add_stylesheet(css_path)

            # ── Cover ──────────────────────────────────────
            if book.cover:
                with stage("cover", AssetRegistrationError):
                    image = document.add_image(book.cover, os.path.basename(book.cover))
                    document.set_cover(image)
                self.log(f"  Cover: {book.cover}")

            # ── Sections ───────────────────────────────────
            self.log(f"  Input: {book.section_count} sections")
            register_all(document, book.sections, css, log=self.log)

            # ── Write ──────────────────────────────────────
            self.echo("  Generating EPUB...")
            with stage("write", OutputWriteError):
                document.write(self.output_file)

        elapsed = time.monotonic() - start
        self.echo(f"  ✓ {self.output_file} ({elapsed:.2f}s)")
        return BuildResult(
            output_file=self.output_file,
            elapsed=elapsed,
            sections=book.section_count,
            cleanup_error=self.cleanup_error,
        )
