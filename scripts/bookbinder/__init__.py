"""
bookbinder — EPUB assembly from a two-level section tree.

Public API:
    from bookbinder.model import Book, TopSection, SubSection
    from bookbinder.config import BookConfig
    from bookbinder.builders import BUILDERS, EpubBuilder
    from bookbinder.titles import format_title, wrap_title
    from bookbinder.stylesheet import StyleSheet
"""
from bookbinder.builders import BUILDERS, EpubBuilder
from bookbinder.model import Book, SubSection, TopSection

__all__ = ["BUILDERS", "Book", "EpubBuilder", "SubSection", "TopSection"]
