"""
Book model handed to the EPUB builder.

The section tree is exactly two levels deep: a TopSection may carry
SubSections, a SubSection carries nothing below it.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class SubSection:
    title: str
    content: str


@dataclass(frozen=True)
class TopSection:
    title: str
    content: str
    subsections: Tuple[SubSection, ...] = ()

    def __post_init__(self):
        # Accept any iterable from callers, store an immutable tuple.
        object.__setattr__(self, "subsections", tuple(self.subsections))


@dataclass(frozen=True)
class Book:
    """
    Everything the builder needs to produce one EPUB.

    Empty strings mean "not set" for cover, font, css and line_height.
    `out` is the output path without the .epub extension.
    """

    title: str
    author: str
    out: str
    lang: str = "zh"
    cover: str = ""
    font: str = ""
    css: str = ""
    align: str = "justify"
    bottom: str = "1em"
    indent: int = 2
    line_height: str = ""
    sections: Tuple[TopSection, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def section_count(self):
        """Top sections plus every sub-section."""
        return sum(1 + len(s.subsections) for s in self.sections)
