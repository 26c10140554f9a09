"""
Page style sheet generation.

The generated sheet styles paragraphs and the two-part <h2> section
headings produced by bookbinder.titles. A user-supplied sheet replaces
generation entirely.
"""

import os
from dataclasses import dataclass

from bookbinder.errors import AssetRegistrationError, StyleResolutionError, stage

FONT_FAMILY = "embedfont"
STYLESHEET_NAME = "page_styles.css"

RULES = """\
p {{text-align: {align}}}
h2 {{margin-bottom: {bottom}; text-indent: {indent}em; font-size: 1.5em; {extra} }}
h2 span {{display: block; font-size: 0.75em;}}
"""

FONT_FACE = """
@font-face {{
  font-family: "{family}";
  src: url({uri}) format('truetype');
}}
"""


@dataclass(frozen=True)
class StyleSheet:
    align: str = "justify"
    bottom: str = "1em"
    indent: int = 2
    line_height: str = ""
    font_uri: str = ""

    @property
    def extra(self):
        """Declarations appended to the h2 rule."""
        extra = ""
        if self.line_height:
            extra += f"line-height: {self.line_height};"
        if self.font_uri:
            extra += f'\nfont-family: "{FONT_FAMILY}";\n'
        return extra

    def render(self):
        css = RULES.format(
            align=self.align,
            bottom=self.bottom,
            indent=int(self.indent),
            extra=self.extra,
        )
        if self.font_uri:
            css += FONT_FACE.format(family=FONT_FAMILY, uri=self.font_uri)
        return css

    @classmethod
    def for_book(cls, book, font_uri=""):
        return cls(
            align=book.align,
            bottom=book.bottom,
            indent=book.indent,
            line_height=book.line_height,
            font_uri=font_uri,
        )


def write_stylesheet(path, sheet):
    """Render `sheet` to `path`. Returns the path."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(sheet.render())
    except OSError as e:
        raise StyleResolutionError(
            "style sheet", f"cannot write {path}: {e}"
        ) from e
    return path


def resolve_stylesheet(book, document, workdir, log=None):
    """
    Return the style sheet path every section should link to.

    A custom sheet (`book.css`) is used verbatim: no generation, no
    font embedding, line height ignored. Otherwise a sheet is generated
    into `workdir`, embedding `book.font` first when that file exists.
    """
    if book.css:
        if not os.path.isfile(book.css):
            raise StyleResolutionError(
                "style sheet", f"custom style sheet not found: {book.css}"
            )
        if log:
            log(f"  CSS:   {book.css}")
        return book.css

    font_uri = ""
    if book.font:
        if os.path.isfile(book.font):
            with stage("font", AssetRegistrationError):
                font_uri = document.add_font(book.font)
            if log:
                log(f"  Font:  {book.font}")
        elif log:
            log(f"  Font:  {book.font} not found, skipping")

    sheet = StyleSheet.for_book(book, font_uri=font_uri)
    return write_stylesheet(os.path.join(workdir, STYLESHEET_NAME), sheet)
