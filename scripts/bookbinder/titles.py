"""
Section title markup.

Titles like "第一章 风起" render as a two-part heading: the leading
token in a <span> (styled as a small block label by the generated
style sheet) followed by the rest of the title.
"""

import re

HTML_TITLE_START = "<h2>"
HTML_TITLE_END = "</h2>"


def format_title(title):
    """Split on the first whitespace run; label the leading token."""
    parts = re.split(r"\s+", title, maxsplit=1)
    if len(parts) == 2:
        return f"<span>{parts[0]}</span>{parts[1]}"
    return title


def wrap_title(title, content):
    """Prefix pre-rendered section content with its heading."""
    return HTML_TITLE_START + format_title(title) + HTML_TITLE_END + content
