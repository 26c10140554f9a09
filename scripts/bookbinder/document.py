"""
EPUB document assembly on top of EbookLib.

EpubDocument is the only module that touches ebooklib. The builder
registers styles, images, fonts and sections through it; reading order
and table of contents follow registration order exactly.
"""

import os
import uuid

from ebooklib import epub

IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}

FONT_TYPES = {
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
}


def _read(path):
    with open(path, "rb") as f:
        return f.read()


class EpubDocument:
    """
    One in-progress EPUB.

    Usage:
        doc = EpubDocument.create("Title")
        css = doc.add_stylesheet("page_styles.css")
        parent = doc.add_section("<h2>One</h2>...", "One", css)
        doc.add_subsection(parent, "<h2>One.1</h2>...", "One.1", css)
        doc.write("out/book.epub")
    """

    def __init__(self, book):
        self._book = book
        self._lang = None
        self._has_cover = False
        self._sections = {}
        self._toc = []      # [(EpubHtml, [EpubHtml, ...]), ...] in order
        self._spine = []
        self._counter = 0

    @classmethod
    def create(cls, title):
        book = epub.EpubBook()
        book.set_identifier(f"urn:uuid:{uuid.uuid4()}")
        book.set_title(title)
        return cls(book)

    # ── Metadata ───────────────────────────────────────────

    def set_language(self, code):
        self._lang = code
        self._book.set_language(code)

    def set_author(self, name):
        self._book.add_author(name)

    # ── Assets ─────────────────────────────────────────────

    def _next_uid(self, kind):
        self._counter += 1
        return f"{kind}{self._counter:04d}"

    def add_stylesheet(self, path):
        item = epub.EpubItem(
            uid=self._next_uid("css"),
            file_name=f"css/{os.path.basename(path)}",
            media_type="text/css",
            content=_read(path),
        )
        self._book.add_item(item)
        return item

    def add_image(self, path, name):
        ext = os.path.splitext(name)[1].lower()
        item = epub.EpubItem(
            uid=self._next_uid("image"),
            file_name=f"images/{name}",
            media_type=IMAGE_TYPES.get(ext, "image/jpeg"),
            content=_read(path),
        )
        self._book.add_item(item)
        return item

    def set_cover(self, image):
        # ebooklib registers the cover as its own item and adds a cover page
        self._book.items.remove(image)
        self._book.set_cover(image.file_name, image.content)
        self._has_cover = True

    def add_font(self, path):
        """Embed a font; returns its URI relative to registered style sheets."""
        name = os.path.basename(path)
        ext = os.path.splitext(name)[1].lower()
        item = epub.EpubItem(
            uid=self._next_uid("font"),
            file_name=f"fonts/{name}",
            media_type=FONT_TYPES.get(ext, "font/ttf"),
            content=_read(path),
        )
        self._book.add_item(item)
        return f"../fonts/{name}"

    # ── Sections ───────────────────────────────────────────

    def _html(self, html, title, css):
        uid = self._next_uid("section")
        page = epub.EpubHtml(
            uid=uid,
            file_name=f"{uid}.xhtml",
            title=title,
            lang=self._lang,
            content=html,
        )
        if css is not None:
            page.add_link(href=css.file_name, rel="stylesheet", type="text/css")
        self._book.add_item(page)
        self._spine.append(page)
        return page

    def add_section(self, html, title, css):
        """Register a top-level section. Returns its id."""
        page = self._html(html, title, css)
        children = []
        self._toc.append((page, children))
        self._sections[page.id] = children
        return page.id

    def add_subsection(self, parent_id, html, title, css):
        """Register a section nested under `parent_id`."""
        if parent_id not in self._sections:
            raise KeyError(f"unknown parent section: {parent_id}")
        page = self._html(html, title, css)
        self._sections[parent_id].append(page)
        return page.id

    # ── Output ─────────────────────────────────────────────

    def table_of_contents(self):
        toc = []
        for page, children in self._toc:
            if children:
                toc.append((epub.Section(page.title, href=page.file_name), list(children)))
            else:
                toc.append(page)
        return toc

    def write(self, output_path):
        self._book.toc = self.table_of_contents()
        self._book.add_item(epub.EpubNcx())
        self._book.add_item(epub.EpubNav())
        self._book.spine = (["cover"] if self._has_cover else []) + ["nav"] + self._spine

        # EpubWriter directly: write_epub() hides I/O errors
        writer = epub.EpubWriter(output_path, self._book, {})
        writer.process()
        writer.write()
