"""
Book directory resolution, section file gathering, and artifact lookup.
"""

import glob
import os
import re


def natural_sort_key(s):
    """Sort strings with embedded numbers naturally (2.html before 10.html)."""
    return [
        int(text) if text.isdigit() else text.lower()
        for text in re.split(r"(\d+)", s)
    ]


def find_book_dir(identifier, project_root):
    """
    Resolve a book identifier to a directory holding book.yaml.

    `identifier` is a path (absolute or relative to `project_root`) or
    a name under `project_root/manuscript/`: "1" picks "1_wind_rises"
    by number prefix, "wind" the first directory whose name contains it.

    Returns: absolute path to the book directory, or None.
    """
    for candidate in [identifier, os.path.join(project_root, identifier)]:
        if os.path.isfile(os.path.join(candidate, "book.yaml")):
            return os.path.abspath(candidate)

    manuscript_root = os.path.join(project_root, "manuscript")
    if not os.path.isdir(manuscript_root):
        return None

    books = [
        entry
        for entry in sorted(os.listdir(manuscript_root), key=natural_sort_key)
        if os.path.isfile(os.path.join(manuscript_root, entry, "book.yaml"))
    ]
    by_number = [entry for entry in books if entry.split("_", 1)[0] == identifier]
    by_name = [entry for entry in books if identifier.lower() in entry.lower()]
    matches = by_number or by_name
    if not matches:
        return None
    return os.path.join(manuscript_root, matches[0])


def get_section_files(book_dir, section="chapters"):
    """Get naturally sorted HTML fragments from a subdirectory."""
    section_dir = os.path.join(book_dir, section)
    if not os.path.isdir(section_dir):
        return []
    files = glob.glob(os.path.join(section_dir, "*.html"))
    files.sort(key=natural_sort_key)
    return files


def resolve_artifact(book_dir, filename):
    """
    Resolve an artifact filename to its full path.

    Search order (first match wins):
        1. absolute path as given
        2. book artifacts/    (cover.jpg, fonts, custom css)
        3. book directory itself

    Returns: absolute path or None.
    """
    if not filename:
        return None

    if os.path.isabs(filename):
        return filename if os.path.exists(filename) else None

    for base in [os.path.join(book_dir, "artifacts"), book_dir]:
        path = os.path.join(base, filename)
        if os.path.exists(path):
            return os.path.abspath(path)

    return None


def read_fragment(path):
    """Read a pre-rendered HTML fragment."""
    with open(path, encoding="utf-8") as f:
        return f.read()
