"""
Section tree registration.

Walks the two-level section tree and registers every section with the
document in input order. Failures are collected rather than aborting
the pass; if any occurred, SectionRegistrationError lists all of them
once the pass is complete, so a partial book is never written.
"""

from dataclasses import dataclass

from bookbinder.errors import SectionRegistrationError
from bookbinder.titles import wrap_title


@dataclass(frozen=True)
class SectionFailure:
    title: str
    error: str
    parent: str = ""

    def __str__(self):
        where = f"{self.parent} / {self.title}" if self.parent else self.title
        return f"{where}: {self.error}"


def register_all(document, sections, css, log=None):
    """
    Register `sections` with `document`, linking each to `css`.

    Returns the list of registered section ids in registration order.
    """
    registered = []
    failures = []

    for section in sections:
        html = wrap_title(section.title, section.content)
        try:
            parent_id = document.add_section(html, section.title, css)
        except Exception as e:
            failures.append(SectionFailure(section.title, str(e) or type(e).__name__))
            for sub in section.subsections:
                failures.append(
                    SectionFailure(sub.title, "parent section failed", parent=section.title)
                )
            continue

        registered.append(parent_id)
        if log:
            log(f"  + {section.title}")

        for sub in section.subsections:
            try:
                sub_id = document.add_subsection(
                    parent_id, wrap_title(sub.title, sub.content), sub.title, css
                )
            except Exception as e:
                failures.append(
                    SectionFailure(sub.title, str(e) or type(e).__name__, parent=section.title)
                )
                continue
            registered.append(sub_id)
            if log:
                log(f"    + {sub.title}")

    if failures:
        raise SectionRegistrationError("sections", failures)
    return registered
