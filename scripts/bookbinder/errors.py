"""
Build error taxonomy.

Every fatal failure during an EPUB build is raised as a BuildError
subclass carrying the stage that failed. The CLI prints the message
and exits non-zero; nothing here is used for ordinary control flow.
"""

from contextlib import contextmanager


class BuildError(Exception):
    """Base class for errors raised while assembling a book."""

    def __init__(self, stage, message):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message


class ResourceCreationError(BuildError):
    """Temporary workspace or document handle could not be created."""
    pass


class StyleResolutionError(BuildError):
    """Style sheet could not be written or read."""
    pass


class AssetRegistrationError(BuildError):
    """Cover image or font could not be registered."""
    pass


class SectionRegistrationError(BuildError):
    """
    One or more sections failed to register.

    `failures` holds every SectionFailure collected during the pass,
    in registration order.
    """

    def __init__(self, stage, failures):
        lines = [f"{len(failures)} section(s) failed to register"]
        lines.extend(f"  - {failure}" for failure in failures)
        super().__init__(stage, "\n".join(lines))
        self.failures = list(failures)


class OutputWriteError(BuildError):
    """The finished EPUB could not be written."""
    pass


class CleanupError(BuildError):
    """The temporary workspace could not be removed."""

    def __init__(self, stage, message, path):
        super().__init__(stage, message)
        self.path = path


@contextmanager
def stage(name, error_cls):
    """
    Wrap foreign exceptions raised inside a build stage.

    BuildErrors pass through untouched; anything else is re-raised as
    `error_cls` with the stage name prepended.
    """
    try:
        yield
    except BuildError:
        raise
    except Exception as e:
        raise error_cls(name, str(e) or type(e).__name__) from e
