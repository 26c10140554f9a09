"""
Scoped temporary working directory for a single build.

    with TemporaryWorkspace() as workdir:
        ...  # workdir is removed on every exit path

Removal failures are reported as CleanupError, never swallowed: they go
to `on_cleanup_error` when a handler is given, otherwise they are raised.
"""

import shutil
import tempfile

from bookbinder.errors import CleanupError, ResourceCreationError


class TemporaryWorkspace:
    def __init__(self, prefix="bookbinder", on_cleanup_error=None):
        self.prefix = prefix
        self.on_cleanup_error = on_cleanup_error
        self.path = None

    def __enter__(self):
        if self.path is not None:
            raise RuntimeError("TemporaryWorkspace is not reentrant")
        try:
            self.path = tempfile.mkdtemp(prefix=self.prefix)
        except OSError as e:
            raise ResourceCreationError(
                "workspace", f"cannot create temporary directory: {e}"
            ) from e
        return self.path

    def __exit__(self, exc_type, exc, tb):
        path, self.path = self.path, None
        try:
            shutil.rmtree(path)
        except OSError as e:
            error = CleanupError(
                "cleanup", f"cannot remove temporary directory {path}: {e}", path
            )
            error.__cause__ = e
            if self.on_cleanup_error is None:
                # A pending build failure stays in the exception chain.
                raise error
            self.on_cleanup_error(error)
        return False
