"""File actions executed inside the sandbox checkout."""

from __future__ import annotations

import logging

from aidev.actions.base import ActionGroup, ActionName, action, resolve_path
from aidev.errors import ActionError

logger = logging.getLogger(__name__)


class FileSystemActions(ActionGroup):
    """Read, write and list files in the sandbox."""

    @action(ActionName.LIST_FILES)
    def list_files(self, path: str = "") -> str:
        """List the entries of a directory, one name per line.

        Args:
            path: Directory to list, relative to the repository root.

        Raises:
            ActionError: If the directory cannot be listed.
        """
        resolved = resolve_path(path)
        logger.debug("fs list path=%s", resolved)
        try:
            entries = self.sandbox.files.list(resolved)
        except Exception as e:
            raise ActionError(f"Cannot list '{path}': {e}") from e
        return "\n".join(entry.name for entry in entries)

    @action(ActionName.READ_FILE)
    def read_file(self, path: str) -> str:
        """Read the full text contents of a file.

        Raises:
            ActionError: If the file does not exist or cannot be read.
        """
        resolved = resolve_path(path)
        logger.debug("fs read path=%s", resolved)
        try:
            return self.sandbox.files.read(resolved)
        except Exception as e:
            raise ActionError(f"Cannot read '{path}': {e}") from e

    @action(ActionName.SAVE_CODE_TO_FILE)
    def save_code_to_file(self, path: str, content: str) -> str:
        """Create or overwrite a file with the given content."""
        resolved = resolve_path(path)
        logger.debug("fs write path=%s bytes=%s", resolved, len(content))
        try:
            self.sandbox.files.write(resolved, content)
        except Exception as e:
            raise ActionError(f"Cannot write '{path}': {e}") from e
        return f"Saved {path}"

    @action(ActionName.MAKE_DIR)
    def make_dir(self, path: str) -> str:
        """Create a directory, including missing parents."""
        resolved = resolve_path(path)
        logger.debug("fs mkdir path=%s", resolved)
        try:
            created = self.sandbox.files.make_dir(resolved)
        except Exception as e:
            raise ActionError(f"Cannot create directory '{path}': {e}") from e
        if created is False:
            return f"Directory {path} already exists"
        return f"Created directory {path}"
