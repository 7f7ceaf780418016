"""Working data directory shared by every company during a run."""

from __future__ import annotations

import shutil
from pathlib import Path

from konducta.core.errors import DataStoreError
from konducta.framework.logging import get_logger

logger = get_logger(__name__)


class DataStore:
    """
    Filesystem root that companies write advisories into.

    ``clean`` wipes everything below the root after a successful upload; the
    root itself is kept so the next run can reuse it.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def path(self, *parts: str) -> Path:
        """Resolve a path below the root, creating the root if needed."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DataStoreError(f"could not create data directory {self.root}: {exc}", cause=exc).with_context(
                path=str(self.root)
            ) from exc
        target = self.root.joinpath(*parts)
        if not target.resolve().is_relative_to(self.root.resolve()):
            raise DataStoreError(f"{target} escapes data directory {self.root}").with_context(path=str(target))
        return target

    def clean(self) -> None:
        """Remove every file and directory below the root.

        Raises:
            DataStoreError: If the root cannot be listed or an entry cannot be removed.
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise DataStoreError(f"could not open data directory {self.root}: {exc}", cause=exc).with_context(
                path=str(self.root)
            ) from exc

        removed = 0
        for entry in entries:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            except OSError as exc:
                raise DataStoreError(f"could not remove {entry}: {exc}", cause=exc).with_context(
                    path=str(entry)
                ) from exc
            removed += 1

        logger.debug("data.cleaned", root=str(self.root), removed=removed)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={str(self.root)!r})"
