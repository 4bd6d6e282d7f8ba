"""JSON file holding the most recent :class:`CatalogSnapshot`."""

from __future__ import annotations

import json
import os
from pathlib import Path

from quizbowl.scraper.models import CatalogSnapshot


class CatalogStore:
    """Read / write the catalog artifact at *path*.

    Writes go to a temporary sibling which then replaces the artifact, so a
    reader never observes a half-written file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def mtime(self) -> float | None:
        """Modification time of the artifact, or ``None`` when it is absent or unreachable."""
        try:
            return self.path.stat().st_mtime
        except OSError:
            return None

    def read(self) -> CatalogSnapshot:
        """Load the artifact.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If it is not valid JSON or not a catalog.
        """
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return CatalogSnapshot.from_dict(data)

    def write(self, snapshot: CatalogSnapshot) -> None:
        """Replace the artifact with *snapshot*.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(
                json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
