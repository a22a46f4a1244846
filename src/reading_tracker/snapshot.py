"""JSON snapshot store for items, sources and stats."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .config import settings
from .models.item import Item
from .models.source import Source
from .models.stats import UserStats

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """The snapshot file could not be read or parsed."""


class Snapshot(BaseModel):
    """Everything the tracker stores, in one document."""

    items: list[Item] = Field(default_factory=list)
    sources: list[Source] = Field(default_factory=list)
    stats: UserStats = Field(default_factory=UserStats)

    def replace_item(self, item: Item) -> "Snapshot":
        """Return a copy with the item of the same id swapped in."""
        items = [item if existing.id == item.id else existing for existing in self.items]
        return self.model_copy(update={"items": items})


def load_snapshot(path: Path | None = None) -> Snapshot:
    """Load a snapshot, or an empty one when the file does not exist yet."""
    path = path or settings.snapshot_path
    if not path.exists():
        logger.info(f"No snapshot at {path}, starting empty")
        return Snapshot()

    try:
        return Snapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e.error_count()} error(s)") from e


def save_snapshot(snapshot: Snapshot, path: Path | None = None) -> None:
    """Write a snapshot, replacing the file in one step."""
    path = path or settings.snapshot_path
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
    tmp_path.replace(path)
    logger.info(f"Saved snapshot with {len(snapshot.items)} items to {path}")
