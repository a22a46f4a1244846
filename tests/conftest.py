"""Shared test fixtures."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from typer.testing import CliRunner

from reading_tracker.config import settings
from reading_tracker.models import Item, ItemStatus, UserStats
from reading_tracker.snapshot import Snapshot, save_snapshot

ItemFactory = Callable[..., Item]


@pytest.fixture
def make_item() -> ItemFactory:
    """Build queued items with sensible defaults."""

    def _make(
        item_id: str,
        saved_at: datetime = datetime(2024, 6, 1),
        estimated_minutes: float | None = 10,
        tags: list[str] | None = None,
        status: ItemStatus = ItemStatus.QUEUED,
        **kwargs,
    ) -> Item:
        return Item(
            id=item_id,
            title=f"Item {item_id}",
            saved_at=saved_at,
            estimated_minutes=estimated_minutes,
            tags=tags or [],
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def utc_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin local time to UTC so offsets in stored timestamps convert predictably."""
    monkeypatch.setattr(settings, "timezone", "UTC")


@pytest.fixture
def runner() -> CliRunner:
    """CLI test runner."""
    return CliRunner()


@pytest.fixture
def snapshot_file(tmp_path: Path, make_item: ItemFactory) -> Path:
    """A snapshot on disk with three queued items and one kept item."""
    snapshot = Snapshot(
        items=[
            make_item("old", datetime(2024, 1, 1), 30, ["AI"]),
            make_item("diverse", datetime(2024, 6, 1), 20, ["DevOps"]),
            make_item("quick", datetime(2024, 12, 1), 5, ["AI"]),
            make_item(
                "done",
                datetime(2023, 1, 1),
                1,
                ["AI"],
                status=ItemStatus.KEPT,
                verdict="keep",
                verdict_at=datetime(2024, 12, 10),
            ),
        ],
        stats=UserStats(),
    )
    path = tmp_path / "snapshot.json"
    save_snapshot(snapshot, path)
    return path
