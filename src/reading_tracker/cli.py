"""CLI interface for the reading tracker."""

import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .models import FetchInterval, Item, QueueType, Streak, Verdict
from .models.timestamps import local_now, local_zone
from .services import (
    all_tags,
    apply_verdict,
    backlog_items,
    create_link_item,
    create_source,
    create_text_item,
    delete_source,
    dismiss_item,
    fetch_multi_queue,
    find_item,
    find_source,
    get_filtered_queue,
    list_sources,
    parse_tag_list,
    recalculate_priorities,
    recent_verdict_tags,
    record_verdict_stats,
    release_due_revisits,
    remove_item,
    toggle_source,
    update_streak,
)
from .snapshot import Snapshot, SnapshotError, load_snapshot, save_snapshot

app = typer.Typer(help="Reading queue and streak tracker")
console = Console()
logger = logging.getLogger(__name__)

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]

SNAPSHOT_OPTION = typer.Option(None, "--snapshot", "-f", help="Snapshot file (defaults to settings)")

LANE_LABELS = {
    QueueType.OLDEST: "Oldest",
    QueueType.MIX_UP: "Mix it up",
    QueueType.QUICK: "Quick win",
}


def _load(path: Path | None) -> Snapshot:
    try:
        snapshot = load_snapshot(path)
    except SnapshotError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return snapshot.model_copy(update={"items": release_due_revisits(snapshot.items)})


def _minutes(item: Item) -> str:
    return f"{item.estimated_minutes:g}m" if item.estimated_minutes is not None else "-"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    """Reading queue and streak tracker."""
    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command("next")
def next_items(
    snapshot_path: Path = SNAPSHOT_OPTION,
    tag: str = typer.Option(None, "--tag", "-t", help="Only items with this tag"),
):
    """Show what to read next: oldest, mix it up, quick win."""
    snapshot = _load(snapshot_path)
    recent = recent_verdict_tags(snapshot.items)
    result = fetch_multi_queue(snapshot.items, recent, tag_filter=tag)

    if not result.lanes:
        console.print("[yellow]Queue is empty[/yellow]")
        return

    table = Table(title=f"Up Next ({result.total_queued} queued)")
    table.add_column("Lane", style="green")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("Reason", style="dim")

    for lane in result.lanes:
        table.add_row(
            LANE_LABELS[lane.type],
            lane.item.id,
            lane.item.title[:40],
            lane.item.domain,
            lane.reason,
        )

    console.print(table)


@app.command()
def filtered(
    tag: str = typer.Option(..., "--tag", "-t", help="Tag to filter by"),
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Show the oldest queued item with a tag and the few after it."""
    snapshot = _load(snapshot_path)
    view = get_filtered_queue(snapshot.items, tag)

    if view.current is None:
        console.print(f"[yellow]No queued items tagged {tag}[/yellow]")
        return

    console.print(f"\n[bold]{tag}[/bold]: {view.filtered_count} of {view.total} queued items")
    console.print(f"  Current: [cyan]{view.current.id}[/cyan] {view.current.title}")
    for item in view.upcoming:
        console.print(f"  Upcoming: [cyan]{item.id}[/cyan] {item.title}")


@app.command()
def priorities(
    snapshot_path: Path = SNAPSHOT_OPTION,
    limit: int = typer.Option(20, "--limit", "-l", help="Number of results"),
    save: bool = typer.Option(False, "--save", help="Store the new scores"),
):
    """Recalculate priority scores for queued items."""
    snapshot = _load(snapshot_path)
    rescored = recalculate_priorities(snapshot.items)
    queued = sorted(
        (item for item in rescored if item.is_queued),
        key=lambda item: item.priority_score,
        reverse=True,
    )

    if not queued:
        console.print("[yellow]No queued items[/yellow]")
        return

    table = Table(title=f"Priorities ({len(queued)} queued)")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Time")
    table.add_column("Revisits")
    table.add_column("Score", style="green")

    for item in queued[:limit]:
        table.add_row(
            item.id,
            item.title[:40],
            _minutes(item),
            str(item.revisit_count),
            f"{item.priority_score:.3f}",
        )

    console.print(table)

    if save:
        save_snapshot(snapshot.model_copy(update={"items": rescored}), snapshot_path)
        console.print("[green]Scores saved[/green]")


@app.command()
def verdict(
    item_id: str,
    decision: Verdict,
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Record a verdict (keep, revisit, discard) for a queued item."""
    snapshot = _load(snapshot_path)
    now = local_now()

    try:
        item = apply_verdict(find_item(snapshot.items, item_id), decision, now)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    stats = record_verdict_stats(snapshot.stats, decision, now, local_zone())
    snapshot = snapshot.replace_item(item).model_copy(update={"stats": stats})
    save_snapshot(snapshot, snapshot_path)

    console.print(f"[green]{decision.value}[/green]: {item.title or item.id}")
    if item.revisit_after:
        console.print(f"  Back in queue after {item.revisit_after:%Y-%m-%d}")
    console.print(f"  Streak: {stats.current_streak} day(s), best {stats.longest_streak}")


@app.command()
def stats(snapshot_path: Path = SNAPSHOT_OPTION):
    """Show streak and verdict totals."""
    snapshot = _load(snapshot_path)
    user_stats = snapshot.stats
    last = (
        user_stats.last_verdict_date.strftime("%Y-%m-%d %H:%M")
        if user_stats.last_verdict_date
        else "never"
    )

    console.print(
        Panel(
            "\n".join(
                [
                    f"Current streak: [bold]{user_stats.current_streak}[/bold]",
                    f"Longest streak: {user_stats.longest_streak}",
                    f"Last verdict: {last}",
                    f"Kept: {user_stats.total_kept} ({user_stats.weekly_kept} this week)",
                    f"Discarded: {user_stats.total_discarded} ({user_stats.weekly_discarded} this week)",
                    f"Revisited: {user_stats.total_revisited}",
                    f"Queued: {sum(1 for item in snapshot.items if item.is_queued)}",
                ]
            ),
            title="Reading Stats",
        )
    )


@app.command()
def streak(
    current: int = typer.Option(0, "--current", min=0, help="Current streak"),
    longest: int = typer.Option(0, "--longest", min=0, help="Longest streak"),
    last: datetime = typer.Option(None, "--last", formats=DATE_FORMATS, help="Last verdict date"),
    event: datetime = typer.Option(None, "--event", formats=DATE_FORMATS, help="New verdict date"),
):
    """Compute a streak update without touching the snapshot."""
    prior = Streak(current=current, longest=longest, last_verdict_date=last)
    result = update_streak(prior, local_now(event), local_zone())
    console.print(f"current={result.current} longest={result.longest}")


@app.command("add-link")
def add_link(
    url: str,
    title: str = typer.Option(None, "--title", help="Display title"),
    tags: str = typer.Option(None, "--tags", help="Comma-separated tags"),
    note: str = typer.Option(None, "--note", help="Why you saved it"),
    minutes: float = typer.Option(None, "--minutes", min=0, help="Estimated reading time"),
    source_id: str = typer.Option(None, "--source", help="Source the link came from"),
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Save a link to the queue."""
    snapshot = _load(snapshot_path)

    try:
        source = find_source(snapshot.sources, source_id) if source_id else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    item = create_link_item(
        url,
        title=title,
        tags=parse_tag_list(tags),
        user_note=note,
        estimated_minutes=minutes,
        source=source,
    )
    save_snapshot(snapshot.model_copy(update={"items": [*snapshot.items, item]}), snapshot_path)
    console.print(f"[green]Queued[/green] [cyan]{item.id}[/cyan] {item.title}")


@app.command("add-text")
def add_text(
    content: str,
    title: str = typer.Option(..., "--title", help="Display title"),
    attribution: str = typer.Option(None, "--attribution", help="Who wrote it"),
    tags: str = typer.Option(None, "--tags", help="Comma-separated tags"),
    minutes: float = typer.Option(None, "--minutes", min=0, help="Estimated reading time"),
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Save a text snippet to the queue."""
    snapshot = _load(snapshot_path)
    item = create_text_item(
        content,
        title,
        attribution=attribution,
        tags=parse_tag_list(tags),
        estimated_minutes=minutes,
    )
    save_snapshot(snapshot.model_copy(update={"items": [*snapshot.items, item]}), snapshot_path)
    console.print(f"[green]Queued[/green] [cyan]{item.id}[/cyan] {item.title} ({_minutes(item)})")


@app.command()
def dismiss(item_id: str, snapshot_path: Path = SNAPSHOT_OPTION):
    """Discard an item without reviewing it."""
    snapshot = _load(snapshot_path)
    now = local_now()

    try:
        item = dismiss_item(find_item(snapshot.items, item_id), now)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    stats = record_verdict_stats(snapshot.stats, Verdict.DISCARD, now, local_zone())
    save_snapshot(snapshot.replace_item(item).model_copy(update={"stats": stats}), snapshot_path)
    console.print(f"[green]Dismissed[/green]: {item.title or item.id}")


@app.command()
def remove(item_id: str, snapshot_path: Path = SNAPSHOT_OPTION):
    """Delete an item from the snapshot."""
    snapshot = _load(snapshot_path)

    try:
        items = remove_item(snapshot.items, item_id)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_snapshot(snapshot.model_copy(update={"items": items}), snapshot_path)
    console.print(f"[green]Removed[/green] {item_id}")


@app.command()
def backlog(
    snapshot_path: Path = SNAPSHOT_OPTION,
    limit: int = typer.Option(20, "--limit", "-l", help="Number of results"),
):
    """Show kept items, most recently decided first."""
    snapshot = _load(snapshot_path)
    kept = backlog_items(snapshot.items)

    if not kept:
        console.print("[yellow]Backlog is empty[/yellow]")
        return

    table = Table(title=f"Backlog ({len(kept)} kept)")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Tags")
    table.add_column("Kept", style="dim")

    for item in kept[:limit]:
        table.add_row(
            item.id,
            item.title[:40],
            ", ".join(item.tags),
            f"{item.verdict_at:%Y-%m-%d}" if item.verdict_at else "-",
        )

    console.print(table)


@app.command()
def tags(snapshot_path: Path = SNAPSHOT_OPTION):
    """List every tag in use."""
    snapshot = _load(snapshot_path)
    names = all_tags(snapshot.items)

    if not names:
        console.print("[yellow]No tags yet[/yellow]")
        return

    for name in names:
        console.print(f"  {name}")


sources_app = typer.Typer(help="Manage the feeds items come from")
app.add_typer(sources_app, name="sources")


@sources_app.command("add")
def sources_add(
    url: str,
    name: str,
    interval: FetchInterval = typer.Option(FetchInterval.DAILY, "--interval", help="Polling interval"),
    topic_filter: str = typer.Option(None, "--topic-filter", help="Only keep matching entries"),
    auto_tags: str = typer.Option(None, "--auto-tags", help="Comma-separated tags for new items"),
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Add a source."""
    snapshot = _load(snapshot_path)
    source = create_source(
        url,
        name,
        interval=interval,
        topic_filter=topic_filter,
        auto_tags=parse_tag_list(auto_tags),
    )
    save_snapshot(
        snapshot.model_copy(update={"sources": [*snapshot.sources, source]}), snapshot_path
    )
    console.print(f"[green]Added {source.type.value} source[/green] [cyan]{source.id}[/cyan] {name}")


@sources_app.command("list")
def sources_list(snapshot_path: Path = SNAPSHOT_OPTION):
    """List sources, newest first."""
    snapshot = _load(snapshot_path)
    sources = list_sources(snapshot.sources)

    if not sources:
        console.print("[yellow]No sources[/yellow]")
        return

    table = Table(title=f"Sources ({len(sources)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Interval")
    table.add_column("Enabled", style="green")
    table.add_column("URL", style="dim")

    for source in sources:
        table.add_row(
            source.id,
            source.name,
            source.type.value,
            source.interval.value,
            "yes" if source.enabled else "no",
            source.url,
        )

    console.print(table)


@sources_app.command("toggle")
def sources_toggle(
    source_id: str,
    enabled: bool = typer.Option(None, "--enable/--disable", help="Set the state instead of flipping it"),
    snapshot_path: Path = SNAPSHOT_OPTION,
):
    """Enable or disable a source."""
    snapshot = _load(snapshot_path)

    try:
        sources = toggle_source(snapshot.sources, source_id, enabled)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_snapshot(snapshot.model_copy(update={"sources": sources}), snapshot_path)
    state = find_source(sources, source_id).enabled
    console.print(f"[green]{source_id}[/green] {'enabled' if state else 'disabled'}")


@sources_app.command("delete")
def sources_delete(source_id: str, snapshot_path: Path = SNAPSHOT_OPTION):
    """Delete a source."""
    snapshot = _load(snapshot_path)

    try:
        sources = delete_source(snapshot.sources, source_id)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_snapshot(snapshot.model_copy(update={"sources": sources}), snapshot_path)
    console.print(f"[green]Deleted[/green] {source_id}")


@app.command()
def config():
    """Show current configuration."""
    console.print("\n[bold]Configuration[/bold]")
    console.print(f"  Environment: {settings.environment}")
    console.print(f"  Snapshot path: {settings.snapshot_path}")
    console.print(f"  Timezone: {settings.timezone or 'system local'}")
    console.print(f"  Recent verdicts for mix-up: {settings.recent_verdict_limit}")
    console.print(f"  Revisit delay: {settings.revisit_delay_days} days")
    console.print(f"  Priority window: {settings.priority_window_days} days")


if __name__ == "__main__":
    app()
