"""CLI interface for devclean."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from devclean.core.deleter import delete_items
from devclean.core.duplicates import KEEP_POLICIES, find_duplicates
from devclean.core.engine import ScanEngine
from devclean.core.organizer import organize as organize_folder, plan_organize
from devclean.core.package_cache import PACKAGE_MANAGERS, available_managers, clear_cache
from devclean.core.tracker import Tracker
from devclean.exceptions import DevCleanError
from devclean.models.scan_result import ReclaimableItem, ScanResult
from devclean.settings import Settings
from devclean.utils import bytes_to_human, dev_directories, format_relative_time


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _resolve_roots(roots: tuple[str, ...]) -> list[Path]:
    if roots:
        return [Path(r).expanduser() for r in roots]
    return dev_directories(Settings.instance().get("scan.extra_roots", []))


def _run_scan(roots: tuple[str, ...], depth: int | None, as_json: bool) -> ScanResult:
    settings = Settings.instance()
    max_depth = depth if depth is not None else settings.get("scan.max_depth")
    engine = ScanEngine(stale_months=settings.get("scan.stale_months"))
    root_paths = _resolve_roots(roots)

    if not as_json:
        click.echo(f"\n{click.style('🔍', bold=True)} Scanning {len(root_paths)} directories...\n")
        for i, root in enumerate(root_paths, 1):
            click.echo(f"  {i}. {root}")
        click.echo()

    result = engine.scan(root_paths, max_depth=max_depth)
    Tracker().record_scan()
    return result


def _item_to_dict(item: ReclaimableItem) -> dict:
    data = {
        "path": str(item.path),
        "size_bytes": item.size_bytes,
        "kind": item.kind.value,
        "is_stale": item.is_stale,
    }
    if item.subtype:
        data["subtype"] = item.subtype
    return data


def _echo_items(items: list[ReclaimableItem], limit: int) -> None:
    for item in items[:limit]:
        stale_tag = click.style(" [stale]", fg="yellow") if item.is_stale else ""
        click.echo(f"    {bytes_to_human(item.size_bytes):>10s}  {item.path}{stale_tag}")
    if len(items) > limit:
        click.echo(click.style(f"    ... and {len(items) - limit} more", fg="bright_black"))


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Devclean — reclaim disk space taken by developer junk."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.option("--depth", "-d", type=int, default=None, help="Maximum depth below each root")
@click.option("--root", "-r", "roots", multiple=True, help="Directory to scan (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(depth: int | None, roots: tuple[str, ...], as_json: bool) -> None:
    """Scan for reclaimable files (preview only, never deletes)."""
    result = _run_scan(roots, depth, as_json)

    if as_json:
        data = {
            "roots": [str(r) for r in result.roots],
            "total_bytes": result.total_bytes,
            "node_modules": [_item_to_dict(i) for i in result.node_modules],
            "build_folders": [_item_to_dict(i) for i in result.build_folders],
            "log_files": [_item_to_dict(i) for i in result.log_files],
            "temp_files": [_item_to_dict(i) for i in result.temp_files],
        }
        click.echo(json.dumps(data, indent=2))
        return

    limit = Settings.instance().get("display.file_limit")
    sections = (
        ("node_modules", result.node_modules),
        ("Build folders", result.build_folders),
        ("Log files", result.log_files),
        ("Temp files", result.temp_files),
    )
    for label, items in sections:
        if not items:
            click.echo(f"  {click.style('·', fg='bright_black')} {label:20s} — nothing found")
            continue
        size = sum(i.size_bytes for i in items)
        click.echo(
            f"  {click.style('✓', fg='green')} {label:20s} — "
            f"{click.style(bytes_to_human(size), fg='green', bold=True)} ({len(items):,} items)"
        )
        _echo_items(items, limit)

    click.echo(f"\nTotal reclaimable: {click.style(bytes_to_human(result.total_bytes), fg='green', bold=True)}\n")


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--depth", "-d", type=int, default=None, help="Maximum depth below each root")
@click.option("--root", "-r", "roots", multiple=True, help="Directory to scan (repeatable)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would be cleaned without doing it")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clean(depth: int | None, roots: tuple[str, ...], yes: bool, dry_run: bool, as_json: bool) -> None:
    """Delete stale node_modules, build output, logs and temp files."""
    result = _run_scan(roots, depth, as_json)
    items = result.cleanable_items()
    total = sum(i.size_bytes for i in items)

    if not items:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_clean", "items": []}))
        else:
            click.echo("Nothing to clean.")
        return

    if dry_run:
        if as_json:
            data = {"status": "dry_run", "would_free_bytes": total, "items": [_item_to_dict(i) for i in items]}
            click.echo(json.dumps(data, indent=2))
        else:
            click.echo(f"Selected {len(items):,} items, {bytes_to_human(total)}:")
            _echo_items(items, Settings.instance().get("display.file_limit"))
            click.echo("\n(dry run — no files were deleted)")
        return

    if not as_json:
        click.echo(f"Selected {len(items):,} items, {click.style(bytes_to_human(total), fg='green', bold=True)}:")
        _echo_items(items, Settings.instance().get("display.file_limit"))
        click.echo()

    if not yes and not as_json:
        if not click.confirm("Permanently delete these items?", default=False):
            click.echo("Aborted.")
            return

    clean_result = delete_items(items)
    Tracker().record_clean(clean_result.freed_bytes)

    if as_json:
        data = {
            "status": "cleaned",
            "deleted": clean_result.deleted,
            "failed": clean_result.failed,
            "freed_bytes": clean_result.freed_bytes,
            "errors": clean_result.errors,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"  Deleted: {clean_result.deleted:,} items")
    if clean_result.failed:
        click.echo(f"  {click.style('!', fg='yellow')} Failed:  {clean_result.failed:,} items")
    click.echo(f"\nTotal freed: {click.style(bytes_to_human(clean_result.freed_bytes), fg='green', bold=True)}\n")


# ── duplicates ───────────────────────────────────────────────────────────

@main.command()
@click.option("--path", "-p", "search_path", type=click.Path(file_okay=False, path_type=Path),
              default=None, help="Directory to search (default: home)")
@click.option("--depth", "-d", type=int, default=3, show_default=True, help="Maximum depth")
@click.option("--min-size", type=int, default=None, help="Ignore files of this many bytes or fewer")
@click.option("--keep", type=click.Choice(KEEP_POLICIES), default=None,
              help="Which copy survives: first discovered or oldest")
@click.option("--delete", "do_delete", is_flag=True, help="Delete every copy except the keeper")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--limit", type=int, default=None, help="Number of sets to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def duplicates(
    search_path: Path | None,
    depth: int,
    min_size: int | None,
    keep: str | None,
    do_delete: bool,
    yes: bool,
    limit: int | None,
    as_json: bool,
) -> None:
    """Find files with identical content."""
    settings = Settings.instance()
    search_path = search_path or Path.home()
    min_size = min_size if min_size is not None else settings.get("duplicates.min_size")
    keep = keep or settings.get("duplicates.keep")
    limit = limit if limit is not None else settings.get("display.limit")

    if not search_path.is_dir():
        raise click.ClickException(f"Directory not found: {search_path}")

    if not as_json:
        click.echo(f"\n{click.style('🔎', bold=True)} Searching {search_path}...\n")

    sets = find_duplicates(search_path, max_depth=depth, min_size=min_size, keep=keep)
    wasted = sum(s.wasted_bytes for s in sets)

    if as_json and not do_delete:
        data = {
            "keep": keep,
            "wasted_bytes": wasted,
            "sets": [
                {
                    "digest": s.digest,
                    "files": [{"path": str(f.path), "size_bytes": f.size_bytes} for f in s.files],
                }
                for s in sets
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not sets:
        if as_json:
            click.echo(json.dumps({"status": "no_duplicates"}))
        else:
            click.echo("No duplicate files found.")
        return

    if not as_json:
        click.echo(f"Found {len(sets)} sets of duplicates (keeping the {keep} copy):\n")
        for index, dup in enumerate(sets[:limit], 1):
            click.echo(click.style(f"  Set {index}:", fg="cyan"))
            for file_index, f in enumerate(dup.files):
                tag = click.style(" [keep]", fg="green") if file_index == 0 else ""
                click.echo(f"    {file_index + 1}. {f.path} ({bytes_to_human(f.size_bytes)}){tag}")
        if len(sets) > limit:
            click.echo(click.style(f"\n  ... and {len(sets) - limit} more sets", fg="bright_black"))
        click.echo(f"\nTotal wasted space: {click.style(bytes_to_human(wasted), fg='yellow', bold=True)}\n")

    if not do_delete:
        return

    if not yes and not as_json:
        if not click.confirm("Delete duplicates?", default=False):
            click.echo("Aborted.")
            return

    redundant = [f for dup in sets for f in dup.redundant]
    clean_result = delete_items(redundant)

    if as_json:
        data = {
            "status": "cleaned",
            "deleted": clean_result.deleted,
            "failed": clean_result.failed,
            "freed_bytes": clean_result.freed_bytes,
            "errors": clean_result.errors,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"  Deleted {clean_result.deleted:,} duplicate files")
    if clean_result.failed:
        click.echo(f"  {click.style('!', fg='yellow')} Failed to delete {clean_result.failed:,} files")
    click.echo(f"\nTotal freed: {click.style(bytes_to_human(clean_result.freed_bytes), fg='green', bold=True)}\n")


# ── organize ─────────────────────────────────────────────────────────────

@main.command()
@click.argument("target", required=False, type=click.Path(path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def organize(target: Path | None, yes: bool, as_json: bool) -> None:
    """Sort the files of a folder (default: ~/Downloads) into category folders."""
    target = target or Path.home() / "Downloads"

    try:
        plan = plan_organize(target)
    except DevCleanError as exc:
        raise click.ClickException(str(exc)) from exc

    if not plan:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_organize"}))
        else:
            click.echo(f"{target} is already organized.")
        return

    if not as_json:
        click.echo(f"\n{click.style('📂', bold=True)} Files to organize in {target}:\n")
        for bucket, files in plan.items():
            click.echo(f"  {bucket:12s} {len(files):,} files")
        click.echo()

    if not yes and not as_json:
        if not click.confirm("Organize files into folders?", default=True):
            click.echo("Aborted.")
            return

    try:
        result = organize_folder(target)
    except DevCleanError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        data = {
            "status": "organized",
            "moved": result.moved,
            "bucket_count": result.bucket_count,
            "failed": result.failed,
            "buckets": result.buckets,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"  Moved {result.moved:,} files into {result.bucket_count} category folders")
    if result.failed:
        click.echo(f"  {click.style('!', fg='yellow')} Could not move {result.failed:,} files")
    click.echo()


# ── cache ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("managers", nargs=-1, type=click.Choice(list(PACKAGE_MANAGERS)))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def cache(managers: tuple[str, ...], yes: bool) -> None:
    """Clear npm, yarn and pnpm caches."""
    installed = available_managers()
    if not installed:
        click.echo("No package managers found (npm/yarn/pnpm).", err=True)
        sys.exit(1)

    selected = [m for m in managers if m in installed] if managers else installed
    missing = [m for m in managers if m not in installed]
    for name in missing:
        click.echo(f"  {click.style('✗', fg='bright_black')} {name} is not installed")
    if not selected:
        return

    if not yes:
        if not click.confirm(f"Clear {', '.join(selected)} cache?", default=True):
            click.echo("Aborted.")
            return

    failed = 0
    for name in selected:
        if clear_cache(name):
            click.echo(f"  {click.style('✓', fg='green')} {name} cache cleared")
        else:
            failed += 1
            click.echo(f"  {click.style('✗', fg='red')} failed to clear {name} cache")

    if failed:
        sys.exit(1)


# ── stats ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool) -> None:
    """Show usage statistics."""
    data = Tracker().get_stats()

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    def _when(timestamp: str | None) -> str:
        if not timestamp:
            return "never"
        try:
            return format_relative_time(timestamp)
        except (TypeError, ValueError):
            return str(timestamp)

    click.echo(f"\n{click.style('📊', bold=True)} Statistics\n")
    click.echo(f"  Scans:        {data['total_scans']:,}")
    click.echo(f"  Cleans:       {data['total_cleans']:,}")
    click.echo(f"  Space freed:  {click.style(bytes_to_human(data['total_space_freed']), fg='green', bold=True)}")
    click.echo(f"  Last scan:    {_when(data['last_scan'])}")
    click.echo(f"  Last clean:   {_when(data['last_clean'])}")
    click.echo()
