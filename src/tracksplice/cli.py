"""
tracksplice CLI - apply playlist edits to cached snapshot files.

Every command reads a JSON snapshot, runs the same optimistic mutation the
interactive surface uses, and either writes the result (--output) or prints
it as a table.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.markup import escape
from rich.table import Table

from tracksplice.core.config import DndConfig, load_config
from tracksplice.core.console import get_console
from tracksplice.core.output import log, setup_loguru
from tracksplice.domain.dnd.drop_intent import (
    DropIntentInput,
    compute_drop_intent,
    rows_for_full_render,
)
from tracksplice.domain.dnd.planner import (
    AddOperation,
    DragSource,
    DropPlan,
    DropRequest,
    DropTarget,
    PanelInfo,
    PlayOperation,
    RemoveOperation,
    ReorderOperation,
    plan_drop,
)
from tracksplice.domain.dnd.source import DragSet
from tracksplice.domain.playlists.mutator import (
    apply_remove_to_infinite_pages,
    apply_reorder_to_infinite_pages,
    flatten_pages,
)
from tracksplice.domain.tracks.codec import load_pages, save_pages
from tracksplice.domain.tracks.models import (
    InfinitePages,
    Track,
    TrackToRemove,
    track_position,
)


def parse_positions_arg(value: str) -> TrackToRemove:
    """Parse "URI=P1,P2" into a position-qualified removal entry.

    Raises:
        ValueError: If the value has no URI or a position is not an integer
    """
    uri, sep, raw_positions = value.rpartition("=")
    if not sep or not uri:
        raise ValueError(f"Expected URI=P1,P2, got {value!r}")

    positions = []
    for part in raw_positions.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            positions.append(int(part))
        except ValueError:
            raise ValueError(f"Invalid position {part!r} in {value!r}") from None
    return TrackToRemove(uri=uri, positions=tuple(positions))


def print_pages(pages: InfinitePages, title: str) -> None:
    table = Table(title=title)
    table.add_column("Pos", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("URI", style="dim")

    for index, track in enumerate(flatten_pages(pages)):
        table.add_row(
            str(track_position(track, index)), escape(track.name or track.id), escape(track.uri)
        )

    get_console().print(table)


def write_or_print(pages: InfinitePages, output: Optional[str], title: str) -> None:
    if output:
        save_pages(pages, Path(output))
        log(f"Wrote {len(pages.tracks)} tracks to {output}")
    else:
        print_pages(pages, title)


def run_reorder(args: argparse.Namespace) -> int:
    pages = load_pages(Path(args.file))
    result = apply_reorder_to_infinite_pages(
        pages, args.range_start, args.insert_before, args.range_length
    )
    write_or_print(
        result,
        args.output,
        f"Moved {args.range_length} at {args.range_start} before {args.insert_before}",
    )
    return 0


def run_remove(args: argparse.Namespace) -> int:
    entries = [parse_positions_arg(value) for value in args.positions or []]
    if not args.uris and not entries:
        raise ValueError("Nothing to remove: pass URIs or --positions")

    if entries:
        qualified = {entry.uri for entry in entries}
        for uri in args.uris:
            if uri not in qualified:
                log(f"{uri} has no --positions entry and will be kept", level="warning")

    pages = load_pages(Path(args.file))
    result = apply_remove_to_infinite_pages(pages, args.uris, entries or None)
    removed = len(pages.tracks) - len(result.tracks)
    write_or_print(result, args.output, f"Removed {removed} track(s)")
    return 0


def run_drop_intent(args: argparse.Namespace, row_height: int, header_offset: int) -> int:
    pages = load_pages(Path(args.file))
    tracks = flatten_pages(pages)
    data = DropIntentInput(
        pointer_y=args.pointer_y,
        header_offset=header_offset,
        container_top=args.container_top,
        scroll_top=args.scroll_top,
        row_height=row_height,
        virtual_rows=rows_for_full_render(len(tracks), row_height),
        filtered_tracks=tracks,
        dragged_positions=frozenset(args.dragged or ()),
        drag_count=args.drag_count,
    )
    intent = compute_drop_intent(data)

    table = Table(title="Drop intent")
    table.add_column("Filtered index", justify="right")
    table.add_column("Insert before (global)", justify="right")
    table.add_row(str(intent.insertion_index_filtered), str(intent.insert_before_global))
    get_console().print(table)
    return 0


def build_drop_request(
    tracks: list[Track], args: argparse.Namespace, dnd: DndConfig
) -> DropRequest:
    """Describe a drag of the given positions as if made in the app.

    The source panel shows the snapshot's list. A drop into another list
    lands in a second panel, so the configured mode and modifier apply;
    a drop into the same list stays in the source panel and reorders.

    Raises:
        ValueError: If nothing is dragged or a position is not in the snapshot
    """
    if not args.dragged:
        raise ValueError("Nothing to drag: pass --dragged positions")

    by_position = {track_position(t, i): (i, t) for i, t in enumerate(tracks)}
    missing = [p for p in args.dragged if p not in by_position]
    if missing:
        raise ValueError(f"Positions not in snapshot: {missing}")

    picked = [by_position[p] for p in sorted(set(args.dragged))]
    drag = DragSet(tracks=tuple(t for _, t in picked), indices=tuple(i for i, _ in picked))

    to_list = args.to_list or args.from_list
    panels = [
        PanelInfo(
            id="source",
            list_id=args.from_list,
            is_editable=not args.read_only,
            dnd_mode=dnd.default_mode,
        )
    ]
    target_panel = "source"
    if to_list != args.from_list:
        panels.append(
            PanelInfo(id="target", list_id=to_list, is_editable=True, dnd_mode=dnd.default_mode)
        )
        target_panel = "target"

    first_index, first_track = picked[0]
    return DropRequest(
        source=DragSource(
            type="track",
            panel_id="source",
            list_id=args.from_list,
            track=first_track,
            index=first_index,
        ),
        target=DropTarget(
            type="track", panel_id=target_panel, list_id=to_list, position=args.insert_before
        ),
        panels=panels,
        drag=drag,
        ordered_tracks=tracks,
        computed_position=args.insert_before,
        list_length=len(tracks),
        modifier_pressed=args.modifier,
        allow_mode_inversion=dnd.allow_mode_inversion,
    )


def describe_operation(operation) -> tuple[str, str, str]:
    if isinstance(operation, ReorderOperation):
        return (
            "reorder",
            operation.list_id,
            f"move {operation.range_length} at {operation.range_start} "
            f"before {operation.insert_before}",
        )
    if isinstance(operation, AddOperation):
        return (
            "add",
            operation.list_id,
            f"{len(operation.uris)} track(s) at {operation.position}",
        )
    if isinstance(operation, RemoveOperation):
        slots = "; ".join(
            f"{t.uri} at " + ",".join(str(p) for p in t.positions or ()) for t in operation.tracks
        )
        return ("remove", operation.list_id, slots)
    if isinstance(operation, PlayOperation):
        return ("play", "", f"{len(operation.uris)} track(s)")
    raise TypeError(f"Unknown operation: {operation!r}")


def print_plan(plan: DropPlan) -> None:
    table = Table(title=f"Drop plan ({plan.mode})")
    table.add_column("Operation")
    table.add_column("List")
    table.add_column("Details")
    for operation in plan.operations:
        table.add_row(*(escape(cell) for cell in describe_operation(operation)))
    get_console().print(table)

    if plan.effective_target_index != plan.target_index:
        log(f"Dragged tracks will land at position {plan.effective_target_index}")


def run_plan(args: argparse.Namespace, dnd: DndConfig) -> int:
    pages = load_pages(Path(args.file))
    request = build_drop_request(list(flatten_pages(pages)), args, dnd)
    plan = plan_drop(request)
    if plan.blocked:
        raise ValueError(f"Drop blocked: {plan.error}")

    logger.debug(f"Planned {len(plan.operations)} operation(s) in {plan.mode} mode")
    print_plan(plan)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracksplice",
        description="tracksplice - playlist reordering and drop placement on snapshot files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level (DEBUG, INFO, WARNING, ERROR)",
    )

    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    reorder_parser = subparsers.add_parser(
        "reorder", help="Move a contiguous run of tracks"
    )
    reorder_parser.add_argument("file", help="Snapshot JSON file")
    reorder_parser.add_argument("--range-start", type=int, required=True)
    reorder_parser.add_argument(
        "--insert-before",
        type=int,
        required=True,
        help="Target position in pre-removal coordinates",
    )
    reorder_parser.add_argument("--range-length", type=int, default=1)
    reorder_parser.add_argument("--output", help="Write the resulting snapshot here")

    remove_parser = subparsers.add_parser("remove", help="Remove tracks by URI or position")
    remove_parser.add_argument("file", help="Snapshot JSON file")
    remove_parser.add_argument("uris", nargs="*", help="Remove every occurrence of these URIs")
    remove_parser.add_argument(
        "--positions",
        action="append",
        metavar="URI=P1,P2",
        help="Remove URI only at these positions (repeatable)",
    )
    remove_parser.add_argument("--output", help="Write the resulting snapshot here")

    intent_parser = subparsers.add_parser(
        "drop-intent", help="Compute where a drag at a pointer position would land"
    )
    intent_parser.add_argument("file", help="Snapshot JSON file")
    intent_parser.add_argument("--pointer-y", type=float, required=True)
    intent_parser.add_argument("--container-top", type=float, default=0.0)
    intent_parser.add_argument("--scroll-top", type=float, default=0.0)
    intent_parser.add_argument("--drag-count", type=int, default=1)
    intent_parser.add_argument(
        "--dragged", type=int, nargs="*", help="Global positions being dragged"
    )

    plan_parser = subparsers.add_parser(
        "plan", help="Show the remote operations a finished drag would run"
    )
    plan_parser.add_argument("file", help="Snapshot JSON file of the source list")
    plan_parser.add_argument(
        "--dragged", type=int, nargs="+", required=True, help="Global positions being dragged"
    )
    plan_parser.add_argument(
        "--insert-before",
        type=int,
        required=True,
        help="Drop position in the target list (raw, pre-removal)",
    )
    plan_parser.add_argument("--from-list", default="source", help="Id of the source list")
    plan_parser.add_argument("--to-list", help="Id of the target list (default: same list)")
    plan_parser.add_argument(
        "--modifier", action="store_true", help="Hold Ctrl/Cmd (inverts copy/move)"
    )
    plan_parser.add_argument(
        "--read-only", action="store_true", help="Treat the source list as not editable"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the tracksplice command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    level = (args.log_level or config.logging.level).upper()
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    setup_loguru(log_file, level=level, console_output=config.logging.console_output)

    try:
        if args.subcommand == "reorder":
            return run_reorder(args)
        if args.subcommand == "remove":
            return run_remove(args)
        if args.subcommand == "drop-intent":
            return run_drop_intent(args, config.dnd.row_height, config.dnd.header_offset)
        if args.subcommand == "plan":
            return run_plan(args, config.dnd)
    except (ValueError, OSError) as e:  # JSONDecodeError is a ValueError
        log(f"Error: {e}", level="error")
        return 1

    parser.error(f"Unknown command: {args.subcommand}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
