import math
from typing import Iterable, Optional, Sequence, Tuple

from shared.models import DailyEntry, DailyView, Progress, TaskEntry, TasksDocument
from utils.datetime_utils import format_long_date, normalize_date


def normalize_tasks_document(document: TasksDocument) -> Tuple[DailyEntry, ...]:
    """Turn either shape of the tasks document into a tuple of daily entries."""
    root = document.root
    if isinstance(root, dict):
        return tuple(DailyEntry(date=date_key, tasks=tasks) for date_key, tasks in root.items())
    return tuple(root)


def find_entry(entries: Iterable[DailyEntry], date: str) -> Optional[DailyEntry]:
    requested = normalize_date(date)
    for entry in entries:
        if normalize_date(entry.date) == requested:
            return entry
    return None


def calculate_progress(tasks: Sequence[TaskEntry]) -> Optional[Progress]:
    """Completed count and percentage; None for an empty list."""
    if not tasks:
        return None

    done = len([t for t in tasks if t.done])
    # halves round up
    percent = int(math.floor(done / len(tasks) * 100 + 0.5))
    return Progress(done=done, total=len(tasks), percent=percent)


def footer_label(entry: DailyEntry, progress: Optional[Progress]) -> str:
    if entry.tasks:
        return f"{progress.done if progress else 0} completed"
    if entry.highlights:
        return f"{len(entry.highlights)} highlights"
    return "Summary"


def build_daily_view(entries: Iterable[DailyEntry], date: str) -> DailyView:
    normalized = normalize_date(date)
    try:
        heading = format_long_date(normalized)
    except ValueError:
        heading = date

    entry = find_entry(entries, normalized)
    if entry is None:
        return DailyView(date=normalized, heading=heading, found=False)

    progress = calculate_progress(entry.tasks)
    return DailyView(
        date=normalized,
        heading=heading,
        found=True,
        entry=entry,
        progress=progress,
        footer=footer_label(entry, progress),
    )

