"""Turn task records from the API into what the templates display."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from .models import TaskStatus

logger = logging.getLogger(__name__)

DISPLAY_FORMAT = "%d/%m/%Y, %H:%M"


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an API timestamp into local time. Naive values are taken as local."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("Unparseable timestamp from API: %r", raw)
        return None
    return parsed.astimezone()


def format_timestamp(raw: Any) -> str | None:
    parsed = parse_timestamp(raw)
    return parsed.strftime(DISPLAY_FORMAT) if parsed else None


def is_overdue(task: dict[str, Any], now: datetime) -> bool:
    # Cancelled tasks past their due date count as overdue too.
    due = parse_timestamp(task.get("dueDate"))
    return due is not None and due < now and task.get("status") != TaskStatus.COMPLETED.value


def assemble_task(task: dict[str, Any], *, now: datetime | None = None) -> dict[str, Any]:
    """Return a copy of ``task`` with the display fields added alongside."""
    now = (now or datetime.now()).astimezone()
    due = parse_timestamp(task.get("dueDate"))

    return {
        **task,
        "formattedDueDate": due.strftime(DISPLAY_FORMAT) if due else None,
        "formattedCreatedAt": format_timestamp(task.get("createdAt")),
        "formattedUpdatedAt": format_timestamp(task.get("updatedAt")),
        "isOverdue": is_overdue(task, now),
        "dueDateDay": f"{due.day:02d}" if due else "",
        "dueDateMonth": f"{due.month:02d}" if due else "",
        "dueDateYear": str(due.year) if due else "",
    }


def assemble_tasks(tasks: Iterable[dict[str, Any]] | None, *, now: datetime | None = None) -> list[dict[str, Any]]:
    now = (now or datetime.now()).astimezone()
    return [assemble_task(t, now=now) for t in tasks or []]


def form_data_for(task: dict[str, Any]) -> dict[str, Any]:
    """Project an assembled task onto the form field names used by the edit form."""
    return {
        "title": task.get("title") or "",
        "description": task.get("description") or "",
        "status": task.get("status"),
        "due-date-day": task.get("dueDateDay", ""),
        "due-date-month": task.get("dueDateMonth", ""),
        "due-date-year": task.get("dueDateYear", ""),
    }
