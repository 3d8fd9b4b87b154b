"""
Server-side validation of the create/edit task form.

Every field is checked on every submission so the user sees all problems at
once. Errors are returned in field order: title, description, due date,
status. The error summary on the page relies on that order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from .date_parts import MIN_YEAR, WHITESPACE, parse_due_date
from .models import FieldError, TaskFormInput, TaskStatus, TaskWrite

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
DESCRIPTION_REQUIRED = "Description is required"
STATUS_REQUIRED = "Select a status"
STATUS_INVALID = "Select a valid status"


@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Length and range limits for one validation layer."""

    title_min_length: int = 1
    description_min_length: int = 1
    min_year: int = MIN_YEAR


# The server accepts anything non-blank; the interactive form asks for more.
SERVER_RULES = ValidationRules()
CLIENT_RULES = ValidationRules(title_min_length=3, description_min_length=10)


@dataclass(slots=True)
class ValidationOutcome:
    payload: TaskWrite | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _check_text(value: str, *, label: str, anchor: str, min_length: int) -> FieldError | None:
    trimmed = value.strip(WHITESPACE)
    if not trimmed:
        return FieldError(text=f"{label} is required", href=anchor)
    if len(trimmed) < min_length:
        return FieldError(text=f"{label} must be at least {min_length} characters long", href=anchor)
    return None


def _check_status(raw: str | None, *, require_status: bool) -> tuple[TaskStatus | None, FieldError | None]:
    if raw is None or not raw.strip(WHITESPACE):
        if require_status:
            return None, FieldError(text=STATUS_REQUIRED, href="#status")
        return TaskStatus.TODO, None
    try:
        return TaskStatus(raw), None
    except ValueError:
        return None, FieldError(text=STATUS_INVALID, href="#status")


def validate_task_form(
    form: TaskFormInput,
    *,
    require_status: bool = False,
    rules: ValidationRules = SERVER_RULES,
    today: date | None = None,
) -> ValidationOutcome:
    """
    Validate a submitted task form.

    ``require_status`` is set on the edit path, where the form always carries
    the task's current status; on create a missing status means TODO.
    """
    errors: list[FieldError] = []

    title_error = _check_text(
        form.title, label="Title", anchor="#title", min_length=rules.title_min_length
    )
    if title_error:
        errors.append(title_error)

    description_error = _check_text(
        form.description,
        label="Description",
        anchor="#description",
        min_length=rules.description_min_length,
    )
    if description_error:
        errors.append(description_error)

    due = parse_due_date(
        form.due_day, form.due_month, form.due_year, today=today, min_year=rules.min_year
    )
    if due.error:
        errors.append(due.error)

    status, status_error = _check_status(form.status, require_status=require_status)
    if status_error:
        errors.append(status_error)

    if errors:
        logger.debug("Task form rejected: %s", [e.text for e in errors])
        return ValidationOutcome(errors=errors)

    return ValidationOutcome(
        payload=TaskWrite(
            title=form.title.strip(WHITESPACE),
            description=form.description.strip(WHITESPACE),
            status=status,
            dueDate=due.due_date,
        )
    )
