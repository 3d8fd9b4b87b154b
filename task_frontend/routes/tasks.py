"""
Page routes for the task pages.

Each handler sequences gateway calls, validates form posts and picks a view.
Validation failures always re-render the form with the user's input; read
failures distinguish 404 from upstream faults; quick actions (status, delete)
always redirect.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response

from ..assembler import assemble_task, assemble_tasks, form_data_for
from ..gateway import NotFound, Ok, TaskGateway, gather_results, is_task_list
from ..models import FieldError, StatusUpdate, TaskFormInput
from ..rendering import Renderer
from ..validation import validate_task_form

logger = logging.getLogger(__name__)

router = APIRouter()

UPSTREAM_ERROR_STATUS = 502


def get_gateway(request: Request) -> TaskGateway:
    return request.app.state.gateway


def get_renderer(request: Request) -> Renderer:
    return request.app.state.renderer


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302)


async def read_task_form(request: Request) -> TaskFormInput:
    return TaskFormInput.from_form(await request.form())


def render_not_found(request: Request, renderer: Renderer) -> Response:
    return renderer.render(request, "not-found", {}, status_code=404)


def render_error(request: Request, renderer: Renderer, message: str) -> Response:
    return renderer.render(request, "error", {"error": message}, status_code=UPSTREAM_ERROR_STATUS)


async def render_task_list(
    request: Request,
    renderer: Renderer,
    gateway: TaskGateway,
    tasks_call,
    *,
    current_filter: str,
    error_message: str,
    search_term: Optional[str] = None,
) -> Response:
    context: Dict[str, Any] = {"currentFilter": current_filter}
    if search_term is not None:
        context["searchTerm"] = search_term

    result = await gather_results(tasks_call, gateway.get_statistics())
    if isinstance(result, Ok) and is_task_list(result.value[0]):
        tasks, statistics = result.value
        context.update(tasks=assemble_tasks(tasks), statistics=statistics)
    else:
        logger.error("Task list (%s) unavailable: %s", current_filter, result)
        context.update(tasks=[], statistics=None, error=error_message)
    return renderer.render(request, "home", context)


@router.get("/")
async def home(
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    return await render_task_list(
        request,
        renderer,
        gateway,
        gateway.list_tasks(),
        current_filter="all",
        error_message="Failed to load tasks. Please try again later.",
    )


@router.get("/tasks/filter/{status}")
async def filter_tasks(
    status: str,
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    return await render_task_list(
        request,
        renderer,
        gateway,
        gateway.list_tasks_by_status(status),
        current_filter=status,
        error_message=f"Failed to load {status} tasks.",
    )


@router.get("/tasks/search")
async def search_tasks(
    request: Request,
    q: str = "",
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    if not q:
        return redirect("/")
    return await render_task_list(
        request,
        renderer,
        gateway,
        gateway.search_tasks(q),
        current_filter="search",
        error_message="Search failed. Please try again.",
        search_term=q,
    )


@router.get("/tasks/create")
async def create_form(request: Request, renderer: Renderer = Depends(get_renderer)):
    return renderer.render(request, "tasks/create", {})


@router.post("/tasks/create")
async def create_task(
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    form = await read_task_form(request)
    outcome = validate_task_form(form)
    if not outcome.ok:
        return renderer.render(
            request, "tasks/create", {"errors": outcome.errors, "formData": form.echo()}
        )

    result = await gateway.create_task(outcome.payload)
    if not isinstance(result, Ok):
        logger.error("Creating task failed: %s", result)
        return renderer.render(
            request,
            "tasks/create",
            {"error": "Failed to create task. Please try again.", "formData": form.echo()},
        )
    return redirect("/")


@router.get("/tasks/{task_id}")
async def view_task(
    task_id: str,
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    result = await gateway.get_task(task_id)
    if isinstance(result, NotFound):
        return render_not_found(request, renderer)
    if not isinstance(result, Ok):
        return render_error(request, renderer, "Failed to load task details")
    return renderer.render(request, "tasks/view", {"task": assemble_task(result.value)})


@router.get("/tasks/{task_id}/edit")
async def edit_form(
    task_id: str,
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    result = await gateway.get_task(task_id)
    if isinstance(result, NotFound):
        return render_not_found(request, renderer)
    if not isinstance(result, Ok):
        return render_error(request, renderer, "Failed to load task for editing")
    task = assemble_task(result.value)
    return renderer.render(request, "tasks/edit", {"task": task, "formData": form_data_for(task)})


async def rerender_edit_form(
    task_id: str,
    request: Request,
    gateway: TaskGateway,
    renderer: Renderer,
    form: TaskFormInput,
    *,
    errors: Optional[List[FieldError]] = None,
    error: Optional[str] = None,
) -> Response:
    result = await gateway.get_task(task_id)
    if isinstance(result, NotFound):
        return render_not_found(request, renderer)
    if not isinstance(result, Ok):
        logger.error("Re-fetching task %s for the edit form failed: %s", task_id, result)
        return render_error(request, renderer, "Failed to update task")

    context: Dict[str, Any] = {"task": assemble_task(result.value), "formData": form.echo()}
    if errors:
        context["errors"] = errors
    if error:
        context["error"] = error
    return renderer.render(request, "tasks/edit", context)


@router.post("/tasks/{task_id}/edit")
async def update_task(
    task_id: str,
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
    renderer: Renderer = Depends(get_renderer),
):
    form = await read_task_form(request)
    outcome = validate_task_form(form, require_status=True)
    if not outcome.ok:
        return await rerender_edit_form(task_id, request, gateway, renderer, form, errors=outcome.errors)

    result = await gateway.update_task(task_id, outcome.payload)
    if isinstance(result, NotFound):
        return render_not_found(request, renderer)
    if not isinstance(result, Ok):
        logger.error("Updating task %s failed: %s", task_id, result)
        return await rerender_edit_form(
            task_id, request, gateway, renderer, form, error="Failed to update task. Please try again."
        )
    return redirect(f"/tasks/{task_id}")


@router.post("/tasks/{task_id}/status")
async def update_task_status(
    task_id: str,
    request: Request,
    gateway: TaskGateway = Depends(get_gateway),
):
    form = await request.form()
    status = form.get("status")
    update = StatusUpdate(status=status if isinstance(status, str) else None)

    result = await gateway.update_status(task_id, update)
    if not isinstance(result, Ok):
        logger.error("Status update for task %s failed: %s", task_id, result)
    return redirect(f"/tasks/{task_id}")


@router.post("/tasks/{task_id}/delete")
async def delete_task(task_id: str, gateway: TaskGateway = Depends(get_gateway)):
    result = await gateway.delete_task(task_id)
    if not isinstance(result, Ok):
        logger.error("Deleting task %s failed: %s", task_id, result)
        return redirect(f"/tasks/{task_id}")
    return redirect("/")
