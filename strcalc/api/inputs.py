"""
Saved calculator inputs API endpoints.

The calculator page edits one input set field by field. Each edit is
merged into the session, saved through the snapshot store, and answered
with fresh metrics: JSON for API clients, an HTML fragment for HTMX.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from strcalc.api.calculations import (
    InputSetPayload,
    MetricsResponse,
    json_safe,
    metrics_response,
)
from strcalc.calculations.display import build_display
from strcalc.services.session import CalculatorSession
from strcalc.services.snapshots import SnapshotStore
from strcalc.ui import templates

logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> CalculatorSession:
    """Dependency for the application's calculator session."""
    return request.app.state.calculator


def get_store(request: Request) -> SnapshotStore:
    """Dependency for the application's snapshot store."""
    return request.app.state.snapshot_store


async def read_changes(request: Request) -> Dict[str, Any]:
    """Read edited fields from a JSON object or a form-encoded body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Request body is not valid JSON")
        if not isinstance(body, dict):
            raise HTTPException(status_code=422, detail="Expected a JSON object")
        return body

    form = await request.form()
    return dict(form)


def render_response(request: Request, session: CalculatorSession):
    """Answer with the metrics fragment for HTMX, JSON otherwise."""
    metrics = session.metrics()
    if request.headers.get("HX-Request"):
        return templates.TemplateResponse(
            request,
            "_metrics.html",
            {"display": build_display(metrics)},
        )
    return metrics_response(session.inputs, metrics)


@router.get("/")
def get_inputs(session: CalculatorSession = Depends(get_session)):
    """Get the current input set."""
    return {"inputs": json_safe(session.inputs)}


@router.patch("/")
async def update_inputs(
    request: Request,
    session: CalculatorSession = Depends(get_session),
    store: SnapshotStore = Depends(get_store),
):
    """Merge edited fields into the input set, save it, and return metrics."""
    changes = await read_changes(request)
    session.update(changes)
    await run_in_threadpool(store.save, session.inputs)
    return render_response(request, session)


@router.put("/", response_model=MetricsResponse)
def replace_inputs(
    inputs: InputSetPayload,
    session: CalculatorSession = Depends(get_session),
    store: SnapshotStore = Depends(get_store),
):
    """Replace the input set; fields left out take their defaults."""
    session.replace(inputs.provided())
    store.save(session.inputs)
    return metrics_response(session.inputs, session.metrics())


@router.delete("/", response_model=MetricsResponse)
def reset_inputs(
    session: CalculatorSession = Depends(get_session),
    store: SnapshotStore = Depends(get_store),
):
    """Return to the default inputs and save them."""
    session.reset()
    store.save(session.inputs)
    logger.info("Calculator inputs reset to defaults")
    return metrics_response(session.inputs, session.metrics())


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(session: CalculatorSession = Depends(get_session)):
    """Get metrics for the current input set."""
    return metrics_response(session.inputs, session.metrics())
