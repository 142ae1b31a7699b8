"""Admin endpoints feeding commands into device queues."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from adms_gateway.schemas import (
    AttlogRangeIn,
    AttlogRangeQueuedOut,
    CommandIn,
    CommandQueuedOut,
)
from adms_gateway.services import CommandValidationError

from .dependencies import SessionHandlerDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Return the JSON body as a dict; anything else counts as empty."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _bad_request(reason: str) -> PlainTextResponse:
    return PlainTextResponse(reason, status_code=status.HTTP_400_BAD_REQUEST)


@router.post(
    "/cmd",
    response_model=CommandQueuedOut,
    responses={400: {"description": "Missing sn or command"}},
)
async def enqueue_command(
    request: Request, handler: SessionHandlerDep
) -> CommandQueuedOut | PlainTextResponse:
    """Queue an arbitrary command for a device.

    Body: ``{"sn": "...", "command": "..."}``.
    """
    try:
        body = CommandIn.model_validate(await _read_json_object(request))
        entry = handler.enqueue_command(body.sn, body.command)
    except ValidationError:
        return _bad_request("Invalid request body")
    except CommandValidationError as exc:
        logger.info("Rejected command request: %s", exc)
        return _bad_request(str(exc))
    return CommandQueuedOut(id=entry.id, command=entry.command)


@router.post(
    "/attlog/last2days",
    response_model=AttlogRangeQueuedOut,
    responses={400: {"description": "Missing sn or invalid start/end"}},
)
async def enqueue_attlog_range(
    request: Request, handler: SessionHandlerDep
) -> AttlogRangeQueuedOut | PlainTextResponse:
    """Ask a device to re-upload its punches between ``start`` and ``end``.

    Body: ``{"sn": "...", "start": "<ISO 8601>", "end": "<ISO 8601>"}``.
    """
    try:
        body = AttlogRangeIn.model_validate(await _read_json_object(request))
        queued = handler.enqueue_attlog_range(body.sn, body.start, body.end)
    except ValidationError:
        return _bad_request("Invalid request body")
    except CommandValidationError as exc:
        logger.info("Rejected ATTLOG range request: %s", exc)
        return _bad_request(str(exc))
    return AttlogRangeQueuedOut(id=queued.entry.id, sn=body.sn, range=queued.range_label)
