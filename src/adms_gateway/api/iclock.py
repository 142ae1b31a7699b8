"""Device-facing ADMS endpoints.

Terminals expect ``text/plain`` bodies and a 200 status on every path; the
routes only read the request and hand it to the session protocol handler.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from adms_gateway.services.session import (
    CommandReport,
    Ping,
    Poll,
    PushTable,
    TableKind,
    classify_handshake,
)

from .dependencies import SessionHandlerDep

router = APIRouter(
    prefix="/iclock",
    tags=["device"],
    default_response_class=PlainTextResponse,
)


async def _read_text(request: Request) -> str:
    body = await request.body()
    return body.decode("utf-8", errors="replace")


@router.get("/cdata")
async def handshake(request: Request, handler: SessionHandlerDep) -> str:
    """Answer a time or options handshake, or a plain check-in."""
    return handler.handle(classify_handshake(request.query_params))


@router.post("/cdata")
async def push_table(request: Request, handler: SessionHandlerDep) -> str:
    """Accept a table push such as ATTLOG or USERINFO."""
    table = request.query_params.get("table")
    push = PushTable(
        serial=request.query_params.get("SN"),
        kind=TableKind.from_query(table),
        body=await _read_text(request),
        table=table,
    )
    return handler.handle(push)


@router.get("/getrequest")
async def poll_commands(request: Request, handler: SessionHandlerDep) -> str:
    """Deliver every pending command for the polling device."""
    return handler.handle(Poll(request.query_params.get("SN")))


@router.post("/devicecmd")
async def command_result(request: Request, handler: SessionHandlerDep) -> str:
    """Log the result a device reports for an executed command."""
    report = CommandReport(
        serial=request.query_params.get("SN"),
        body=await _read_text(request),
    )
    return handler.handle(report)


@router.get("/ping")
async def ping(request: Request, handler: SessionHandlerDep) -> str:
    """Heartbeat."""
    return handler.handle(Ping(request.query_params.get("SN")))
