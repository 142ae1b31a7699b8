"""Schemas for the admin command endpoints."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommandIn(BaseModel):
    """Request body for queueing an arbitrary device command.

    Fields are optional here so that missing values surface as a plain-text
    400 from the handler rather than a schema error.
    """

    model_config = ConfigDict(extra="ignore")

    sn: str | None = Field(default=None, description="Device serial number.")
    command: str | None = Field(default=None, description="Raw ADMS command text.")


class CommandQueuedOut(BaseModel):
    """Response after a command was queued."""

    status: Literal["queued"] = "queued"
    id: int
    command: str


class AttlogRangeIn(BaseModel):
    """Request body for queueing an attendance re-upload query."""

    model_config = ConfigDict(extra="ignore")

    sn: str | None = Field(default=None, description="Device serial number.")
    start: str | None = Field(default=None, description="ISO 8601 range start.")
    end: str | None = Field(default=None, description="ISO 8601 range end.")


class AttlogRangeQueuedOut(BaseModel):
    """Response after an attendance range query was queued."""

    status: Literal["queued"] = "queued"
    id: int
    sn: str
    range: str
