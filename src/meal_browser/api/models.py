"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import BaseModel, Field


class NavigationStepRequest(BaseModel):
    """List context carried by a next/previous request."""

    ids: list[str] = Field(default_factory=list)
    index: int
    origin: str | None = None
    offset: Literal[-1, 1] = 1
