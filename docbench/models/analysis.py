"""Result models for the local analyses (word frequency, graph layout)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WordCount(BaseModel):
    """A term and how often it occurs; feeds both the bar chart and treemap."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: int


class PositionedNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    x: float
    y: float
    radius: float


class LinkSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float
    width: float


class GraphLayout(BaseModel):
    """Static circular layout of a mind graph in a fixed viewport."""

    model_config = ConfigDict(frozen=True)

    width: int = 600
    height: int = 400
    nodes: list[PositionedNode] = Field(default_factory=list)
    links: list[LinkSegment] = Field(default_factory=list)
