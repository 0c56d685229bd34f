"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class ParseErrorResponse(BaseModel):
    """One rejected line."""

    line: int
    type: str
    message: str


class ParseOrdersResponse(BaseModel):
    """Orders parsed from a submission."""

    orders: list[str]
    errors: list[ParseErrorResponse] = Field(default_factory=list)
    echo: str


class PlayerResponse(BaseModel):
    id: int
    name: str


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    turn: str
    players: list[PlayerResponse]


class SubmitOrdersResponse(BaseModel):
    """Response after staging orders."""

    accepted: bool
    orders: int
    errors: list[ParseErrorResponse] = Field(default_factory=list)
    echo: str


class TurnResponse(BaseModel):
    """Response after running a turn."""

    turn: str
    phasesRun: list[str]  # noqa: N815
    phasesSkipped: list[str]  # noqa: N815
    errors: dict[str, list[str]] = Field(default_factory=dict)


class HullResponse(BaseModel):
    """Summary of a colony or ship."""

    hullId: str  # noqa: N815
    kind: str
    name: str
    owner: int | None
    population: dict[str, int]
    inventory: dict[str, dict[str, int]]
    farmGroups: list[dict]  # noqa: N815
    mineGroups: list[dict]  # noqa: N815
    factoryGroups: list[dict]  # noqa: N815
