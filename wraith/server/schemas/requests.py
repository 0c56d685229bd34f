"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field


class ParseOrdersRequest(BaseModel):
    """Request to parse order text without staging it."""

    text: str = Field(description="Order text, one statement per line")


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    players: list[str] = Field(min_length=1, description="Player names, in player id order")


class SubmitOrdersRequest(BaseModel):
    """Request to stage one player's orders for the next turn."""

    playerId: int = Field(gt=0, description="Submitting player's id")  # noqa: N815
    text: str = Field(description="Order text, one statement per line")


class RunTurnRequest(BaseModel):
    """Request to run phases against staged orders."""

    phases: list[str] | None = Field(
        default=None, description="Phase names in execution order; defaults to the standard turn"
    )
