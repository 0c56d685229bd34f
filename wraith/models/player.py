"""Player data model."""

from dataclasses import dataclass


@dataclass
class Player:
    """A player submitting orders each turn.

    Players own hulls by id reference; the hull records its owner.
    """

    id: int
    name: str

    def __post_init__(self):
        """Validate player data after initialization."""
        if self.id <= 0:
            raise ValueError(f"Invalid player id: {self.id} (must be > 0)")
        if not self.name:
            raise ValueError("name cannot be empty")
