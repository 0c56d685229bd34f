"""Game session management for the HTTP API."""

import logging
import uuid
from dataclasses import dataclass, field

from ..engine.galaxy_generator import generate_galaxy
from ..engine.turn_executor import TurnExecutor, TurnResults, advance_turn
from ..interface.order_parser import ParseResult, parse_orders
from ..models.game import Game
from ..models.hull import Hull
from ..models.order import PhaseOrders

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One game being played through the API.

    Orders are staged per player until the next turn runs. A player who
    submits twice replaces their earlier orders.
    """

    id: str
    game: Game
    staged: dict[int, ParseResult] = field(default_factory=dict)  # player id -> parsed orders

    def stage_orders(self, player_id: int, text: str) -> ParseResult:
        """Parse and stage a player's orders.

        Raises:
            KeyError: If the player is not in this game
        """
        if player_id not in self.game.players:
            raise KeyError(f"Unknown player: {player_id}")
        result = parse_orders(text)
        self.staged[player_id] = result
        logger.info(
            "Game %s: player %d staged %d orders (%d rejected)",
            self.id,
            player_id,
            len(result.orders),
            len(result.rejected),
        )
        return result

    def run_turn(self, phases: list[str]) -> TurnResults:
        """Run the phases against the staged orders, then advance the clock."""
        all_orders = [
            PhaseOrders.from_orders(player_id, result.orders)
            for player_id, result in sorted(self.staged.items())
        ]
        logger.info("Game %s: running turn %s", self.id, self.game.turn)
        results = TurnExecutor(self.game).execute(all_orders, *phases)
        advance_turn(self.game)
        self.staged = {}
        return results

    def hull_summary(self, hull: Hull) -> dict:
        population = hull.population
        return {
            "hullId": hull.hull_id,
            "kind": hull.kind.value,
            "name": hull.name,
            "owner": hull.owner,
            "population": {
                "professional": population.professional,
                "soldier": population.soldier,
                "unskilled": population.unskilled,
                "unemployed": population.unemployed,
                "constructionCrew": population.construction_crew,
                "spyTeam": population.spy_team,
                "births": population.births_prior_turn,
                "deaths": population.natural_deaths_prior_turn,
            },
            "inventory": {
                item.unit.code: {"active": item.active_qty, "stowed": item.stowed_qty}
                for item in hull.inventory
            },
            "farmGroups": [
                {"no": g.no, "product": g.product.code, "stages": g.stages}
                for g in hull.farm_groups
            ],
            "mineGroups": [
                {
                    "no": g.no,
                    "deposit": self.game.deposits[g.deposit_id].code,
                    "product": self.game.deposits[g.deposit_id].product.code,
                    "stages": g.stages,
                }
                for g in hull.mine_groups
            ],
            "factoryGroups": [
                {"no": g.no, "product": g.product.code, "stages": g.stages}
                for g in hull.factory_groups
            ],
        }


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; sessions are lost when the server stops.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(self, players: list[str], seed: int | None = None) -> GameSession:
        """Generate a new galaxy and open a session for it.

        Args:
            players: Player names, in player id order
            seed: Optional RNG seed for determinism

        Returns:
            Newly created GameSession
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        session = GameSession(id=game_id, game=generate_galaxy(seed, players))
        self.sessions[game_id] = session
        logger.info("Created game %s: players=%s, seed=%d", game_id, players, seed)
        return session

    def get(self, game_id: str) -> GameSession | None:
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session.

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info("Deleted game %s", game_id)
            return True
        return False

    def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info("Cleaning up %d game sessions", len(self.sessions))
        self.sessions.clear()
