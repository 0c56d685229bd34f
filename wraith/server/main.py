"""FastAPI server for the Wraith turn engine.

Players create a game, stage their order text, and run turns over HTTP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..interface.order_parser import ParseResult, parse_orders
from ..models.order import Phase
from ..utils.constants import DEFAULT_PHASES
from .schemas.requests import (
    CreateGameRequest,
    ParseOrdersRequest,
    RunTurnRequest,
    SubmitOrdersRequest,
)
from .schemas.responses import (
    CreateGameResponse,
    HullResponse,
    ParseErrorResponse,
    ParseOrdersResponse,
    PlayerResponse,
    SubmitOrdersResponse,
    TurnResponse,
)
from .session import GameSession, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("Wraith server starting...")
    yield
    logger.info("Wraith server shutting down...")
    sessions.cleanup_all()


app = FastAPI(
    title="Wraith API",
    description="Order parsing and turn resolution for the Wraith game engine",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _parse_errors(result: ParseResult) -> list[ParseErrorResponse]:
    return [
        ParseErrorResponse(line=e.line, type=e.error_type.value, message=e.message)
        for e in result.errors
    ]


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "Wraith",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/orders/parse", response_model=ParseOrdersResponse)
async def parse(request: ParseOrdersRequest):
    """Parse order text and echo it back with any errors.

    Example:
        POST /api/orders/parse
        {"text": "assemble C1 500 factory-1 structural\\n"}
    """
    result = parse_orders(request.text)
    return ParseOrdersResponse(
        orders=[str(order) for order in result.orders],
        errors=_parse_errors(result),
        echo=result.echo(),
    )


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game with one home system per player.

    Example:
        POST /api/games
        {"seed": 42, "players": ["alice", "bob"]}
    """
    try:
        session = sessions.create_session(players=request.players, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    game = session.game
    return CreateGameResponse(
        gameId=session.id,
        seed=game.seed,
        turn=game.turn,
        players=[PlayerResponse(id=p.id, name=p.name) for p in game.players.values()],
    )


@app.post("/api/games/{game_id}/orders", response_model=SubmitOrdersResponse)
async def submit_orders(game_id: str, request: SubmitOrdersRequest):
    """Stage a player's orders for the next turn.

    Lines that fail to parse are reported; the rest are staged.
    """
    session = _get_session(game_id)
    try:
        result = session.stage_orders(request.playerId, request.text)
    except KeyError:
        raise HTTPException(status_code=400, detail=f"Unknown player: {request.playerId}")

    return SubmitOrdersResponse(
        accepted=not result.rejected,
        orders=len(result.orders),
        errors=_parse_errors(result),
        echo=result.echo(),
    )


@app.post("/api/games/{game_id}/turn", response_model=TurnResponse)
async def run_turn(game_id: str, request: RunTurnRequest):
    """Run the requested phases with every player's staged orders."""
    session = _get_session(game_id)

    phases = list(DEFAULT_PHASES) if request.phases is None else request.phases
    known = {phase.value for phase in Phase}
    unknown = [name for name in phases if name not in known]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown phases: {unknown}")

    results = session.run_turn(phases)
    return TurnResponse(
        turn=session.game.turn,
        phasesRun=results.phases_run,
        phasesSkipped=results.phases_skipped,
        errors={str(pid): errors for pid, errors in results.errors.items()},
    )


@app.get("/api/games/{game_id}/hulls/{hull_id}", response_model=HullResponse)
async def get_hull(game_id: str, hull_id: str):
    """Get the current state of a colony or ship."""
    session = _get_session(game_id)
    hull = session.game.find_hull(hull_id)
    if hull is None:
        raise HTTPException(status_code=404, detail=f"Hull {hull_id} not found")
    return HullResponse(**session.hull_summary(hull))


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
