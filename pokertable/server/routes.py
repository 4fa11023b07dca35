"""
HTTP API Routes for pokertable.

One table per application. The session lives on app.state; every handler
drives the engine synchronously, so requests never interleave mid-action.
"""

from typing import Dict, Any
from fastapi import APIRouter, HTTPException, Request
import logging

from pokertable.core.rules import TableConfig
from pokertable.server.schemas import (
    InitGameRequest, ActionRequest, ActionResultSchema,
    GameStateSchema, LegalActionsSchema,
)
from pokertable.server.session import TableSession


logger = logging.getLogger(__name__)

router = APIRouter()


def get_session(request: Request) -> TableSession:
    """Get the current table session."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return session


@router.post("/init_game")
async def init_game(req: InitGameRequest, request: Request) -> Dict[str, Any]:
    """
    Seat a new table and deal the first hand.

    Seat 0 is the human; the other seats are AI players. Any AI seats acting
    before the human have already played when this returns.
    """
    try:
        config = TableConfig(
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            starting_stack=req.starting_stack,
        )
        session = TableSession(req.seat_count, config=config, seed=req.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not session.start():
        raise HTTPException(status_code=400, detail="Cannot start hand")
    request.app.state.session = session
    logger.info(f"Table initialized with {req.seat_count} seats")

    return {
        "success": True,
        "message": f"Game initialized with {req.seat_count} players",
        "seat_count": req.seat_count,
        "state": session.state(),
    }


@router.post("/start_hand")
async def start_hand(request: Request) -> Dict[str, Any]:
    """
    Start a new hand.

    Deals cards, posts blinds and plays AI seats up to the human's turn.
    """
    session = get_session(request)

    if not session.start_hand():
        raise HTTPException(status_code=400, detail="Cannot start hand")

    return {
        "success": True,
        "message": f"Hand #{session.game.hand_number} started",
        "hand_number": session.game.hand_number,
        "state": session.state(),
    }


@router.get("/get_game_state", response_model=GameStateSchema)
async def get_game_state(request: Request) -> Dict[str, Any]:
    """
    Get the current game state.

    Other seats' hole cards stay hidden until showdown.
    """
    return get_session(request).state()


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions(request: Request) -> Dict[str, Any]:
    """
    Get legal actions for the human seat.
    """
    session = get_session(request)

    if not session.game.is_hand_running():
        return {"actions": [], "message": "No hand in progress"}
    if not session.is_human_turn():
        return {"actions": [], "message": "Not your turn"}

    return {"actions": session.legal_actions()}


@router.post("/take_action", response_model=ActionResultSchema)
async def take_action(req: ActionRequest, request: Request) -> Dict[str, Any]:
    """
    Take a game action for the human seat.

    Processes the action, then lets the AI seats play until the human must
    act again or the hand ends.
    """
    session = get_session(request)

    result = session.game.player_action(
        req.action_type, req.amount or 0, seat_index=session.human_seat
    )
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)

    session.play_bots()

    return {
        "success": True,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "state": session.state(),
    }


@router.post("/reset_game")
async def reset_game(request: Request) -> Dict[str, Any]:
    """
    Reset the game (for development/testing).
    """
    request.app.state.session = None
    return {"success": True, "message": "Game reset"}
