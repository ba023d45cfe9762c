"""
Live game channel.

Clients connect to ``/api/game`` with their access token (``?token=`` or an
``Authorization: Bearer`` header) and exchange JSON frames shaped
``{"event": ..., "data": ...}``.

Client -> server:
    joinGame(gameId)     subscribe to a game's room
    leaveGame(gameId)    unsubscribe
    updateGame(payload)  score update; same checks and persistence as
                         PUT /api/games/{id}/score

Server -> client:
    joinedGame(gameId), gameUpdated(game), errorMessage(message)
"""
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from courtside.api.games import ScoreUpdate
from courtside.core.auth import authenticate_token, token_from_header
from courtside.core.exceptions import CourtsideError
from courtside.database import AsyncSessionLocal
from courtside.models import User
from courtside.realtime.broadcaster import Broadcaster, get_broadcaster
from courtside.services import GameService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_MESSAGE = "errorMessage"


async def send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"event": ERROR_MESSAGE, "data": message})


def room_name(game_id) -> str:
    """Numeric ids share one room however they are written ("007" is game 7)."""
    room = str(game_id).strip()
    if room.isdecimal():
        return str(int(room))
    return room


async def handle_update(websocket: WebSocket, broadcaster: Broadcaster, user_id: int, payload) -> None:
    if not isinstance(payload, dict) or payload.get("gameId") is None:
        await send_error(websocket, "updateGame requires a gameId")
        return
    
    game_id = room_name(payload["gameId"])
    if not game_id.isdecimal():
        await send_error(websocket, "Game not found")
        return
    
    try:
        score = ScoreUpdate.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        await send_error(websocket, f"Invalid update: {fields}")
        return
    
    async with AsyncSessionLocal() as db:
        # Role may have changed since the handshake
        user = await db.get(User, user_id)
        if user is None or user.role not in ("admin", "coach"):
            await send_error(websocket, "Not authorized to update games")
            return
        try:
            await GameService.publish_score(db, broadcaster, user, int(game_id), score.changes())
        except CourtsideError as e:
            await send_error(websocket, e.message)


async def dispatch(websocket: WebSocket, broadcaster: Broadcaster, user_id: int, event, data) -> None:
    if event in ("joinGame", "leaveGame") and not room_name(data or ""):
        await send_error(websocket, f"{event} requires a gameId")
    elif event == "joinGame":
        room = room_name(data)
        await broadcaster.join(room, websocket)
        await websocket.send_json({"event": "joinedGame", "data": room})
        logger.info(f"User {user_id} joined room {room}")
    elif event == "leaveGame":
        await broadcaster.leave(room_name(data), websocket)
    elif event == "updateGame":
        await handle_update(websocket, broadcaster, user_id, data)
    else:
        await send_error(websocket, f"Unknown event: {event}")


@router.websocket("/game")
async def game_channel(websocket: WebSocket, broadcaster: Broadcaster = Depends(get_broadcaster)):
    token = websocket.query_params.get("token") or token_from_header(websocket.headers.get("authorization"))
    
    async with AsyncSessionLocal() as db:
        try:
            user = await authenticate_token(db, token)
        except CourtsideError as e:
            logger.warning(f"Socket auth error: {e.message}")
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.message)
            return
        user_id, role = user.id, user.role
    
    await websocket.accept()
    logger.info(f"Socket connected for user {user_id} ({role})")
    
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                await send_error(websocket, "Frames must be JSON")
                continue
            if not isinstance(message, dict):
                await send_error(websocket, "Frames must be JSON objects")
                continue
            
            event = message.get("event")
            try:
                await dispatch(websocket, broadcaster, user_id, event, message.get("data"))
            except WebSocketDisconnect:
                raise
            except Exception:
                logger.exception(f"Socket event {event} failed for user {user_id}")
                await send_error(websocket, "Server error")
    except WebSocketDisconnect:
        logger.info(f"Socket disconnected for user {user_id}")
    finally:
        await broadcaster.disconnect(websocket)
