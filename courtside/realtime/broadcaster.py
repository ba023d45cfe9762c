"""Room-based fan-out of game events to WebSocket subscribers.

A connection joins the room named after a game id; ``broadcast`` sends one
``{"event": ..., "data": ...}`` frame to every socket in that room. Sends are
fire-and-forget: a socket that fails to receive is dropped from its rooms and
never fails the caller.

The broadcaster is built once by the app factory and reaches handlers through
the ``get_broadcaster`` dependency.
"""
import asyncio
import json
import logging
from collections import defaultdict
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from starlette.requests import HTTPConnection
from starlette.websockets import WebSocket

from courtside.config import Settings

logger = logging.getLogger(__name__)


class Broadcaster:
    """Interface handed to request handlers that need to publish game events."""
    
    async def start(self) -> None:
        pass
    
    async def stop(self) -> None:
        pass
    
    async def join(self, room: str, websocket: WebSocket) -> None:
        raise NotImplementedError
    
    async def leave(self, room: str, websocket: WebSocket) -> None:
        raise NotImplementedError
    
    async def disconnect(self, websocket: WebSocket) -> None:
        raise NotImplementedError
    
    async def broadcast(self, room: str, event: str, data: Any) -> int:
        raise NotImplementedError
    
    def room_lock(self, room: str) -> asyncio.Lock:
        raise NotImplementedError


class LocalBroadcaster(Broadcaster):
    """In-process rooms. Enough for a single worker."""
    
    def __init__(self):
        self.rooms: dict[str, set[WebSocket]] = defaultdict(set)
        self._locks: dict[str, asyncio.Lock] = {}
    
    async def join(self, room: str, websocket: WebSocket) -> None:
        self.rooms[room].add(websocket)
    
    async def leave(self, room: str, websocket: WebSocket) -> None:
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self.rooms[room]
    
    async def disconnect(self, websocket: WebSocket) -> None:
        for room in [r for r, members in self.rooms.items() if websocket in members]:
            await self.leave(room, websocket)
    
    def subscribers(self, room: str) -> int:
        return len(self.rooms.get(room, ()))
    
    def room_lock(self, room: str) -> asyncio.Lock:
        """Serializes persist-then-broadcast for one game within this process."""
        lock = self._locks.get(room)
        if lock is None:
            lock = self._locks[room] = asyncio.Lock()
        return lock
    
    async def broadcast(self, room: str, event: str, data: Any) -> int:
        message = {"event": event, "data": jsonable_encoder(data)}
        return await self.deliver(room, message)
    
    async def deliver(self, room: str, message: dict) -> int:
        """Send an already-encoded frame to local members of ``room``."""
        delivered = 0
        stale = []
        for websocket in list(self.rooms.get(room, ())):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping socket from room {room}: {e}")
                stale.append(websocket)
        
        for websocket in stale:
            await self.disconnect(websocket)
        
        logger.debug(f"Broadcast {message['event']} to {delivered} sockets in room {room}")
        return delivered


class RedisBroadcaster(LocalBroadcaster):
    """
    Rooms shared across worker processes through Redis pub/sub.
    
    ``broadcast`` publishes on ``<prefix>:<room>``; a listener task subscribed
    to ``<prefix>:*`` relays every message to the local members of the room.
    Delivery happens when the listener picks the message up, so it is not
    tied to the publishing request.
    """
    
    def __init__(self, redis_url: str, channel_prefix: str = "courtside:game", client=None):
        super().__init__()
        self.redis_url = redis_url
        self.channel_prefix = channel_prefix
        self._redis = client
        self._pubsub = None
        self._listener: Optional[asyncio.Task] = None
    
    def channel_for(self, room: str) -> str:
        return f"{self.channel_prefix}:{room}"
    
    def room_for(self, channel: str) -> str:
        return channel[len(self.channel_prefix) + 1:]
    
    async def start(self) -> None:
        if self._redis is None:
            import redis.asyncio as redis
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        self._pubsub = self._redis.pubsub()
        await self._pubsub.psubscribe(f"{self.channel_prefix}:*")
        self._listener = asyncio.create_task(self._listen())
        logger.info(f"Redis broadcaster subscribed to {self.channel_prefix}:*")
    
    async def stop(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            self._listener = None
        if self._pubsub is not None:
            await self._pubsub.aclose()
            self._pubsub = None
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
    
    async def broadcast(self, room: str, event: str, data: Any) -> int:
        message = {"event": event, "data": jsonable_encoder(data)}
        receivers = await self._redis.publish(self.channel_for(room), json.dumps(message))
        logger.debug(f"Published {event} for room {room} to {receivers} listeners")
        return receivers
    
    async def handle_message(self, message: dict) -> None:
        if message.get("type") != "pmessage":
            return
        try:
            payload = json.loads(message["data"])
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed message on {message.get('channel')}")
            return
        await self.deliver(self.room_for(message["channel"]), payload)
    
    async def _listen(self) -> None:
        async for message in self._pubsub.listen():
            try:
                await self.handle_message(message)
            except Exception:
                logger.exception("Failed to relay pub/sub message")


def build_broadcaster(settings: Settings) -> Broadcaster:
    if settings.use_redis:
        return RedisBroadcaster(settings.redis_url, settings.redis_channel_prefix)
    return LocalBroadcaster()


def get_broadcaster(connection: HTTPConnection) -> Broadcaster:
    """FastAPI dependency returning the broadcaster the app was built with."""
    return connection.app.state.broadcaster
