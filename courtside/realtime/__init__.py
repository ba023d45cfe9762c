from courtside.realtime.broadcaster import (
    Broadcaster,
    LocalBroadcaster,
    RedisBroadcaster,
    build_broadcaster,
    get_broadcaster,
)

__all__ = [
    "Broadcaster",
    "LocalBroadcaster",
    "RedisBroadcaster",
    "build_broadcaster",
    "get_broadcaster",
]
