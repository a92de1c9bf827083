"""Server-specific enums

Contains enums used only by the playback controller.
The trace engine never sees these.
"""

from enum import Enum


class PlaybackStatus(str, Enum):
    """Lifecycle of a playback session's autoplay.

    - IDLE: Session created, autoplay never started
    - PLAYING: Timer is advancing the cursor one step per tick
    - PAUSED: Timer is held; the cursor keeps its position
    - FINISHED: The cursor reached the final step
    - CANCELLED: Autoplay was stopped; the trace is untouched
    """

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"
    CANCELLED = "cancelled"
