from __future__ import annotations

from .handlers_draw import handle_drawing
from .handlers_guess import handle_send_message

__all__ = [
    "handle_drawing",
    "handle_send_message",
]
