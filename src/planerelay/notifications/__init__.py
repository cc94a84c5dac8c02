"""
Outbound notification formatting and delivery.
"""

from .formatter import build_message, build_embed
from .discord import DiscordNotifier, WebhookTarget

__all__ = [
    "build_message",
    "build_embed",
    "DiscordNotifier",
    "WebhookTarget",
]
