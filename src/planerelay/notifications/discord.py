"""
Delivery of formatted notifications to a Discord webhook.
"""

from dataclasses import dataclass
from typing import Any, Dict

import httpx
from loguru import logger

from ..errors import DownstreamDeliveryFailure


@dataclass
class WebhookTarget:
    """Downstream webhook configuration."""
    url: str
    headers: Dict[str, str] = None
    timeout: float = 10.0

    def __post_init__(self):
        if self.headers is None:
            self.headers = {"Content-Type": "application/json"}


class DiscordNotifier:
    """Posts messages to a single Discord webhook. One attempt, no retry."""

    def __init__(self, target: WebhookTarget):
        self.target = target

    async def send(self, message: Dict[str, Any]) -> int:
        """
        Deliver ``message`` to the webhook.

        Returns:
            int: The sink's HTTP status code

        Raises:
            DownstreamDeliveryFailure: On a non-2xx response or transport error
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.target.url,
                    json=message,
                    headers=self.target.headers,
                    timeout=self.target.timeout,
                )
                response.raise_for_status()
                logger.info(f"Discord notification delivered: {response.status_code}")
                return response.status_code

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Discord API error: {status}")
            raise DownstreamDeliveryFailure(
                f"Discord API error: {status}", status_code=status
            ) from e
        except httpx.TimeoutException as e:
            logger.error("Discord webhook timeout")
            raise DownstreamDeliveryFailure("Discord webhook timeout") from e
        except httpx.RequestError as e:
            logger.error(f"Discord webhook request error: {e}")
            raise DownstreamDeliveryFailure(f"Discord webhook request error: {e}") from e
