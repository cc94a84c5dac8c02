"""
Webhook server for receiving Plane events and relaying them to Discord.
Handles signature verification, delivery correlation and notification.
"""

from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, HTTPException, Header
from loguru import logger

from ..config import RelayConfig
from ..correlation import Decision, EventCorrelator, PendingStore
from ..errors import MissingCredentials, SignatureMismatch
from ..notifications import DiscordNotifier, WebhookTarget
from .relay import RelayOrchestrator

DECISION_DETAILS = {
    Decision.CACHED: "Initial event cached",
    Decision.COMPLETED: "Sequence complete",
    Decision.RESET: "Window reset",
}


class WebhookServer:
    """Main relay server class."""

    def __init__(self, config: RelayConfig):
        config.ensure_required()
        self.config = config
        self.store = PendingStore()
        self.correlator = EventCorrelator(self.store, window_ms=config.window_ms)
        self.notifier = DiscordNotifier(
            WebhookTarget(url=config.discord_webhook_url, timeout=config.discord_timeout)
        )
        self.relay = RelayOrchestrator(config.webhook_secret, self.correlator, self.notifier)
        self.app = FastAPI(title="Plane Relay", version="1.0.0")
        self.app.state.server = self
        self._setup_routes()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging."""
        if not self.config.log_file:
            return
        logger.add(
            self.config.log_file,
            rotation="1 day",
            retention="30 days",
            level=self.config.log_level.upper()
        )

    def _setup_routes(self):
        """Setup FastAPI routes."""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now().isoformat()}

        @self.app.get("/stats")
        async def stats():
            """Relay counters."""
            return self.relay.get_stats()

        @self.app.post("/webhook")
        async def plane_webhook(
            request: Request,
            x_plane_signature: Optional[str] = Header(None, alias="X-Plane-Signature")
        ):
            """Handle Plane webhooks."""
            try:
                # Raw bytes: the signature covers the body exactly as sent
                raw_body = await request.body()

                result = await self.relay.handle(raw_body, x_plane_signature)

                return {"status": result.decision.value, "detail": DECISION_DETAILS[result.decision]}

            except MissingCredentials as e:
                raise HTTPException(status_code=e.status_code, detail="Unauthorized")
            except SignatureMismatch as e:
                raise HTTPException(status_code=e.status_code, detail="Forbidden")
            except HTTPException:
                raise
            except Exception as e:
                logger.error(f"Handler Error: {e}")
                raise HTTPException(status_code=500, detail="Internal server error")


def create_app(config: Optional[RelayConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = RelayConfig.from_env()

    server = WebhookServer(config)
    return server.app
