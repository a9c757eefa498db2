"""Messenger webhook routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ...app import IApplication
from ...config import Settings
from ...errors import MalformedInputError, UnsupportedObjectError
from ...logging_config import get_logger

logger = get_logger(__name__)


class WebhookAck(BaseModel):
    """Acknowledgement returned to the platform."""

    status: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    message: str
    timestamp: datetime


def create_webhook_router(app: IApplication, settings: Settings) -> APIRouter:
    """Create webhook router."""
    router = APIRouter(tags=["webhook"])

    @router.get("/", response_model=HealthResponse)
    async def health() -> dict:
        """Liveness check."""
        return {
            "status": "ok",
            "message": "Webhook server is running",
            "timestamp": datetime.now(timezone.utc),
        }

    @router.get("/webhook", response_class=PlainTextResponse)
    async def verify_webhook(
        mode: str | None = Query(None, alias="hub.mode"),
        token: str | None = Query(None, alias="hub.verify_token"),
        challenge: str = Query("", alias="hub.challenge"),
    ) -> str:
        """Answer the platform's subscription handshake."""
        if not mode or not token:
            logger.warning("Invalid verification request (mode=%s)", mode)
            raise HTTPException(status_code=400, detail="Missing hub.mode or hub.verify_token")

        if mode == "subscribe" and settings.verify_token and token == settings.verify_token:
            logger.info("Webhook verified successfully")
            return challenge

        logger.warning("Webhook verification failed (mode=%s)", mode)
        raise HTTPException(status_code=403, detail="Verification failed")

    @router.post("/webhook", response_model=WebhookAck)
    async def receive_webhook(request: Request) -> dict:
        """Process a batch of messaging events."""
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")

        try:
            effects = await app.handle_webhook(body)
        except UnsupportedObjectError as e:
            logger.warning("Rejected webhook: %s", e)
            raise HTTPException(status_code=404, detail="Invalid object type")
        except MalformedInputError as e:
            logger.warning("Rejected webhook: %s", e)
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            logger.error("Error processing webhook: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Internal server error")

        logger.info("Webhook processed, %s replies", len(effects))
        return {"status": "EVENT_RECEIVED"}

    return router
