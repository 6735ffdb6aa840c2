"""FastAPI server exposing the calendar assistant over HTTP."""

import json
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..agent.aggregator import to_payload
from ..agent.assistant import CalendarAssistant
from ..calendar.errors import BackendError, UnsupportedOperationError, ValidationError

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    """Access token from an ``Authorization: Bearer`` header, if any."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AssistantServer:
    """HTTP server for the prompt endpoint."""

    def __init__(
        self,
        assistant: CalendarAssistant,
        host: str = "127.0.0.1",
        port: int = 3000,
    ):
        self.assistant = assistant
        self.host = host
        self.port = port
        self.app = FastAPI(title="Garbi")
        self._server: Optional[uvicorn.Server] = None

        self._setup_routes()

    def _setup_routes(self):
        """Configure FastAPI routes."""

        @self.app.get("/health")
        async def health():
            return {"status": "ok"}

        @self.app.post("/api/handle-user-prompt")
        async def handle_user_prompt(request: Request):
            """Run one prompt against the caller's calendar."""
            token = _bearer_token(request)
            if not token:
                return JSONResponse({"error": "Unauthorized"}, status_code=401)

            try:
                body = await request.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

            prompt = body.get("prompt") if isinstance(body, dict) else None
            if not isinstance(prompt, str) or not prompt.strip():
                return JSONResponse(
                    {"error": "Invalid body: prompt is required"}, status_code=400
                )

            timezone = body.get("timeZone")
            if not isinstance(timezone, str) or not timezone.strip():
                timezone = None

            try:
                result = await self.assistant.handle_prompt(prompt.strip(), token, timezone)
            except (ValidationError, UnsupportedOperationError) as e:
                logger.warning(f"[server] Rejected prompt: {e}")
                return JSONResponse({"success": False, "error": str(e)}, status_code=400)
            except BackendError as e:
                logger.error(f"[server] Calendar backend failed: {e}")
                return JSONResponse({"success": False, "error": str(e)}, status_code=502)
            except Exception as e:
                logger.error(f"[server] Error handling prompt: {e}", exc_info=True)
                return JSONResponse(
                    {"success": False, "error": "Failed to handle prompt"}, status_code=500
                )

            return JSONResponse(to_payload(result), status_code=200)

    async def start(self) -> None:
        """Start the web server."""
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
        )
        self._server = uvicorn.Server(config)
        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True

    def get_url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"
