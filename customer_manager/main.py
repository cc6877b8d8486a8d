"""
FastAPI Application Entrypoint
==============================

Purpose:
- Assemble the Customer Manager app: customer/health routers, the `/api/chat` agent
  endpoint, request logging and the error-to-status mapping.

Dependencies:
- `fastapi` for web framework and exception handling
- Local agent (`customer_manager.agent.CustomerAgent`), enabled when `OPENAI_API_KEY` is set

Usage:
    uvicorn customer_manager.main:app --reload
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from .agent import CustomerAgent
from .api import health_router, router as customers_router
from .config import Settings
from .logging_config import RequestLoggingMiddleware, setup_logging
from .memory import ChatSessionStore
from .models import ChatRequest, ChatResponse, ErrorResponse
from .service import CustomerService, InMemoryCustomerService
from .validators import CustomerInputError

logger = logging.getLogger(__name__)

AGENT_NOT_CONFIGURED = "AI agent is not configured. Set OPENAI_API_KEY to enable chat."
HISTORY_NOT_ENABLED = "Chat history is not enabled. Set MEMORY_REDIS_URL to keep sessions."

# Default for `create_app(agent=...)`: build the agent from settings. `None` disables chat.
FROM_SETTINGS: Any = object()


def _build_agent(service: CustomerService, settings: Settings) -> CustomerAgent | None:
    if not settings.agent_enabled:
        logger.info("OPENAI_API_KEY not set; /api/chat is disabled")
        return None
    sessions = None
    if settings.memory_redis_url:
        sessions = ChatSessionStore.from_url(settings.memory_redis_url, max_turns=settings.memory_max_turns)
    return CustomerAgent(service, settings, sessions=sessions)


def create_app(
    settings: Settings | None = None,
    service: CustomerService | None = None,
    agent: Any = FROM_SETTINGS,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters:
    - settings: `Settings | None` defaults to `Settings.from_env()`.
    - service: `CustomerService | None` defaults to a seeded `InMemoryCustomerService`.
    - agent: object with async `handle_message(message, session_id)` and
      `reset_session(session_id)`; built from settings when omitted, `None` disables chat.

    Returns:
    - `FastAPI`: configured application; the service and agent live on `app.state`.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    service = service or InMemoryCustomerService()
    if agent is FROM_SETTINGS:
        agent = _build_agent(service, settings)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="In-memory customer directory with an AI agent chat endpoint",
    )
    app.state.settings = settings
    app.state.customer_service = service
    app.state.agent = agent

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(health_router)
    app.include_router(customers_router)

    @app.exception_handler(CustomerInputError)
    async def input_error_handler(request: Request, exc: CustomerInputError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.post(
        "/api/chat",
        response_model=ChatResponse,
        tags=["Agent"],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat(body: ChatRequest, request: Request):
        """
        Forward a message to the customer agent.

        Returns:
        - 200 `{response, sessionId}`
        - 400 when no agent is configured or the message is blank
        - 500 `{error, detail}` when the agent run fails

        Example:
        ```bash
        curl -X POST http://localhost:8000/api/chat \
          -H 'Content-Type: application/json' \
          -d '{"message": "Find the customer called Jane"}'
        ```
        """
        chat_agent = request.app.state.agent
        if chat_agent is None:
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": AGENT_NOT_CONFIGURED})
        if not body.message.strip():
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Message is required"})

        try:
            reply = await chat_agent.handle_message(body.message, body.session_id)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Agent request failed")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Agent request failed", "detail": str(exc)},
            )
        return ChatResponse(response=reply, session_id=body.session_id)

    @app.delete(
        "/api/chat/sessions/{session_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        tags=["Agent"],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def reset_chat_session(session_id: str, request: Request):
        """Forget the stored history of a chat session so the next message starts fresh."""
        chat_agent = request.app.state.agent
        if chat_agent is None:
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": AGENT_NOT_CONFIGURED})

        try:
            reset = await chat_agent.reset_session(session_id)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Chat session reset failed")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Session reset failed", "detail": str(exc)},
            )
        if not reset:
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": HISTORY_NOT_ENABLED})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


# Module-level instance so `uvicorn customer_manager.main:app` can discover it.
app = create_app()
