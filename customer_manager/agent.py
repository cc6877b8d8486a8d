"""
Customer Manager agent
======================

Purpose:
- Provides `CustomerAgent`, a chat agent that answers questions about the customer
  directory and performs CRUD through the tools in `customer_manager.tools`.

Dependencies:
- `agents` SDK (`agents.Agent`, `Runner`)
- Model provider (`agents.models.openai_provider.OpenAIProvider`)
- Optional Redis chat history (`customer_manager.memory.ChatSessionStore`)

Notes:
- Security: the API key is passed straight to the provider; it is never logged or
  written back into the environment.
- Agent failures propagate to the caller; `/api/chat` turns them into a 500 payload.
"""

import logging
from typing import List

from agents import Agent as AgentsAgent
from agents import Runner
from agents.models.interface import Model
from agents.models.openai_provider import OpenAIProvider

from .config import Settings
from .memory import ChatSessionStore, ChatTurn
from .service import CustomerService
from .tools import build_function_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "You are a concise assistant for the Customer Manager directory. "
    "Use the provided tools to list, look up, search, create, update or delete customers. "
    "Never invent customer data; if a tool returns an error, explain it to the user. "
    "Confirm the resulting record after every change."
)


class AgentNotConfiguredError(RuntimeError):
    """Raised when the agent is constructed without an API key."""


class CustomerAgent:
    """
    Chat agent bound to one `CustomerService` instance.

    Example:
    ```python
    agent = CustomerAgent(service, Settings.from_env())
    reply = await agent.handle_message("Who is customer 2?")
    ```
    """

    def __init__(
        self,
        service: CustomerService,
        settings: Settings,
        sessions: ChatSessionStore | None = None,
    ):
        """
        Parameters:
        - service: `CustomerService` the tools operate on.
        - settings: `Settings` providing `openai_api_key`, `agent_model` and `base_url`.
        - sessions: `ChatSessionStore | None` optional per-session turn history.

        Raises:
        - `AgentNotConfiguredError`: when `settings.openai_api_key` is empty.
        """
        if not settings.openai_api_key:
            raise AgentNotConfiguredError("OPENAI_API_KEY is not set")

        self.service = service
        self.model_name = settings.agent_model
        self.sessions = sessions
        self._model = self._build_model(settings)
        self.agent = self._build_agent()

    def _build_model(self, settings: Settings) -> Model:
        provider = OpenAIProvider(
            api_key=settings.openai_api_key,
            base_url=settings.base_url,
            # OpenAI-compatible proxies usually only expose chat completions.
            use_responses=False if settings.base_url else None,
        )
        return provider.get_model(self.model_name)

    def _build_agent(self) -> AgentsAgent:
        return AgentsAgent(
            name="CustomerManagerAgent",
            instructions=INSTRUCTIONS,
            tools=build_function_tools(self.service),
            model=self._model,
        )

    def _build_prompt(self, message: str, history: List[ChatTurn]) -> str:
        if not history:
            return message
        context = "\n".join(turn.to_prompt() for turn in history)
        return f"Earlier in this conversation:\n{context}\n\nUser: {message}"

    async def _history(self, session_id: str | None) -> List[ChatTurn]:
        if not (self.sessions and session_id):
            return []
        try:
            return await self.sessions.history(session_id)
        except Exception:  # noqa: BLE001
            logger.warning("Chat history unavailable for session %s", session_id, exc_info=True)
            return []

    async def _record(self, session_id: str | None, message: str, reply: str) -> None:
        if not (self.sessions and session_id):
            return
        try:
            await self.sessions.record_turn(session_id, message, reply)
        except Exception:  # noqa: BLE001
            # The reply was produced; losing its history entry is not a request failure.
            logger.warning("Could not store chat turn for session %s", session_id, exc_info=True)

    async def handle_message(self, message: str, session_id: str | None = None) -> str:
        """
        Run the agent on a user message and return its final text.

        Parameters:
        - message: `str` user message.
        - session_id: `str | None` reads and extends the session history when a
          session store is configured.

        Returns:
        - `str`: the agent's final output.

        Raises:
        - Any exception from `Runner.run` (network, provider or model errors).
        """
        history = await self._history(session_id)
        result = await Runner.run(self.agent, input=self._build_prompt(message, history))
        reply = str(result.final_output or "")
        await self._record(session_id, message, reply)
        return reply

    async def reset_session(self, session_id: str) -> bool:
        """
        Forget the stored history of `session_id`.

        Returns:
        - `bool`: `False` when no session store is configured, else `True`.

        Raises:
        - Redis errors, so the caller can report a failed reset.
        """
        if self.sessions is None:
            return False
        await self.sessions.reset(session_id)
        logger.info("Reset chat session %s", session_id)
        return True
