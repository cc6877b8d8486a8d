"""
Chat session history
====================

Purpose:
- Keep the last few question/answer turns of each `/api/chat` session in Redis so
  follow-up questions ("update *his* email") resolve against earlier replies.

Dependencies & Requirements:
- `redis.asyncio` client for async Redis operations
- Enabled only when `MEMORY_REDIS_URL` (or `REDIS_URL`) is configured

Security Considerations:
- Turns may contain customer names and emails; sessions expire after `ttl_seconds`.

Notes:
- One Redis list per session, one JSON entry per completed turn. A turn is written
  only after the agent has answered, so a failed run leaves no half turn behind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from redis import asyncio as aioredis


@dataclass(frozen=True)
class ChatTurn:
    question: str
    answer: str
    at: str

    def to_prompt(self) -> str:
        return f"User: {self.question}\nAssistant: {self.answer}"


class ChatSessionStore:
    """
    Redis-backed turn history keyed by chat session id.

    Parameters:
    - client: async Redis client (`rpush/ltrim/expire/lrange/delete`).
    - max_turns: `int` turns kept per session; older turns are trimmed on write.
    - ttl_seconds: `int` idle expiry of a session, refreshed on every write.
    """

    def __init__(self, client: Any, *, max_turns: int = 10, ttl_seconds: int = 60 * 60) -> None:
        self._client = client
        self.max_turns = max_turns
        self._ttl = ttl_seconds

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "ChatSessionStore":
        return cls(aioredis.from_url(url, decode_responses=True), **kwargs)

    @staticmethod
    def session_key(session_id: str) -> str:
        return f"customer-manager:chat:{session_id}"

    async def history(self, session_id: str) -> list[ChatTurn]:
        """Return the stored turns of a session, oldest first; unreadable entries are dropped."""
        raw = await self._client.lrange(self.session_key(session_id), -self.max_turns, -1)
        turns: list[ChatTurn] = []
        for entry in raw:
            try:
                data = json.loads(entry)
                turns.append(ChatTurn(data["question"], data["answer"], data.get("at", "")))
            except (json.JSONDecodeError, KeyError, TypeError):
                continue
        return turns

    async def record_turn(self, session_id: str, question: str, answer: str) -> None:
        """
        Append one completed turn and trim the session to `max_turns`.

        Exceptions:
        - Propagates Redis errors; `CustomerAgent` decides whether they matter.
        """
        key = self.session_key(session_id)
        entry = json.dumps(
            {"question": question, "answer": answer, "at": datetime.now(timezone.utc).isoformat()},
            ensure_ascii=False,
        )
        await self._client.rpush(key, entry)
        await self._client.ltrim(key, -self.max_turns, -1)
        await self._client.expire(key, self._ttl)

    async def reset(self, session_id: str) -> None:
        await self._client.delete(self.session_key(session_id))
