"""Chat relay: validates a query and forwards it to the knowledge base."""

import asyncio
import logging
from typing import Any, Optional

from kbrelay.exceptions import InvalidInputError, UpstreamFailureError
from kbrelay.knowledge_base import KnowledgeBase
from kbrelay.logging_config import log_latency
from kbrelay.schemas import ChatResponse

logger = logging.getLogger(__name__)


class ChatRelay:
    def __init__(self, knowledge_base: KnowledgeBase):
        self.knowledge_base = knowledge_base

    @staticmethod
    def _session_or_none(session_id: Any) -> Optional[str]:
        if isinstance(session_id, str) and session_id:
            return session_id
        return None

    async def handle(self, query: Any, session_id: Any = None) -> ChatResponse:
        if not isinstance(query, str) or not query:
            raise InvalidInputError()

        return await self._forward(query, self._session_or_none(session_id))

    @log_latency("relay.forward")
    async def _forward(self, query: str, session_id: Optional[str]) -> ChatResponse:
        logger.info(f"Processing query | query_length={len(query)} | has_session={session_id is not None}")

        try:
            result = await asyncio.to_thread(
                self.knowledge_base.retrieve_and_generate,
                query,
                session_id,
            )
            response = ChatResponse(
                answer=result.answer,
                session_id=result.session_id,
                citations=result.citations or [],
            )
        except Exception as e:
            logger.exception(f"Knowledge base call failed: {e}")
            raise UpstreamFailureError(str(e) or type(e).__name__) from e

        logger.info(
            f"Answer received | answer_length={len(response.answer)} | citations={len(response.citations)}"
        )
        return response

    def close(self):
        close = getattr(self.knowledge_base, "close", None)
        if callable(close):
            close()
