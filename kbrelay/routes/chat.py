"""Chat endpoint relaying queries to the knowledge base."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from kbrelay.relay import ChatRelay
from kbrelay.schemas import ChatRequest, ChatResponse

router = APIRouter(tags=["chat"])


def get_relay(request: Request) -> ChatRelay:
    return request.app.state.relay


@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: Optional[ChatRequest] = Body(default=None),
    relay: ChatRelay = Depends(get_relay),
):
    payload = payload or ChatRequest()
    return await relay.handle(payload.query, payload.session_id)
