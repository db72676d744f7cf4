"""AI generation and AI settings endpoints."""

import json

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from backend import storage
from resource_manager.ai import AIClient
from resource_manager.models import AIServiceConfig, LocalAIServices

from .models import GenerateBody

router = APIRouter(prefix="/ai")


def _config_dir(request: Request):
    return request.app.state.config_dir


@router.post("/generate")
async def generate(body: GenerateBody):
    """Non-streamed chat completion; returns the whole text."""
    client = AIClient(body.config)
    return {"content": await client.generate(body.system_prompt, body.user_prompt)}


@router.post("/generate-stream")
async def generate_stream(body: GenerateBody):
    """Streamed chat completion, republished as SSE: delta events, then done."""
    client = AIClient(body.config)
    # First event is pulled before responding: upstream failures raise here.
    events = client.stream(body.system_prompt, body.user_prompt)
    first = await anext(events)

    async def event_source():
        try:
            yield f"data: {json.dumps(first.model_dump(), ensure_ascii=False)}\n\n"
            async for event in events:
                yield f"data: {json.dumps(event.model_dump(), ensure_ascii=False)}\n\n"
        finally:
            await events.aclose()

    return StreamingResponse(event_source(), media_type="text/event-stream")


@router.get("/config")
async def get_ai_config(request: Request):
    """The manager's own AI service config (defaults if never saved)."""
    return storage.load_ai_config(_config_dir(request))


@router.put("/config")
async def save_ai_config(body: AIServiceConfig, request: Request):
    storage.save_ai_config(body, _config_dir(request))
    return {"ok": True}


@router.get("/shared-services")
async def get_shared_services(request: Request):
    """Service list shared by the main application (read-only)."""
    return storage.load_shared_ai_services(_config_dir(request))


@router.get("/local-services")
async def get_local_services(request: Request):
    return storage.load_local_ai_services(_config_dir(request))


@router.put("/local-services")
async def save_local_services(body: LocalAIServices, request: Request):
    storage.save_local_ai_services(body, _config_dir(request))
    return {"ok": True}
