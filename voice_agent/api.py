"""HTTP routes: agent run, tool catalogue, health."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

from .config import settings
from .dispatcher import Dispatcher, DispatcherConfig, InvalidRequest
from .tools.executor import build_executor
from .tools.registry import builtin_registry

logger = logging.getLogger(__name__)
router = APIRouter()


# ── Pydantic schemas ──────────────────────────────────────────

class AgentRequest(BaseModel):
    userInput: Optional[str] = None
    context: Dict[str, Any] = {}
    tools: List[str] = []

class AgentResponse(BaseModel):
    response: str
    context: Dict[str, Any]
    toolsUsed: List[str]


def default_dispatcher() -> Dispatcher:
    registry = builtin_registry()
    return Dispatcher(DispatcherConfig(registry=registry, executor=build_executor(settings, registry)))


def _dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


# ── Agent ─────────────────────────────────────────────────────

@router.post("/agent/run", response_model=AgentResponse)
async def run_agent(req: AgentRequest, request: Request):
    if not req.userInput:
        raise HTTPException(status_code=400, detail="userInput is required")

    try:
        result = await _dispatcher(request).process(req.userInput, req.context, req.tools)
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Agent error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    return result.to_dict()


@router.get("/agent/tools")
async def list_tools(request: Request, tools: Optional[List[str]] = Query(None)):
    registry = _dispatcher(request).registry
    return {"tools": [t.to_dict() for t in registry.filter(tools)]}


# ── Health ────────────────────────────────────────────────────

@router.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_app(dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    app = FastAPI(title="voice-agent")
    app.state.dispatcher = dispatcher or default_dispatcher()
    app.include_router(router)
    return app


app = create_app()
