from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
from pydantic import BaseModel, Field

from config.settings import get_settings
from conversation.client import GeminiClient
from conversation.engine import SessionEngine
from conversation.models import MODEL_OPTIONS, Message, ModelOption


settings = get_settings()

logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("gemini_chat")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = GeminiClient(
        api_key=settings.api_key,
        endpoint_base=settings.endpoint_base,
        timeout=settings.request_timeout,
    )
    app.state.engine = SessionEngine(service=client, settings=settings)
    logger.info(
        "Config: model=%s key_set=%s turn_timeout=%s",
        settings.default_model_id,
        bool(settings.api_key),
        settings.turn_timeout,
    )
    try:
        yield
    finally:
        await client.aclose()


app = FastAPI(title="Gemini Chat Session", version="1.0.0", lifespan=lifespan)

# CORS: allow local frontend during development
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def get_engine(request: Request) -> SessionEngine:
    return request.app.state.engine


class TurnRequest(BaseModel):
    text: Optional[str] = Field(None, description="Message text; the pending draft is used when omitted")


class DraftRequest(BaseModel):
    text: str = ""


class ModelSelection(BaseModel):
    model_id: str = Field(..., description="Backend model variant for the next turn")


class SessionView(BaseModel):
    history: List[Message]
    in_flight: bool
    selected_model_id: str
    pending_input: str
    placeholder: Optional[str] = None


def _session_view(engine: SessionEngine) -> SessionView:
    return SessionView(
        history=list(engine.history),
        in_flight=engine.in_flight,
        selected_model_id=engine.selected_model_id,
        pending_input=engine.pending_input,
        placeholder=engine.placeholder,
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/models")
def list_models(engine: SessionEngine = Depends(get_engine)) -> Dict[str, Any]:
    options: List[ModelOption] = MODEL_OPTIONS
    return {"options": options, "selected_model_id": engine.selected_model_id}


@app.get("/session", response_model=SessionView)
def read_session(engine: SessionEngine = Depends(get_engine)) -> SessionView:
    return _session_view(engine)


@app.put("/session/draft", response_model=SessionView)
def update_draft(req: DraftRequest, engine: SessionEngine = Depends(get_engine)) -> SessionView:
    engine.set_draft(req.text)
    return _session_view(engine)


@app.put("/session/model", response_model=SessionView)
def select_model(req: ModelSelection, engine: SessionEngine = Depends(get_engine)) -> SessionView:
    engine.select_model(req.model_id)
    logger.info("Model selected: %s", req.model_id)
    return _session_view(engine)


@app.post("/session/turns")
async def submit_turn(req: TurnRequest, engine: SessionEngine = Depends(get_engine)) -> Dict[str, Any]:
    if engine.in_flight:
        raise HTTPException(status_code=409, detail="A turn is already in flight")

    text = engine.pending_input if req.text is None else req.text
    if not text.strip():
        return {"accepted": False, "discarded": False, "message": None}

    reply = await engine.submit_turn(text)
    # None here means the session was reset before the reply arrived.
    return {"accepted": True, "discarded": reply is None, "message": reply}


@app.post("/session/reset", response_model=SessionView)
def reset_session(engine: SessionEngine = Depends(get_engine)) -> SessionView:
    engine.reset_session()
    return _session_view(engine)


@app.post("/session/messages/{message_id}/reasoning")
def toggle_reasoning(message_id: str, engine: SessionEngine = Depends(get_engine)) -> Dict[str, Any]:
    message = next((m for m in engine.history if m.id == message_id), None)
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")
    if not message.is_reasoning:
        raise HTTPException(status_code=400, detail="Message has no reasoning to show")
    return {"message_id": message_id, "expanded": engine.reasoning_toggles.toggle(message_id)}
