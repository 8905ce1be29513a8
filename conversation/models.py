from __future__ import annotations

import uuid
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


class SimpleReply(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["simple"] = "simple"
    text: str


class ReasoningReply(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["reasoning"] = "reasoning"
    thinking: str
    output: str


Reply = Union[SimpleReply, ReasoningReply]


class Message(BaseModel):
    """One entry of the conversation log.

    Model messages come in two shapes: a plain ``text`` reply, or a
    ``thinking``/``output`` pair from a reasoning model, in which case
    ``output`` is what gets shown and ``text`` stays unset.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: Optional[str] = None
    thinking: Optional[str] = None
    output: Optional[str] = None
    thinking_time: Optional[float] = Field(default=None, ge=0)
    image: Optional[str] = None

    @property
    def content(self) -> str:
        if self.output is not None:
            return self.output
        if self.text is not None:
            return self.text
        return ""

    @property
    def is_reasoning(self) -> bool:
        return self.thinking is not None and self.output is not None

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role=Role.USER, text=text)

    @classmethod
    def from_reply(cls, reply: Reply, thinking_time: float, image: Optional[str] = None) -> "Message":
        if isinstance(reply, ReasoningReply):
            return cls(
                role=Role.MODEL,
                thinking=reply.thinking,
                output=reply.output,
                thinking_time=max(thinking_time, 0.0),
                image=image,
            )
        return cls(role=Role.MODEL, text=reply.text, thinking_time=max(thinking_time, 0.0), image=image)

    @classmethod
    def error(cls, text: str, image: Optional[str] = None) -> "Message":
        return cls(role=Role.MODEL, text=text, image=image)


class ModelOption(BaseModel):
    id: str
    value: str
    label: str


MODEL_OPTIONS: List[ModelOption] = [
    ModelOption(id="pro", value="gemini-1.5-pro", label="Gemini 1.5 Pro"),
    ModelOption(id="flash", value="gemini-1.5-flash", label="Gemini 1.5 Flash"),
    ModelOption(id="flash-2.0-exp", value="gemini-2.0-flash-exp", label="Gemini 2.0 Flash Experimental"),
    ModelOption(
        id="flash-thinking-exp",
        value="gemini-2.0-flash-thinking-exp",
        label="Gemini 2.0 Flash Thinking Experimental",
    ),
]
