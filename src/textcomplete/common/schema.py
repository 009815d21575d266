"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

class CompletionRequest(BaseModel):
    """Body of ``POST /completions``."""
    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    max_tokens: int

class Choice(BaseModel):
    text: str
    index: int | None = None
    finish_reason: str | None = None

class Usage(BaseModel):
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None

class CompletionResponse(BaseModel):
    """Subset of the completions response the CLI reads; other fields are ignored."""
    choices: list[Choice]
    usage: Usage | None = None

@dataclass
class CompletionResult:
    """Completion text plus request metadata."""
    text: str
    latency_ms: int
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
