"""Pydantic request/response schemas for API endpoints."""

from wouaka.schemas.ai import (
    CompletionMessage,
    CompletionRequest,
    CompletionTool,
)

__all__ = [
    "CompletionMessage",
    "CompletionRequest",
    "CompletionTool",
]
