"""AI router API.

Exposes provider monitoring and a completion endpoint with fallback.
Provider failures are reported in the body (``success: false``) with a 200,
the same way the router reports them to in-process callers.
"""

from typing import Any

from fastapi import APIRouter

from wouaka.api.deps import Router
from wouaka.core.errors import ValidationError
from wouaka.core.responses import DataResponse
from wouaka.providers.errors import AIRequestError
from wouaka.schemas.ai import CompletionRequest

router = APIRouter()


# =============================================================================
# GET /status
# =============================================================================


@router.get("/status")
async def get_status(ai_router: Router) -> DataResponse[dict[str, Any]]:
    """Return the default provider and which providers have credentials."""
    return DataResponse(data=ai_router.get_status().to_dict())


# =============================================================================
# POST /completions
# =============================================================================


@router.post("/completions")
async def create_completion(
    body: CompletionRequest,
    ai_router: Router,
) -> DataResponse[dict[str, Any]]:
    """Run one completion through the router.

    Raises:
        ValidationError: If tool_choice names a tool that was not sent, or
            the router rejects the request.
    """
    if body.tool_choice and body.tool_choice not in {t.name for t in body.tools or []}:
        raise ValidationError(
            "tool_choice must name one of the supplied tools",
            details=[{"field": "tool_choice", "value": body.tool_choice}],
        )

    try:
        result = await ai_router.call_with_fallback(
            body.to_ai_request(),
            task=body.task,
            provider=body.provider_id,
            fallback=body.fallback,
        )
    except AIRequestError as e:
        raise ValidationError(str(e)) from e

    return DataResponse(data=result.to_dict())
