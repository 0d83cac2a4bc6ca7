"""Shared dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends

from wouaka.providers.factory import get_ai_router
from wouaka.providers.router import AIRouter


def get_router() -> AIRouter:
    """Return the process-wide AI router.

    Tests override this dependency with a router built on fake adapters.
    """
    return get_ai_router()


Router = Annotated[AIRouter, Depends(get_router)]
