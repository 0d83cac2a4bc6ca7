"""AI router factory.

One router per process so adapters reuse their HTTP connections.
"""

from wouaka.providers.config import ProviderConfig
from wouaka.providers.router import AIRouter

_ai_router: AIRouter | None = None


def get_ai_router(config: ProviderConfig | None = None) -> AIRouter:
    """Get or create the AI router singleton.

    The first call fixes the configuration; later calls reuse the instance.

    Args:
        config: Optional provider configuration. If None and no router
            exists, loads from environment.

    Returns:
        AIRouter instance.
    """
    global _ai_router

    if _ai_router is None:
        _ai_router = AIRouter(config or ProviderConfig.from_env())

    return _ai_router


def reset_ai_router() -> None:
    """Drop the router singleton.

    Used in tests to ensure isolation between test cases.
    """
    global _ai_router
    _ai_router = None


async def close_ai_router() -> None:
    """Close the router singleton's connections, if one was created."""
    global _ai_router

    if _ai_router is not None:
        await _ai_router.aclose()
        _ai_router = None
