"""Task-level helpers built on the AI router.

Both helpers enable fallback: backend features relying on them degrade to
their own rule-based results only when every provider has failed.
"""

from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIMessage,
    TaskType,
    ToolDefinition,
)
from wouaka.providers.factory import get_ai_router
from wouaka.providers.router import AIRouter


async def call_fraud_detection(
    system_prompt: str,
    user_prompt: str,
    tools: list[ToolDefinition] | None = None,
    router: AIRouter | None = None,
) -> AICompletionResponse:
    """Run a fraud analysis, forcing the first tool when tools are given.

    Args:
        system_prompt: Analyst instructions.
        user_prompt: Profile data rendered as text.
        tools: Structured-output functions; the first one is forced.
        router: Router to use (process singleton if None).

    Returns:
        Normalized response; check ``success``.
    """
    request = AICompletionRequest(
        messages=[
            AIMessage(role="system", content=system_prompt),
            AIMessage(role="user", content=user_prompt),
        ],
        tools=tools,
        tool_choice=tools[0].name if tools else None,
    )
    return await (router or get_ai_router()).call_with_fallback(
        request, task=TaskType.FRAUD_DETECTION, fallback=True
    )


async def call_document_analysis(
    document_text: str,
    analysis_type: str,
    router: AIRouter | None = None,
) -> AICompletionResponse:
    """Extract structured information from OCR text of an identity document."""
    system_prompt = (
        "Tu es un expert en analyse de documents d'identité pour l'Afrique "
        "de l'Ouest (zone UEMOA).\n"
        "Analyse le texte OCR fourni et extrait les informations structurées.\n"
        f"Type d'analyse: {analysis_type}"
    )
    user_prompt = f"Extrait les informations de ce document:\n\n{document_text}"

    request = AICompletionRequest(
        messages=[
            AIMessage(role="system", content=system_prompt),
            AIMessage(role="user", content=user_prompt),
        ]
    )
    return await (router or get_ai_router()).call_with_fallback(
        request, task=TaskType.DOCUMENT_ANALYSIS, fallback=True
    )
