"""
AI proxy endpoints for the Rashed API.

Each endpoint validates its body and forwards it to ``AIClient``. Provider
failures surface as 500 responses with the underlying error text.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...ai.client import AIClient
from ...core.dependencies import get_current_session, get_session_ai_client
from ..auth.sessions import SessionData
from ..schemas import (
    ChatCompletionRequest,
    CodeGenerationRequest,
    CodeRequest,
    DocumentationResponse,
    RequirementsRequest,
)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/chat")
async def chat_completion(
    body: ChatCompletionRequest,
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_session_ai_client),
) -> Dict[str, Any]:
    """Forward role-tagged messages and return the provider's completion."""
    completion = await ai_client.create_chat_completion(
        messages=[message.model_dump() for message in body.messages],
        temperature=body.temperature,
        max_tokens=body.max_tokens,
    )
    return completion.model_dump(mode="json")


@router.post("/code")
async def generate_code(
    body: CodeGenerationRequest,
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_session_ai_client),
) -> str:
    """Generated source code, as a JSON string."""
    return await ai_client.generate_code(
        body.prompt, body.language, body.additional_instructions
    )


@router.post("/analyze")
async def analyze_code(
    body: CodeRequest,
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_session_ai_client),
) -> Dict[str, Any]:
    analysis = await ai_client.analyze_code(body.code, body.language)
    return analysis.to_wire()


@router.post("/document", response_model=DocumentationResponse)
async def generate_documentation(
    body: CodeRequest,
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_session_ai_client),
) -> DocumentationResponse:
    documentation = await ai_client.generate_documentation(body.code, body.language)
    return DocumentationResponse(documentation=documentation)


@router.post("/requirements")
async def natural_language_to_requirements(
    body: RequirementsRequest,
    session: SessionData = Depends(get_current_session),
    ai_client: AIClient = Depends(get_session_ai_client),
) -> Dict[str, Any]:
    requirements = await ai_client.natural_language_to_requirements(body.description)
    return requirements.to_wire()
