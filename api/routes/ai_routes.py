"""
AI helper endpoints: learning path, doubt resolution, provider status.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from api.bootstrap import get_text_generator
from api.config import settings
from api.models.models import User
from api.schemas.ai_schemas import DoubtRequest, DoubtResponse, LearningPathResponse, ProviderStatusResponse
from api.services.advisor_service import ProviderUnavailableError, generate_learning_path, resolve_doubt
from api.utils.auth import get_current_user
from api.utils.common import iso_format
from learning.core.llm import LLM

ai_routes = APIRouter()


@ai_routes.get("/learning-path", response_model=LearningPathResponse)
async def learning_path(
    current_user: User = Depends(get_current_user),
    generator: LLM = Depends(get_text_generator),
) -> LearningPathResponse:
    try:
        return await generate_learning_path(current_user, generator, timeout=settings.advisor_timeout_seconds)
    except ProviderUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@ai_routes.post("/doubt", response_model=DoubtResponse)
async def ask_doubt(
    req: DoubtRequest,
    current_user: User = Depends(get_current_user),
    generator: LLM = Depends(get_text_generator),
) -> DoubtResponse:
    assert current_user is not None
    question = req.question.strip()
    if not question:
        raise HTTPException(status_code=422, detail="Question is required")
    try:
        answer = await resolve_doubt(generator, question, req.context, timeout=settings.doubt_timeout_seconds)
    except ProviderUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return DoubtResponse(question=question, answer=answer, timestamp=iso_format(datetime.utcnow()))


@ai_routes.get("/status", response_model=ProviderStatusResponse)
async def provider_status(generator: LLM = Depends(get_text_generator)) -> ProviderStatusResponse:
    """Whether the configured model server answers. Generators without a health probe count as available."""
    is_available = getattr(generator, "is_available", None)
    available = bool(await is_available()) if is_available is not None else True
    return ProviderStatusResponse(model=getattr(generator, "model", settings.ollama_model), available=available)
