from fastapi import APIRouter, Depends

from app.api.dependencies import get_language_model
from app.features.journaling.models import ReflectionPrompt
from app.services.llm import JournalLanguageModel

router = APIRouter(tags=["Reflection"])


@router.get("/reflection-prompt", response_model=ReflectionPrompt)
async def get_reflection_prompt(
    model: JournalLanguageModel = Depends(get_language_model),
) -> ReflectionPrompt:
    """A fresh journaling prompt; falls back to a fixed prompt if the model is unavailable."""
    return ReflectionPrompt(prompt=await model.generate_prompt())
