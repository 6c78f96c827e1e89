"""REPLYDESK — Feedback Screenshot Routes."""

from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.dependencies import ProviderSelector, get_provider_selector, to_http_exception
from app.core.errors import ReplyDeskError
from app.core.logging import get_logger
from app.models.facts import CamelModel
from app.models.responses import ExtractedFact
from app.services.screenshots import extract_feedback_facts, extract_feedback_text

logger = get_logger("api.screenshots")

router = APIRouter(prefix="/api", tags=["Screenshots"])


class ExtractedTextResponse(CamelModel):
    extracted_text: str


class ExtractedFactsResponse(CamelModel):
    extracted_facts: List[ExtractedFact]


@router.post("/analyze-image", response_model=ExtractedTextResponse)
async def analyze_image(
    image: UploadFile = File(...),
    provider: str = Form("auto"),
    selector: ProviderSelector = Depends(get_provider_selector),
):
    """Transcribe the customer's feedback text from a screenshot."""
    content = await image.read()
    try:
        _, vision = selector(provider, require_vision=True)
        text = await extract_feedback_text(vision, content, image.content_type)
    except ReplyDeskError as e:
        raise to_http_exception(e)
    return ExtractedTextResponse(extracted_text=text)


@router.post("/analyze-feedback-screenshot", response_model=ExtractedFactsResponse)
async def analyze_feedback_screenshot(
    image: UploadFile = File(...),
    provider: str = Form("auto"),
    selector: ProviderSelector = Depends(get_provider_selector),
):
    """Extract structured facts (ratings, demographics, visit details) from a review form."""
    content = await image.read()
    try:
        _, vision = selector(provider, require_vision=True)
        facts = await extract_feedback_facts(vision, content, image.content_type)
    except ReplyDeskError as e:
        raise to_http_exception(e)
    logger.info(f"Extracted {len(facts)} facts from screenshot")
    return ExtractedFactsResponse(extracted_facts=facts)
