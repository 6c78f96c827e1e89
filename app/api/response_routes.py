"""REPLYDESK — Response Generation Routes."""

from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import (
    ProviderSelector,
    get_configuration_store,
    get_data_dir,
    get_provider_selector,
    get_response_store,
    to_http_exception,
)
from app.core.errors import ReplyDeskError
from app.core.logging import get_logger
from app.models.facts import CamelModel
from app.models.responses import FeedbackResponse, GeneratedResponse, PromptPreview
from app.services.exports import export_response
from app.services.orchestrator import ResponseOrchestrator
from app.storage.base import ConfigurationStore, ResponseStore

logger = get_logger("api.responses")

router = APIRouter(prefix="/api", tags=["Responses"])


# ── Request / Response Models ──


class GenerateRequest(CamelModel):
    """Request body for POST /api/generate-response."""

    feedback_text: str = ""
    configuration_id: Optional[int] = None
    provider: str = "auto"

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"feedbackText": "Great food, slow service.", "configurationId": 1},
            ]
        }
    }


class SaveResponseRequest(CamelModel):
    response_id: int


class SaveResponseResult(BaseModel):
    message: str
    filename: str


# ── Endpoints ──


@router.post("/generate-response", response_model=GeneratedResponse)
async def generate_response(
    request: GenerateRequest,
    configurations: ConfigurationStore = Depends(get_configuration_store),
    responses: ResponseStore = Depends(get_response_store),
    selector: ProviderSelector = Depends(get_provider_selector),
):
    """Generate a reply to customer feedback and store it."""
    orchestrator = ResponseOrchestrator(
        configurations,
        responses,
        provider_factory=lambda: selector(request.provider)[1],
    )
    try:
        return await orchestrator.generate(
            request.feedback_text, request.configuration_id
        )
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.post("/preview-prompt", response_model=PromptPreview)
async def preview_prompt(
    request: GenerateRequest,
    configurations: ConfigurationStore = Depends(get_configuration_store),
    responses: ResponseStore = Depends(get_response_store),
):
    """Show the exact prompt that would be sent, without calling a provider."""
    orchestrator = ResponseOrchestrator(configurations, responses)
    try:
        return orchestrator.preview(request.feedback_text, request.configuration_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.get("/responses", response_model=List[FeedbackResponse])
async def list_responses(responses: ResponseStore = Depends(get_response_store)):
    try:
        return responses.list_all()
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.get("/responses/{response_id}", response_model=FeedbackResponse)
async def get_response(
    response_id: int, responses: ResponseStore = Depends(get_response_store)
):
    try:
        return responses.get(response_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.post("/save-response", response_model=SaveResponseResult)
async def save_response(
    request: SaveResponseRequest,
    responses: ResponseStore = Depends(get_response_store),
    data_dir: Path = Depends(get_data_dir),
):
    """Export a stored response to a text file."""
    try:
        filename = export_response(responses, request.response_id, data_dir)
    except ReplyDeskError as e:
        raise to_http_exception(e)
    return SaveResponseResult(message="Response saved successfully", filename=filename)
