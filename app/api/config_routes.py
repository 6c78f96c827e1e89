"""REPLYDESK — Fact Configuration Routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_configuration_store, to_http_exception
from app.core.errors import ReplyDeskError
from app.core.logging import get_logger
from app.models.facts import (
    FactConfiguration,
    FactConfigurationCreate,
    FactConfigurationUpdate,
)
from app.prompts.renderer import find_placeholders
from app.storage.base import ConfigurationStore

logger = get_logger("api.config")

router = APIRouter(prefix="/api/fact-configuration", tags=["Configuration"])


def _warn_if_static(config: FactConfiguration) -> None:
    if not find_placeholders(config.system_facts.prompt_template):
        logger.warning(
            "Prompt template uses no placeholders",
            extra={"configuration_id": config.id},
        )


@router.get("", response_model=FactConfiguration)
async def get_latest_configuration(
    store: ConfigurationStore = Depends(get_configuration_store),
):
    """Get the most recent fact configuration."""
    try:
        return store.get_latest()
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.get("/history", response_model=List[FactConfiguration])
async def list_configurations(
    store: ConfigurationStore = Depends(get_configuration_store),
):
    """Every saved configuration version, oldest first."""
    try:
        return store.list_all()
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.get("/{config_id}", response_model=FactConfiguration)
async def get_configuration(
    config_id: int,
    store: ConfigurationStore = Depends(get_configuration_store),
):
    try:
        return store.get(config_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.post("", response_model=FactConfiguration)
async def save_configuration(
    request: FactConfigurationCreate,
    store: ConfigurationStore = Depends(get_configuration_store),
):
    """Save a new configuration version. Always assigns a new id."""
    try:
        config = store.create(request)
    except ReplyDeskError as e:
        raise to_http_exception(e)
    logger.info("Configuration saved", extra={"configuration_id": config.id})
    _warn_if_static(config)
    return config


@router.patch("/{config_id}", response_model=FactConfiguration)
async def update_configuration(
    config_id: int,
    request: FactConfigurationUpdate,
    store: ConfigurationStore = Depends(get_configuration_store),
):
    """Update an existing configuration in place. Omitted fields are kept."""
    if not request.model_fields_set:
        raise HTTPException(status_code=400, detail="Nothing to update")
    try:
        config = store.update(config_id, request)
    except ReplyDeskError as e:
        raise to_http_exception(e)
    logger.info("Configuration updated", extra={"configuration_id": config.id})
    _warn_if_static(config)
    return config
