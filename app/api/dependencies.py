"""REPLYDESK — Shared Route Dependencies."""

from functools import lru_cache
from pathlib import Path
from typing import Callable, Tuple

from fastapi import HTTPException

from app.ai.base_provider import AIProvider
from app.ai.registry import select_provider
from app.config import settings
from app.core.errors import ReplyDeskError
from app.core.logging import get_logger
from app.services.profiles import ProfileLibrary
from app.storage.base import ConfigurationStore, ResponseStore
from app.storage.factory import build_stores

logger = get_logger("api")

ProviderSelector = Callable[..., Tuple[str, AIProvider]]


@lru_cache(maxsize=1)
def get_stores() -> Tuple[ConfigurationStore, ResponseStore]:
    """Stores are built once per process."""
    return build_stores(settings)


def get_configuration_store() -> ConfigurationStore:
    return get_stores()[0]


def get_response_store() -> ResponseStore:
    return get_stores()[1]


def get_provider_selector() -> ProviderSelector:
    return select_provider


def get_data_dir() -> Path:
    return settings.data_path


def get_profile_library() -> ProfileLibrary:
    return ProfileLibrary(settings.data_path)


def to_http_exception(error: ReplyDeskError) -> HTTPException:
    """Map a domain error onto its HTTP status."""
    if error.status_code >= 500:
        logger.error(
            f"{type(error).__name__}: {error.message}",
            extra={"status_code": error.status_code},
        )
    return HTTPException(status_code=error.status_code, detail=error.message)
