"""REPLYDESK — In-Memory Stores (process lifetime)."""

import threading
from typing import Dict, List

from app.core.errors import NotFoundError
from app.models.facts import (
    FactConfiguration,
    FactConfigurationCreate,
    FactConfigurationUpdate,
    merge_configuration,
)
from app.models.responses import (
    FALLBACK_CONFIGURATION_ID,
    FeedbackResponse,
    FeedbackResponseCreate,
)
from app.storage.base import ConfigurationStore, ResponseStore


class MemoryConfigurationStore(ConfigurationStore):
    def __init__(self, seed: bool = True):
        self._configs: Dict[int, FactConfiguration] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        if seed:
            self.seed_default()

    def get(self, config_id: int) -> FactConfiguration:
        config = self._configs.get(config_id)
        if config is None:
            raise NotFoundError(
                f"Configuration {config_id} not found",
                entity="configuration",
                entity_id=config_id,
            )
        return config.model_copy(deep=True)

    def get_latest(self) -> FactConfiguration:
        with self._lock:
            if not self._configs:
                raise NotFoundError("No configuration found", entity="configuration")
            return self._configs[max(self._configs)].model_copy(deep=True)

    def create(self, facts: FactConfigurationCreate) -> FactConfiguration:
        with self._lock:
            config = FactConfiguration.snapshot(self._next_id, facts).model_copy(deep=True)
            self._configs[config.id] = config
            self._next_id += 1
        return config.model_copy(deep=True)

    def update(
        self, config_id: int, update: FactConfigurationUpdate
    ) -> FactConfiguration:
        with self._lock:
            updated = merge_configuration(self.get(config_id), update)
            self._configs[config_id] = updated.model_copy(deep=True)
        return updated

    def list_all(self) -> List[FactConfiguration]:
        return [self._configs[k].model_copy(deep=True) for k in sorted(self._configs)]

    def count(self) -> int:
        return len(self._configs)


class MemoryResponseStore(ResponseStore):
    def __init__(self):
        self._responses: Dict[int, FeedbackResponse] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, response_id: int) -> FeedbackResponse:
        response = self._responses.get(response_id)
        if response is None:
            raise NotFoundError(
                f"Response {response_id} not found",
                entity="response",
                entity_id=response_id,
            )
        return response

    def create(self, record: FeedbackResponseCreate) -> FeedbackResponse:
        with self._lock:
            response = FeedbackResponse(
                id=self._next_id,
                feedback_text=record.feedback_text,
                ai_response=record.ai_response,
                configuration_id=record.configuration_id or FALLBACK_CONFIGURATION_ID,
            )
            self._responses[response.id] = response
            self._next_id += 1
        return response

    def list_all(self) -> List[FeedbackResponse]:
        return [self._responses[k] for k in sorted(self._responses)]

    def count(self) -> int:
        return len(self._responses)
