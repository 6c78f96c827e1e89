"""REPLYDESK — JSON File Stores.

Durable across restarts. Layout under the data directory:

    configurations.json  {"configs": [...], "nextId": n}
    responses.json       {"responses": [...], "nextId": n}

Records are written with camelCase keys. Every write replaces the whole
file via a temp file + rename so a crash never leaves half a document.
"""

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Type

from pydantic import BaseModel, ValidationError

from app.core.errors import NotFoundError, PersistenceError
from app.core.logging import get_logger
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

logger = get_logger("storage.file")

CONFIG_FILE = "configurations.json"
RESPONSES_FILE = "responses.json"


class _JSONCollection:
    """One JSON document holding a list of records and the next id."""

    def __init__(self, path: Path, key: str, model: Type[BaseModel]):
        self.path = path
        self.key = key
        self.model = model
        self.lock = threading.Lock()

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {self.key: [], "nextId": 1}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {self.path.name}: {e}")
            raise PersistenceError(f"Could not read {self.path.name}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get(self.key), list):
            raise PersistenceError(f"{self.path.name} is malformed")
        return data

    def write(self, data: Dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"Failed to write {self.path.name}: {e}")
            raise PersistenceError(f"Could not write {self.path.name}: {e}") from e

    def records(self, data: Dict[str, Any]) -> List[Any]:
        try:
            return [self.model.model_validate(r) for r in data[self.key]]
        except ValidationError as e:
            raise PersistenceError(f"{self.path.name} holds an invalid record: {e}") from e

    @staticmethod
    def next_id(data: Dict[str, Any], records: List[Any]) -> int:
        """nextId from the file, never below the highest stored id + 1."""
        highest = max((r.id for r in records), default=0)
        return max(int(data.get("nextId", 1)), highest + 1)


class FileConfigurationStore(ConfigurationStore):
    def __init__(self, data_dir: Path, seed: bool = True):
        self._collection = _JSONCollection(
            Path(data_dir) / CONFIG_FILE, "configs", FactConfiguration
        )
        if seed and not self._collection.exists():
            logger.info(f"Seeding default configuration in {self._collection.path}")
            self.seed_default()

    def _load(self) -> List[FactConfiguration]:
        return self._collection.records(self._collection.read())

    def get(self, config_id: int) -> FactConfiguration:
        for config in self._load():
            if config.id == config_id:
                return config
        raise NotFoundError(
            f"Configuration {config_id} not found",
            entity="configuration",
            entity_id=config_id,
        )

    def get_latest(self) -> FactConfiguration:
        configs = self._load()
        if not configs:
            raise NotFoundError("No configuration found", entity="configuration")
        latest = configs[0]
        for config in configs[1:]:
            # >= so the last inserted wins a tie
            if config.id >= latest.id:
                latest = config
        return latest

    def create(self, facts: FactConfigurationCreate) -> FactConfiguration:
        with self._collection.lock:
            data = self._collection.read()
            configs = self._collection.records(data)
            config = FactConfiguration.snapshot(
                self._collection.next_id(data, configs), facts
            )
            data["configs"].append(config.model_dump(by_alias=True))
            data["nextId"] = config.id + 1
            self._collection.write(data)
        return config

    def update(
        self, config_id: int, update: FactConfigurationUpdate
    ) -> FactConfiguration:
        with self._collection.lock:
            data = self._collection.read()
            configs = self._collection.records(data)
            for index, existing in enumerate(configs):
                if existing.id == config_id:
                    updated = merge_configuration(existing, update)
                    data["configs"][index] = updated.model_dump(by_alias=True)
                    self._collection.write(data)
                    return updated
        raise NotFoundError(
            f"Configuration {config_id} not found",
            entity="configuration",
            entity_id=config_id,
        )

    def list_all(self) -> List[FactConfiguration]:
        return sorted(self._load(), key=lambda c: c.id)

    def count(self) -> int:
        return len(self._load())


class FileResponseStore(ResponseStore):
    def __init__(self, data_dir: Path):
        self._collection = _JSONCollection(
            Path(data_dir) / RESPONSES_FILE, "responses", FeedbackResponse
        )
        if not self._collection.exists():
            self._collection.write({"responses": [], "nextId": 1})

    def _load(self) -> List[FeedbackResponse]:
        return self._collection.records(self._collection.read())

    def get(self, response_id: int) -> FeedbackResponse:
        for response in self._load():
            if response.id == response_id:
                return response
        raise NotFoundError(
            f"Response {response_id} not found",
            entity="response",
            entity_id=response_id,
        )

    def create(self, record: FeedbackResponseCreate) -> FeedbackResponse:
        with self._collection.lock:
            data = self._collection.read()
            responses = self._collection.records(data)
            response = FeedbackResponse(
                id=self._collection.next_id(data, responses),
                feedback_text=record.feedback_text,
                ai_response=record.ai_response,
                configuration_id=record.configuration_id or FALLBACK_CONFIGURATION_ID,
            )
            data["responses"].append(response.model_dump(by_alias=True))
            data["nextId"] = response.id + 1
            self._collection.write(data)
        return response

    def list_all(self) -> List[FeedbackResponse]:
        return sorted(self._load(), key=lambda r: r.id)

    def count(self) -> int:
        return len(self._load())
