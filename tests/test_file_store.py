"""Tests specific to the JSON file backend."""

import json

import pytest

from app.core.errors import PersistenceError
from app.models.responses import FeedbackResponseCreate
from app.storage.file import (
    CONFIG_FILE,
    RESPONSES_FILE,
    FileConfigurationStore,
    FileResponseStore,
)

from conftest import make_configuration


def test_files_created_with_camel_case_layout(tmp_path):
    FileConfigurationStore(tmp_path)
    FileResponseStore(tmp_path)

    configs = json.loads((tmp_path / CONFIG_FILE).read_text())
    responses = json.loads((tmp_path / RESPONSES_FILE).read_text())

    assert configs["nextId"] == 2
    assert configs["configs"][0]["restaurantFacts"]["brandTone"] == "Friendly"
    assert configs["configs"][0]["systemFacts"]["promptTemplate"]
    assert responses == {"responses": [], "nextId": 1}


def test_state_survives_restart(tmp_path):
    store = FileConfigurationStore(tmp_path)
    created = store.create(make_configuration(restaurant_name="Persisted"))

    reopened = FileConfigurationStore(tmp_path)
    assert reopened.get_latest() == created
    assert reopened.count() == 2


def test_existing_file_not_reseeded(tmp_path):
    store = FileConfigurationStore(tmp_path)
    store.create(make_configuration())
    FileConfigurationStore(tmp_path)
    assert store.count() == 2


def test_next_id_never_reuses_ids(tmp_path):
    """A stale nextId in the file cannot hand out an existing id."""
    store = FileConfigurationStore(tmp_path)
    path = tmp_path / CONFIG_FILE
    data = json.loads(path.read_text())
    data["nextId"] = 1
    path.write_text(json.dumps(data))

    created = store.create(make_configuration())
    assert created.id == 2


def test_latest_prefers_last_inserted_on_tie(tmp_path):
    store = FileConfigurationStore(tmp_path)
    path = tmp_path / CONFIG_FILE
    data = json.loads(path.read_text())
    duplicate = dict(data["configs"][0])
    duplicate["restaurantFacts"] = {**duplicate["restaurantFacts"], "name": "Second"}
    data["configs"].append(duplicate)
    path.write_text(json.dumps(data))

    assert store.get_latest().restaurant_facts.name == "Second"


def test_corrupt_file_raises_persistence_error(tmp_path):
    (tmp_path / RESPONSES_FILE).write_text("{not json")
    store = FileResponseStore(tmp_path)
    with pytest.raises(PersistenceError):
        store.list_all()


def test_invalid_record_raises_persistence_error(tmp_path):
    (tmp_path / RESPONSES_FILE).write_text(
        json.dumps({"responses": [{"id": "x"}], "nextId": 2})
    )
    store = FileResponseStore(tmp_path)
    with pytest.raises(PersistenceError):
        store.create(FeedbackResponseCreate(feedback_text="a", ai_response="b"))
