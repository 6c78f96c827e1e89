"""REPLYDESK — SQLModel Stores (SQLite / PostgreSQL).

Identifiers come from the primary-key sequence, so they are monotonic
and never reused as long as rows are never deleted.
"""

import json
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.errors import NotFoundError, PersistenceError
from app.core.logging import get_logger
from app.models.db_models import ConfigurationRow, ResponseRow
from app.models.facts import (
    CustomerFacts,
    FactConfiguration,
    FactConfigurationCreate,
    FactConfigurationUpdate,
    RestaurantFacts,
    SystemFacts,
    merge_configuration,
)
from app.models.responses import (
    FALLBACK_CONFIGURATION_ID,
    FeedbackResponse,
    FeedbackResponseCreate,
)
from app.storage.base import ConfigurationStore, ResponseStore

logger = get_logger("storage.database")


def _to_config(row: ConfigurationRow) -> FactConfiguration:
    return FactConfiguration(
        id=row.id,
        restaurant_facts=RestaurantFacts.model_validate(
            json.loads(row.restaurant_facts_json)
        ),
        customer_facts=CustomerFacts.model_validate(json.loads(row.customer_facts_json)),
        system_facts=SystemFacts.model_validate(json.loads(row.system_facts_json)),
    )


def _write_facts(row: ConfigurationRow, config: FactConfigurationCreate) -> None:
    row.restaurant_facts_json = config.restaurant_facts.model_dump_json(by_alias=True)
    row.customer_facts_json = config.customer_facts.model_dump_json(by_alias=True)
    row.system_facts_json = config.system_facts.model_dump_json(by_alias=True)


def _to_response(row: ResponseRow) -> FeedbackResponse:
    return FeedbackResponse(
        id=row.id,
        feedback_text=row.feedback_text,
        ai_response=row.ai_response,
        configuration_id=row.configuration_id,
    )


class DatabaseConfigurationStore(ConfigurationStore):
    def __init__(self, engine: Engine, seed: bool = True):
        self.engine = engine
        if seed:
            self.seed_default()

    def get(self, config_id: int) -> FactConfiguration:
        try:
            with Session(self.engine) as session:
                row = session.get(ConfigurationRow, config_id)
                if row is not None:
                    return _to_config(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load configuration: {e}") from e
        raise NotFoundError(
            f"Configuration {config_id} not found",
            entity="configuration",
            entity_id=config_id,
        )

    def get_latest(self) -> FactConfiguration:
        try:
            with Session(self.engine) as session:
                row = session.exec(
                    select(ConfigurationRow)
                    .order_by(ConfigurationRow.id.desc())  # type: ignore
                    .limit(1)
                ).first()
                if row is not None:
                    return _to_config(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load configuration: {e}") from e
        raise NotFoundError("No configuration found", entity="configuration")

    def create(self, facts: FactConfigurationCreate) -> FactConfiguration:
        row = ConfigurationRow(
            restaurant_facts_json="", customer_facts_json="", system_facts_json=""
        )
        _write_facts(row, facts)
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
                session.refresh(row)
                return _to_config(row)
        except SQLAlchemyError as e:
            logger.error(f"Configuration insert failed: {e}")
            raise PersistenceError(f"Failed to save configuration: {e}") from e

    def update(
        self, config_id: int, update: FactConfigurationUpdate
    ) -> FactConfiguration:
        try:
            with Session(self.engine) as session:
                row = session.get(ConfigurationRow, config_id)
                if row is None:
                    raise NotFoundError(
                        f"Configuration {config_id} not found",
                        entity="configuration",
                        entity_id=config_id,
                    )
                updated = merge_configuration(_to_config(row), update)
                _write_facts(row, updated)
                session.add(row)
                session.commit()
                return updated
        except SQLAlchemyError as e:
            logger.error(f"Configuration update failed: {e}")
            raise PersistenceError(f"Failed to update configuration: {e}") from e

    def list_all(self) -> List[FactConfiguration]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(ConfigurationRow).order_by(ConfigurationRow.id)  # type: ignore
                ).all()
                return [_to_config(r) for r in rows]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list configurations: {e}") from e

    def count(self) -> int:
        try:
            with Session(self.engine) as session:
                return session.exec(
                    select(func.count()).select_from(ConfigurationRow)
                ).one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count configurations: {e}") from e


class DatabaseResponseStore(ResponseStore):
    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, response_id: int) -> FeedbackResponse:
        try:
            with Session(self.engine) as session:
                row = session.get(ResponseRow, response_id)
                if row is not None:
                    return _to_response(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load response: {e}") from e
        raise NotFoundError(
            f"Response {response_id} not found",
            entity="response",
            entity_id=response_id,
        )

    def create(self, record: FeedbackResponseCreate) -> FeedbackResponse:
        row = ResponseRow(
            feedback_text=record.feedback_text,
            ai_response=record.ai_response,
            configuration_id=record.configuration_id or FALLBACK_CONFIGURATION_ID,
        )
        try:
            with Session(self.engine) as session:
                session.add(row)
                session.commit()
                session.refresh(row)
                return _to_response(row)
        except SQLAlchemyError as e:
            logger.error(f"Response insert failed: {e}")
            raise PersistenceError(f"Failed to save response: {e}") from e

    def list_all(self) -> List[FeedbackResponse]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(ResponseRow).order_by(ResponseRow.id)  # type: ignore
                ).all()
                return [_to_response(r) for r in rows]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list responses: {e}") from e

    def count(self) -> int:
        try:
            with Session(self.engine) as session:
                return session.exec(select(func.count()).select_from(ResponseRow)).one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count responses: {e}") from e
