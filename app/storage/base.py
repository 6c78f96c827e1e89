"""REPLYDESK — Abstract Stores."""

from abc import ABC, abstractmethod
from typing import List

from app.models.facts import (
    FactConfiguration,
    FactConfigurationCreate,
    FactConfigurationUpdate,
)
from app.models.responses import FeedbackResponse, FeedbackResponseCreate
from app.prompts.defaults import default_configuration


class ConfigurationStore(ABC):
    """Append-only, versioned collection of fact configurations.

    Identifiers are assigned by the store, strictly increasing and never
    reused. Every `create` is a new version; `update` is the only in-place
    mutation.
    """

    @abstractmethod
    def get(self, config_id: int) -> FactConfiguration:
        """Return the configuration with this id.

        Raises:
            NotFoundError: No configuration has this id.
        """
        ...

    @abstractmethod
    def get_latest(self) -> FactConfiguration:
        """Return the configuration with the highest id.

        Raises:
            NotFoundError: The store is empty.
        """
        ...

    @abstractmethod
    def create(self, facts: FactConfigurationCreate) -> FactConfiguration:
        """Assign the next id, persist the snapshot and return it."""
        ...

    @abstractmethod
    def update(
        self, config_id: int, update: FactConfigurationUpdate
    ) -> FactConfiguration:
        """Merge a partial update into an existing configuration in place.

        Raises:
            NotFoundError: No configuration has this id.
        """
        ...

    @abstractmethod
    def list_all(self) -> List[FactConfiguration]:
        """All configurations in id order."""
        ...

    @abstractmethod
    def count(self) -> int: ...

    def seed_default(self) -> None:
        """Store the sample configuration if the store is empty."""
        if self.count() == 0:
            self.create(default_configuration())


class ResponseStore(ABC):
    """Append-only collection of generated responses. No update or delete."""

    @abstractmethod
    def get(self, response_id: int) -> FeedbackResponse:
        """Return the response with this id.

        Raises:
            NotFoundError: No response has this id.
        """
        ...

    @abstractmethod
    def create(self, record: FeedbackResponseCreate) -> FeedbackResponse:
        """Assign the next id and persist. A missing configuration id falls
        back to FALLBACK_CONFIGURATION_ID."""
        ...

    @abstractmethod
    def list_all(self) -> List[FeedbackResponse]: ...

    @abstractmethod
    def count(self) -> int: ...
