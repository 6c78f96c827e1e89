"""REPLYDESK — Fact Models.

The three fact groups that feed the prompt template, and the versioned
Configuration snapshot that bundles them. Wire names are camelCase
(`brandTone`, `todoFacts`, ...); Python attributes are snake_case and
either form is accepted on input.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising to camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


# ─────────────────────────────────────────────
# FACT GROUPS — Immutable once embedded in a Configuration
# ─────────────────────────────────────────────


class RestaurantFacts(FrozenCamelModel):
    """Who is answering the feedback."""

    name: str = ""
    address: str = ""
    url: str = ""
    type: str = ""  # e.g. "Casual", "Fine Dining"
    brand_tone: str = ""
    todo_facts: List[str] = Field(default_factory=list)


class CustomerFacts(FrozenCamelModel):
    """Who left the feedback."""

    name: str = ""
    gender: str = ""
    history: str = ""  # e.g. "Long-time", "First visit"
    meal: str = ""
    todo_facts: List[str] = Field(default_factory=list)


class SystemFacts(FrozenCamelModel):
    """How the prompt is built.

    `include_apology`, `include_marketing` and `multiple_responses` are
    stored and returned but do not change rendering.
    """

    prompt_template: str
    response_length: str = "medium"  # short | medium | detailed
    include_apology: bool = True
    include_marketing: bool = True
    multiple_responses: bool = False


# ─────────────────────────────────────────────
# CONFIGURATION — Versioned snapshot of all three groups
# ─────────────────────────────────────────────


class FactConfigurationCreate(CamelModel):
    """Payload for saving a new configuration version."""

    restaurant_facts: RestaurantFacts
    customer_facts: CustomerFacts
    system_facts: SystemFacts


class FactConfiguration(FactConfigurationCreate):
    """A stored configuration version. Replaced, never edited, on update."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: int

    @classmethod
    def snapshot(cls, config_id: int, facts: FactConfigurationCreate) -> "FactConfiguration":
        """Stamp a configuration id onto the three fact groups of `facts`."""
        return cls(
            id=config_id,
            restaurant_facts=facts.restaurant_facts,
            customer_facts=facts.customer_facts,
            system_facts=facts.system_facts,
        )


# ─────────────────────────────────────────────
# PATCHES — Partial in-place updates
# ─────────────────────────────────────────────


class RestaurantFactsPatch(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    brand_tone: Optional[str] = None
    todo_facts: Optional[List[str]] = None


class CustomerFactsPatch(CamelModel):
    name: Optional[str] = None
    gender: Optional[str] = None
    history: Optional[str] = None
    meal: Optional[str] = None
    todo_facts: Optional[List[str]] = None


class SystemFactsPatch(CamelModel):
    prompt_template: Optional[str] = None
    response_length: Optional[str] = None
    include_apology: Optional[bool] = None
    include_marketing: Optional[bool] = None
    multiple_responses: Optional[bool] = None


class FactConfigurationUpdate(CamelModel):
    """Payload for an in-place update. Omitted groups and fields are kept."""

    restaurant_facts: Optional[RestaurantFactsPatch] = None
    customer_facts: Optional[CustomerFactsPatch] = None
    system_facts: Optional[SystemFactsPatch] = None


def _merge(existing, patch: Optional[CamelModel]):
    if patch is None:
        return existing
    overrides = {k: v for k, v in patch.model_dump().items() if v is not None}
    if not overrides:
        return existing
    return existing.model_copy(update=overrides)


def merge_restaurant_facts(
    existing: RestaurantFacts, patch: Optional[RestaurantFactsPatch]
) -> RestaurantFacts:
    return _merge(existing, patch)


def merge_customer_facts(
    existing: CustomerFacts, patch: Optional[CustomerFactsPatch]
) -> CustomerFacts:
    return _merge(existing, patch)


def merge_system_facts(
    existing: SystemFacts, patch: Optional[SystemFactsPatch]
) -> SystemFacts:
    return _merge(existing, patch)


def merge_configuration(
    existing: FactConfiguration, update: FactConfigurationUpdate
) -> FactConfiguration:
    """Apply a partial update, keeping the identifier."""
    return FactConfiguration(
        id=existing.id,
        restaurant_facts=merge_restaurant_facts(
            existing.restaurant_facts, update.restaurant_facts
        ),
        customer_facts=merge_customer_facts(
            existing.customer_facts, update.customer_facts
        ),
        system_facts=merge_system_facts(existing.system_facts, update.system_facts),
    )
