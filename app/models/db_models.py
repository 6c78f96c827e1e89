"""REPLYDESK — Database Table Models.

Fact groups are stored as JSON text columns, the same way each snapshot is
serialised to the file backend.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class ConfigurationRow(SQLModel, table=True):
    """Versioned fact configuration stored in DB."""

    __tablename__ = "fact_configurations"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    restaurant_facts_json: str = Field(description="RestaurantFacts as JSON")
    customer_facts_json: str = Field(description="CustomerFacts as JSON")
    system_facts_json: str = Field(description="SystemFacts as JSON")


class ResponseRow(SQLModel, table=True):
    """Immutable generated response.

    Never modify this data — it's the audit trail.
    """

    __tablename__ = "feedback_responses"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    feedback_text: str = Field(description="Customer feedback as submitted")
    ai_response: str = Field(description="Text returned by the provider")
    configuration_id: int = Field(
        foreign_key="fact_configurations.id", index=True
    )
