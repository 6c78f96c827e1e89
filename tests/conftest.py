"""
Pytest configuration for REPLYDESK tests.

Sets up the test environment and shared fixtures: in-memory stores, a
scripted fake provider and a TestClient wired to both.
"""
import os
from typing import List, Optional, Tuple

import pytest

# No real providers or files during tests
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["OPENAI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["SARVAM_API_KEY"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.ai.base_provider import AIProvider  # noqa: E402
from app.models.facts import (  # noqa: E402
    CustomerFacts,
    FactConfigurationCreate,
    RestaurantFacts,
    SystemFacts,
)
from app.storage.memory import (  # noqa: E402
    MemoryConfigurationStore,
    MemoryResponseStore,
)


class FakeProvider(AIProvider):
    """Scripted provider that records every call."""

    name = "fake"

    def __init__(self, reply: str = "Thank you for dining with us!", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []
        self.image_calls: List[dict] = []

    def is_available(self) -> bool:
        return True

    @property
    def supports_vision(self) -> bool:
        return True

    async def generate(self, prompt, system=None, max_tokens=500, temperature=0.7):
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error:
            raise self.error
        return self.reply

    async def read_image(
        self, image, mime_type, instruction, system=None, max_tokens=500, temperature=None
    ):
        self.image_calls.append(
            {
                "mime_type": mime_type,
                "instruction": instruction,
                "system": system,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error:
            raise self.error
        return self.reply


def make_configuration(
    template: str = "Hello {Customer Name} from {Restaurant Name}",
    response_length: str = "medium",
    restaurant_name: str = "Sample Bistro",
    customer_name: str = "John Doe",
) -> FactConfigurationCreate:
    return FactConfigurationCreate(
        restaurant_facts=RestaurantFacts(
            name=restaurant_name,
            address="1 Harbour Road",
            type="Casual",
            brand_tone="Friendly",
            todo_facts=["Summer specials"],
        ),
        customer_facts=CustomerFacts(
            name=customer_name,
            gender="M",
            history="Long-time",
            meal="Dinner",
            todo_facts=[],
        ),
        system_facts=SystemFacts(
            prompt_template=template, response_length=response_length
        ),
    )


@pytest.fixture
def config_store():
    """Seeded in-memory configuration store (id 1 is the sample configuration)."""
    return MemoryConfigurationStore()


@pytest.fixture
def response_store():
    return MemoryResponseStore()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client(config_store, response_store, fake_provider, tmp_path):
    """TestClient with stores, provider selection and data dir overridden."""
    from fastapi.testclient import TestClient

    from app.api.dependencies import (
        get_configuration_store,
        get_data_dir,
        get_profile_library,
        get_provider_selector,
        get_response_store,
    )
    from app.main import app
    from app.services.profiles import ProfileLibrary

    def selector(provider_name: str = "auto", require_vision: bool = False) -> Tuple[str, AIProvider]:
        return "fake", fake_provider

    app.dependency_overrides[get_configuration_store] = lambda: config_store
    app.dependency_overrides[get_response_store] = lambda: response_store
    app.dependency_overrides[get_provider_selector] = lambda: selector
    app.dependency_overrides[get_data_dir] = lambda: tmp_path
    app.dependency_overrides[get_profile_library] = lambda: ProfileLibrary(tmp_path)

    yield TestClient(app)

    app.dependency_overrides.clear()
