"""REPLYDESK — Default Prompt Template & Seed Configuration."""

from app.models.facts import (
    CustomerFacts,
    FactConfigurationCreate,
    RestaurantFacts,
    SystemFacts,
)

# ── System role sent with every generation call ──
SYSTEM_ROLE = (
    "You are a professional customer relationship manager for restaurants. "
    "Generate thoughtful, personalized responses to customer feedback."
)

DEFAULT_PROMPT_TEMPLATE = """You are a customer relationship manager for a restaurant named "{Restaurant Name}", located at "{Address}". The restaurant type is "{Restaurant Type}" and communicates with a "{Brand tone}" tone.

A customer named "{Customer Name}" ({Gender}), a "{Customer History}" customer, recently had "{Meal type}" and left feedback: "{Customer Feedback Text}".

Consider the following additional restaurant facts: {Restaurant Todo List Facts}
Consider the following additional customer facts: {Customer Todo List Facts}

Generate a thoughtful, concise response addressing the customer's feedback appropriately. If feedback is negative, consider a polite apology. If positive, consider a friendly marketing message inviting them back."""


def default_configuration() -> FactConfigurationCreate:
    """The sample restaurant/customer/system triple a fresh store is seeded with."""
    return FactConfigurationCreate(
        restaurant_facts=RestaurantFacts(
            name="Sample Bistro",
            address="123 Main Street, Anytown",
            url="https://samplebistro.com",
            type="Casual",
            brand_tone="Friendly",
            todo_facts=[
                "Currently running Summer Specials",
                "Famous for seafood dishes",
            ],
        ),
        customer_facts=CustomerFacts(
            name="John Doe",
            gender="M",
            history="Long-time",
            meal="Dinner",
            todo_facts=["Prefers window seating", "Usually orders vegetarian dishes"],
        ),
        system_facts=SystemFacts(
            prompt_template=DEFAULT_PROMPT_TEMPLATE,
            response_length="medium",
            include_apology=True,
            include_marketing=True,
            multiple_responses=False,
        ),
    )
