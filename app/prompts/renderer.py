"""REPLYDESK — Template Renderer.

Merges restaurant and customer facts plus the raw feedback text into a
prompt template by literal placeholder substitution. The placeholder set
is fixed; anything else in braces is left alone. Rendering never fails.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional

from app.models.facts import CustomerFacts, RestaurantFacts

RESTAURANT_NAME = "{Restaurant Name}"
ADDRESS = "{Address}"
RESTAURANT_TYPE = "{Restaurant Type}"
BRAND_TONE = "{Brand tone}"
CUSTOMER_NAME = "{Customer Name}"
GENDER = "{Gender}"
CUSTOMER_HISTORY = "{Customer History}"
MEAL_TYPE = "{Meal type}"
FEEDBACK_TEXT = "{Customer Feedback Text}"
RESTAURANT_TODO_FACTS = "{Restaurant Todo List Facts}"
CUSTOMER_TODO_FACTS = "{Customer Todo List Facts}"

PLACEHOLDERS = (
    RESTAURANT_NAME,
    ADDRESS,
    RESTAURANT_TYPE,
    BRAND_TONE,
    CUSTOMER_NAME,
    GENDER,
    CUSTOMER_HISTORY,
    MEAL_TYPE,
    FEEDBACK_TEXT,
    RESTAURANT_TODO_FACTS,
    CUSTOMER_TODO_FACTS,
)

_PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(t) for t in PLACEHOLDERS))

LIST_SEPARATOR = ", "


def join_facts(facts: Optional[Iterable[str]]) -> str:
    """Render a todo-fact list in order; an empty or missing list renders as ""."""
    if not facts:
        return ""
    return LIST_SEPARATOR.join(facts)


def placeholder_values(
    restaurant: Optional[RestaurantFacts],
    customer: Optional[CustomerFacts],
    feedback_text: Optional[str],
) -> Dict[str, str]:
    """Resolve every recognized placeholder to its string value."""
    restaurant = restaurant or RestaurantFacts()
    customer = customer or CustomerFacts()
    return {
        RESTAURANT_NAME: restaurant.name,
        ADDRESS: restaurant.address,
        RESTAURANT_TYPE: restaurant.type,
        BRAND_TONE: restaurant.brand_tone,
        CUSTOMER_NAME: customer.name,
        GENDER: customer.gender,
        CUSTOMER_HISTORY: customer.history,
        MEAL_TYPE: customer.meal,
        FEEDBACK_TEXT: feedback_text or "",
        RESTAURANT_TODO_FACTS: join_facts(restaurant.todo_facts),
        CUSTOMER_TODO_FACTS: join_facts(customer.todo_facts),
    }


def substitute(template: str, values: Mapping[str, Optional[str]]) -> str:
    """Replace every occurrence of each recognized placeholder.

    Keys outside PLACEHOLDERS are ignored, so callers cannot widen the
    token set. Missing or None values substitute as "". Substitution is a
    single pass: a value that itself contains a placeholder is inserted
    verbatim.
    """
    return _PLACEHOLDER_PATTERN.sub(
        lambda match: values.get(match.group(0)) or "", template or ""
    )


def render_prompt(
    template: str,
    restaurant: Optional[RestaurantFacts],
    customer: Optional[CustomerFacts],
    feedback_text: Optional[str],
) -> str:
    """Render a template against the fact groups and feedback text."""
    return substitute(template, placeholder_values(restaurant, customer, feedback_text))


def find_placeholders(template: str) -> List[str]:
    """Return the recognized placeholders a template uses, in canonical order."""
    return [token for token in PLACEHOLDERS if token in (template or "")]
