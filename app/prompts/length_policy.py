"""REPLYDESK — Response Length Policy.

Maps a configuration's responseLength to the instruction appended to the
prompt and the token budget for the generation call.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional


class ResponseLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    DETAILED = "detailed"


class LengthPolicy(NamedTuple):
    instruction: str
    max_tokens: int


LENGTH_POLICIES: Dict[ResponseLength, LengthPolicy] = {
    ResponseLength.SHORT: LengthPolicy(
        "Keep the response concise, around 2-3 sentences.", 200
    ),
    ResponseLength.MEDIUM: LengthPolicy(
        "Provide a moderate length response, around 3-4 paragraphs.", 500
    ),
    ResponseLength.DETAILED: LengthPolicy(
        "Provide a comprehensive response with detailed explanations.", 1000
    ),
}

DEFAULT_LENGTH = ResponseLength.MEDIUM


def resolve_length_policy(value: Optional[str]) -> LengthPolicy:
    """Look up the policy for a responseLength; unknown values get medium."""
    try:
        return LENGTH_POLICIES[ResponseLength(value)]
    except ValueError:
        return LENGTH_POLICIES[DEFAULT_LENGTH]


def apply_length_policy(prompt: str, policy: LengthPolicy) -> str:
    """Append the policy's instruction after a blank line."""
    return f"{prompt}\n\n{policy.instruction}"
