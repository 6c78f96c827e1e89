"""REPLYDESK — Restaurant & Customer Profile Library.

Ready-made fact groups kept as JSON files:

    <data_dir>/restaurant-profiles/<profileId>.json
    <data_dir>/customer-profiles/<restaurantId>/<profileId>.json
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from app.core.errors import InputValidationError, NotFoundError, PersistenceError
from app.core.logging import get_logger

logger = get_logger("services.profiles")

RESTAURANT_DIR = "restaurant-profiles"
CUSTOMER_DIR = "customer-profiles"


def _safe_id(value: str, label: str) -> str:
    if not value or "/" in value or "\\" in value or value.startswith("."):
        raise InputValidationError(f"Invalid {label}: {value!r}")
    return value


def _read_profile(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Profile {path.name} is not valid JSON: {e}") from e
    except OSError as e:
        raise PersistenceError(f"Could not read profile {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceError(f"Profile {path.name} is not a JSON object")
    return data


def _list_dir(directory: Path) -> List[Dict[str, Any]]:
    if not directory.is_dir():
        return []
    return [
        {**_read_profile(path), "id": path.stem}
        for path in sorted(directory.glob("*.json"))
    ]


class ProfileLibrary:
    """Lists and loads profile JSON files under a data directory."""

    def __init__(self, data_dir: Path):
        self.root = Path(data_dir)

    def list_restaurant_profiles(self) -> List[Dict[str, Any]]:
        return _list_dir(self.root / RESTAURANT_DIR)

    def list_customer_profiles(self, restaurant_id: str) -> List[Dict[str, Any]]:
        """An unknown restaurant simply has no customer profiles."""
        restaurant_id = _safe_id(restaurant_id, "restaurant id")
        return _list_dir(self.root / CUSTOMER_DIR / restaurant_id)

    def load_restaurant_profile(self, profile_id: str) -> Dict[str, Any]:
        path = self.root / RESTAURANT_DIR / f"{_safe_id(profile_id, 'profile id')}.json"
        if not path.is_file():
            raise NotFoundError(
                "Restaurant profile not found", entity="restaurant_profile", entity_id=profile_id
            )
        return _read_profile(path)

    def load_customer_profile(self, restaurant_id: str, profile_id: str) -> Dict[str, Any]:
        path = (
            self.root
            / CUSTOMER_DIR
            / _safe_id(restaurant_id, "restaurant id")
            / f"{_safe_id(profile_id, 'profile id')}.json"
        )
        if not path.is_file():
            raise NotFoundError(
                "Customer profile not found", entity="customer_profile", entity_id=profile_id
            )
        return _read_profile(path)
