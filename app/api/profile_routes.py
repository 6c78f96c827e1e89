"""REPLYDESK — Profile Library Routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.api.dependencies import get_profile_library, to_http_exception
from app.core.errors import ReplyDeskError
from app.models.facts import CamelModel
from app.services.profiles import ProfileLibrary

router = APIRouter(prefix="/api", tags=["Profiles"])


class LoadRestaurantProfileRequest(CamelModel):
    profile_id: str


class LoadCustomerProfileRequest(CamelModel):
    restaurant_id: str
    profile_id: str


@router.get("/restaurant-profiles")
async def list_restaurant_profiles(
    library: ProfileLibrary = Depends(get_profile_library),
) -> List[Dict[str, Any]]:
    try:
        return library.list_restaurant_profiles()
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.get("/customer-profiles/{restaurant_id}")
async def list_customer_profiles(
    restaurant_id: str,
    library: ProfileLibrary = Depends(get_profile_library),
) -> List[Dict[str, Any]]:
    try:
        return library.list_customer_profiles(restaurant_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.post("/load-restaurant-profile")
async def load_restaurant_profile(
    request: LoadRestaurantProfileRequest,
    library: ProfileLibrary = Depends(get_profile_library),
) -> Dict[str, Any]:
    try:
        return library.load_restaurant_profile(request.profile_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)


@router.post("/load-customer-profile")
async def load_customer_profile(
    request: LoadCustomerProfileRequest,
    library: ProfileLibrary = Depends(get_profile_library),
) -> Dict[str, Any]:
    try:
        return library.load_customer_profile(request.restaurant_id, request.profile_id)
    except ReplyDeskError as e:
        raise to_http_exception(e)
