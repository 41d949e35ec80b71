"""LV Auth proxy endpoints.

Validation failures answer 400 with an {"error": ...} body, the same shape
the upstream uses.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from remitdemo.identity.factory import get_lv_auth_proxy
from remitdemo.web.contracts.identity import (
    LvAuthDeleteRequest,
    LvAuthFindRequest,
    LvAuthRegisterRequest,
)
from remitdemo.web.controllers.identity import forward

router = APIRouter(prefix="/lvauth", tags=["lvauth"])


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=400)


@router.post("/register")
async def register(request: LvAuthRegisterRequest) -> JSONResponse:
    """Register a face with LV Auth."""
    if not request.image:
        return bad_request("missing image")

    user_id = str(request.user_id) if request.user_id is not None else None
    return await forward(get_lv_auth_proxy().register(request.image, user_id, request.name))


@router.post("/find")
async def find(request: LvAuthFindRequest) -> JSONResponse:
    """Look up the identities matching a face."""
    return await forward(get_lv_auth_proxy().find(request.image))


@router.post("/delete")
async def delete(request: LvAuthDeleteRequest) -> JSONResponse:
    """Delete a user from LV Auth."""
    if request.user_id is None or request.user_id == "":
        return bad_request("missing userId")

    return await forward(get_lv_auth_proxy().delete(str(request.user_id)))
