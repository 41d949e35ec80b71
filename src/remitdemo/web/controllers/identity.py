"""Moldova identity proxy endpoints.

Each endpoint forwards the JSON body upstream and relays the upstream
status and body verbatim (or a canned response in mock mode).
"""

import logging
from typing import Any, Awaitable

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from remitdemo.identity.base import UpstreamResponse, UpstreamUnavailableError
from remitdemo.identity.factory import get_identity_proxy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moldova/identity", tags=["identity"])

CHECK_ALLOWED_METHODS = ["POST", "OPTIONS"]
CHECK_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "content-type, x-api-key",
    "Access-Control-Allow-Methods": ", ".join(CHECK_ALLOWED_METHODS),
    "Allow": ", ".join(CHECK_ALLOWED_METHODS),
}


async def read_json(request: Request) -> Any:
    """Request body as JSON; an empty or malformed body reads as {}."""
    try:
        return await request.json()
    except ValueError:
        return {}


def relay(upstream: UpstreamResponse) -> JSONResponse:
    """Turn an upstream response into the proxy's HTTP response."""
    response = JSONResponse(content=upstream.body, status_code=upstream.status_code)
    if upstream.upstream_url:
        response.headers["x-upstream-url"] = upstream.upstream_url
    return response


async def forward(call: Awaitable[UpstreamResponse]) -> JSONResponse:
    """Await a proxy call, mapping transport failures to 502."""
    try:
        return relay(await call)
    except UpstreamUnavailableError as e:
        logger.error(f"Identity upstream unavailable: {e}")
        return JSONResponse(content={"error": "upstream unavailable"}, status_code=502)


def _as_dict(body: Any) -> dict:
    return body if isinstance(body, dict) else {}


@router.post("")
async def register_identity(request: Request) -> JSONResponse:
    """Register a face: forwards {id, image} to POST /identity."""
    body = _as_dict(await read_json(request))
    return await forward(get_identity_proxy().register(body))


@router.options("/check")
async def check_identity_preflight() -> Response:
    """CORS preflight for the verification endpoint."""
    return Response(status_code=204, headers=CHECK_CORS_HEADERS)


@router.post("/check")
async def check_identity(request: Request) -> JSONResponse:
    """Verify a face: forwards {image} to POST /identity/check."""
    body = _as_dict(await read_json(request))
    response = await forward(get_identity_proxy().check(body))
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@router.put("/{identity_id}")
async def confirm_identity(identity_id: str, request: Request) -> JSONResponse:
    """Confirm the aligned face for a registered identity."""
    body = _as_dict(await read_json(request))
    return await forward(get_identity_proxy().confirm(identity_id, body.get("image")))


@router.delete("/{identity_id}")
async def delete_identity(identity_id: str) -> JSONResponse:
    """Remove a registered identity."""
    return await forward(get_identity_proxy().delete(identity_id))
