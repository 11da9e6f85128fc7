from __future__ import annotations

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.services.resource_service import ResourceError, ResourceNotFoundError, ResourceService

router = APIRouter(tags=["resources"])


def _get_service(request: Request) -> ResourceService:
    svc = getattr(getattr(request.app, "state", None), "resources", None)
    if not svc:
        raise RuntimeError("ResourceService nao configurado")
    return svc


def _reject_constant(name: str):
    # NaN/Infinity nao sao JSON valido e quebrariam o db.json
    raise ValueError(f"Invalid JSON constant {name}")


async def _read_body(request: Request) -> dict:
    """Parse the request body as a JSON object; an empty body counts as {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise ResourceError("Request body is not valid JSON.", "malformed_body", 400)
    if not isinstance(body, dict):
        raise ResourceError("Request body must be a JSON object.", "invalid_body", 400)
    return body


@router.get("/db")
async def read_db(request: Request):
    return _get_service(request).dump()


@router.get("/{name}")
async def read_resource(name: str, request: Request):
    return _get_service(request).read(name)


@router.post("/{name}", status_code=201)
async def create_resource(name: str, request: Request):
    svc = _get_service(request)
    body = await _read_body(request)
    if svc.is_singular(name):
        return svc.write_singular(name, body)
    return svc.create(name, body)


@router.put("/{name}")
async def replace_singular(name: str, request: Request):
    svc = _get_service(request)
    if not svc.is_singular(name):
        raise ResourceNotFoundError(f"Resource '{name}' not found")
    return svc.write_singular(name, await _read_body(request))


@router.patch("/{name}")
async def patch_singular(name: str, request: Request):
    svc = _get_service(request)
    if not svc.is_singular(name):
        raise ResourceNotFoundError(f"Resource '{name}' not found")
    return svc.write_singular(name, await _read_body(request), merge=True)


@router.get("/{name}/{item_id}")
async def read_record(name: str, item_id: str, request: Request):
    return _get_service(request).get(name, item_id)


@router.put("/{name}/{item_id}")
async def replace_record(name: str, item_id: str, request: Request):
    svc = _get_service(request)
    body = await _read_body(request)
    return svc.replace(name, item_id, body)


@router.patch("/{name}/{item_id}")
async def patch_record(name: str, item_id: str, request: Request):
    svc = _get_service(request)
    body = await _read_body(request)
    return svc.patch(name, item_id, body)


@router.delete("/{name}/{item_id}")
async def delete_record(name: str, item_id: str, request: Request):
    _get_service(request).delete(name, item_id)
    return JSONResponse({})
