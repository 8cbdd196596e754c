from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..errors import SubmissionError, UnknownPlatformError, UnknownSchemaError
from ..results import error_response
from ..schema import (
    SchemaCatalog,
    SettingsSchema,
    capabilities_for_platform,
    collect_values,
    default_values,
    dump_schema,
    encode_app_message,
    filter_for_device,
    parse_capabilities,
    validate_schema_payload,
)


router = APIRouter(prefix="/api/schemas")
log = logging.getLogger(__name__)
MAX_SCHEMA_BODY_BYTES = 256 * 1024


def _catalog(request: Request) -> SchemaCatalog:
    return request.app.state.catalog


def _resolve(request: Request, name: str, platform: str, capabilities: str) -> SettingsSchema:
    """Catalog lookup, then device filtering when platform/capabilities are given."""
    schema = _catalog(request).get(name)
    if platform:
        return filter_for_device(schema, capabilities_for_platform(platform))
    if capabilities:
        return filter_for_device(schema, parse_capabilities(capabilities))
    return schema


@router.get("")
def list_schemas(request: Request):
    return {"schemas": _catalog(request).names()}


@router.post("/validate")
async def validate_schema(request: Request):
    """Validate a raw settings page posted as JSON."""
    raw = await request.body()
    if len(raw) > MAX_SCHEMA_BODY_BYTES:
        return error_response(f"Schema too large (max {MAX_SCHEMA_BODY_BYTES // 1024} KB)", status_code=413)
    result = validate_schema_payload(raw)
    if not result.ok:
        log.info("Rejected posted schema: %s", result.details)
    return result.to_dict()


@router.get("/{name}")
def get_schema(request: Request, name: str, platform: str = "", capabilities: str = ""):
    try:
        schema = _resolve(request, name, platform, capabilities)
    except (UnknownSchemaError, UnknownPlatformError) as e:
        return error_response("Not found", str(e), status_code=404)
    return JSONResponse(dump_schema(schema))


@router.get("/{name}/defaults")
def get_defaults(request: Request, name: str, platform: str = "", capabilities: str = ""):
    try:
        schema = _resolve(request, name, platform, capabilities)
    except (UnknownSchemaError, UnknownPlatformError) as e:
        return error_response("Not found", str(e), status_code=404)
    return default_values(schema)


@router.post("/{name}/submit")
async def submit(request: Request, name: str, platform: str = "", capabilities: str = ""):
    try:
        schema = _resolve(request, name, platform, capabilities)
    except (UnknownSchemaError, UnknownPlatformError) as e:
        return error_response("Not found", str(e), status_code=404)

    raw = await request.body()
    try:
        edits = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        return error_response("Invalid JSON", str(e))
    if not isinstance(edits, dict):
        return error_response("Submission must be a JSON object of messageKey -> value")

    try:
        values = collect_values(schema, edits)
        message = encode_app_message(schema, values)
    except SubmissionError as e:
        log.info("Rejected submission for %s: %s", name, e)
        return error_response("Invalid submission", str(e))

    return {"values": values, "appMessage": message}
