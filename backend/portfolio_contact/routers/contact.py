# portfolio_contact/routers/contact.py
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from portfolio_contact.core.mail import MailConfig, TransportFactory
from portfolio_contact.dependencies import get_mail_config, get_transport_factory
from portfolio_contact.lib.contact_relay import (
    FIELDS,
    METHOD_NOT_ALLOWED,
    MISSING_FIELDS,
    parse_submission,
    relay_submission,
)

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api", tags=["contact"])

OTHER_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        log.warning("[contact] request body is not valid JSON; treating it as empty")
        return {}


@router.post("/contact")
async def contact(
    request: Request,
    config: MailConfig = Depends(get_mail_config),
    make_transport: TransportFactory = Depends(get_transport_factory),
):
    payload = await _read_json(request)
    shown = {k: payload.get(k) for k in FIELDS} if isinstance(payload, dict) else payload
    log.info(f"[contact] request body: {shown!r}")

    sub = parse_submission(payload)
    if sub is None:
        log.info("[contact] validation failed: missing fields")
        return JSONResponse(status_code=400, content=MISSING_FIELDS)

    # fresh session per request; smtplib blocks, so keep it off the event loop
    transport = make_transport(config)
    try:
        outcome = await run_in_threadpool(relay_submission, sub, transport, config)
    finally:
        await run_in_threadpool(transport.close)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)


@router.api_route("/contact", methods=OTHER_METHODS, include_in_schema=False)
async def contact_wrong_method(request: Request):
    log.info(f"[contact] non-POST request to /api/contact ({request.method})")
    return JSONResponse(status_code=405, content=METHOD_NOT_ALLOWED, headers={"Allow": "POST"})
