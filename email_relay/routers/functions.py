"""
HTTP routes for the relay functions.

POST /send and POST /host-email-image are the primary endpoints. The
/.netlify/functions/{name} route accepts any verb so existing clients of the
serverless deployment keep working.

A wrong verb is answered before settings are loaded or the body is read.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from email_relay.config import Settings, get_settings
from email_relay.core.exceptions import MethodNotAllowedError
from email_relay.core.logging import get_logger
from email_relay.core.models import HandlerResult, InvocationEvent
from email_relay.handlers import BaseHandler, get_handler_class

log = get_logger(__name__)

router = APIRouter()

FUNCTION_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

SettingsLoader = Callable[[], Settings]


def get_settings_loader() -> SettingsLoader:
    """Dependency: how to load settings, called only once a request is accepted."""
    return get_settings


def to_response(result: HandlerResult) -> Response:
    """Serialize a handler envelope as the HTTP response."""
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type="application/json",
    )


async def read_body(request: Request, limit: int) -> bytes | None:
    """
    Read the request body, stopping once it exceeds limit.

    Returns None when the body (declared or actual) is over the limit.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return None

    body = bytearray()
    async for chunk in request.stream():
        body += chunk
        if len(body) > limit:
            return None
    return bytes(body)


async def dispatch(name: str, request: Request, load_settings: SettingsLoader) -> Response:
    """Check the verb, read the body, invoke the named handler and return its envelope."""
    handler_class = get_handler_class(name)
    if handler_class is None:
        return JSONResponse(status_code=404, content={"error": f"Unknown function: {name}"})

    try:
        BaseHandler.check_method(request.method)
    except MethodNotAllowedError as e:
        log.info("method_not_allowed", function=name, method=e.method)
        return to_response(HandlerResult.error(e.status_code, str(e)))

    settings = load_settings()
    raw = await read_body(request, settings.max_body_bytes)
    if raw is None:
        log.warning("request_body_too_large", function=name, limit=settings.max_body_bytes)
        return JSONResponse(status_code=413, content={"error": "Request body too large"})

    handler = handler_class.from_settings(settings)
    event = InvocationEvent(
        http_method=request.method,
        body=raw.decode("utf-8", errors="replace") if raw else None,
    )
    result = await handler.invoke(event)
    log.info("function_invoked", function=name, status=result.status_code)
    return to_response(result)


@router.post("/send")
async def send_email(request: Request, load_settings: SettingsLoader = Depends(get_settings_loader)):
    """Send an HTML email. Body: {to, subject, html, text?}."""
    return await dispatch("send", request, load_settings)


@router.post("/host-email-image")
async def host_email_image(request: Request, load_settings: SettingsLoader = Depends(get_settings_loader)):
    """Re-host an image. Body: {source_url, filename?, usage?}."""
    return await dispatch("host-email-image", request, load_settings)


@router.api_route("/.netlify/functions/{name}", methods=FUNCTION_METHODS)
async def invoke_function(
    name: str,
    request: Request,
    load_settings: SettingsLoader = Depends(get_settings_loader),
):
    return await dispatch(name, request, load_settings)
