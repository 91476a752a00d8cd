"""Middleware for the FastAPI application"""

import logging
import time
from typing import Callable
from fastapi import Request, Response
from src.domain.payment_address import generate_payer_id

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_TOKEN_OPTIONS = {
    "httponly": False,
    "samesite": "lax",
}


def identity_middleware(token_name: str, token_options: dict) -> Callable:
    """
    Build middleware that attaches a payer id to every request

    The payer id comes from the identity cookie, or is freshly generated
    for new visitors. The cookie is (re)sent on every response so the
    browser-side payment script can read it; token_options override
    DEFAULT_IDENTITY_TOKEN_OPTIONS and are passed to Response.set_cookie.
    """
    cookie_options = {**DEFAULT_IDENTITY_TOKEN_OPTIONS, **(token_options or {})}

    async def attach_identity(request: Request, call_next: Callable) -> Response:
        payer_id = request.cookies.get(token_name) or generate_payer_id()
        request.state.payer_id = payer_id

        response = await call_next(request)
        response.set_cookie(token_name, payer_id, **cookie_options)
        return response

    return attach_identity


async def log_requests(request: Request, call_next: Callable) -> Response:
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response
