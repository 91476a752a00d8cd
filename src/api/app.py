"""FastAPI application factory"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error import ClientError, client_error_handler
from src.api.middleware import identity_middleware, log_requests
from src.api.routes.monetization import create_monetization_router
from src.app.services.monetizer import Monetizer
from src.depends import create_monetizer
from src.worker.payment_receiver import PaymentReceiverWorker


def create_app(config, monetizer: Optional[Monetizer] = None) -> FastAPI:
    """
    Build the application

    Args:
        config: ApplicationConfig (or any object with the same attributes)
        monetizer: Pre-built components; built from config when omitted
    """
    logging.basicConfig(level=config.LOG_LEVEL)

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    monetizer = monetizer or create_monetizer(config)
    options = monetizer.options
    if "{payer_id}" not in options.receiver_endpoint_pattern:
        raise ValueError(
            f"RECEIVER_ENDPOINT_PATTERN must contain {{payer_id}}: {options.receiver_endpoint_pattern}"
        )
    timeout = options.await_balance_timeout_seconds
    if timeout is not None and timeout <= 0:
        raise ValueError(f"AWAIT_BALANCE_TIMEOUT_SECONDS must be positive or unset: {timeout}")
    if options.disconnect_poll_interval_seconds <= 0:
        raise ValueError(
            f"DISCONNECT_POLL_INTERVAL_SECONDS must be positive: {options.disconnect_poll_interval_seconds}"
        )

    worker = PaymentReceiverWorker(monetizer.receiver, config.PAYMENT_RECEIVER_RETRY_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        connect_task = None
        if config.PAYMENT_RECEIVER_AUTOCONNECT:
            connect_task = asyncio.create_task(worker.run_forever())
        yield
        if connect_task is not None:
            connect_task.cancel()
            with suppress(asyncio.CancelledError):
                await connect_task
        await worker.shutdown()

    app = FastAPI(title="Monetizer", lifespan=lifespan)
    app.state.monetizer = monetizer

    app.middleware("http")(
        identity_middleware(options.identity_token_name, options.identity_token_options)
    )
    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ClientError, client_error_handler)
    app.include_router(
        create_monetization_router(options.receiver_endpoint_pattern, options.balance_endpoint)
    )

    return app
