import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Ledger
    MAX_BALANCE = data.get("MAX_BALANCE", None)  # None = unbounded

    # Visitor identity cookie
    IDENTITY_TOKEN_NAME = data.get("IDENTITY_TOKEN_NAME", "__monetizer")
    IDENTITY_TOKEN_OPTIONS = data.get("IDENTITY_TOKEN_OPTIONS", {})

    # Payment receiver
    RECEIVER_ENDPOINT_PATTERN = data.get("RECEIVER_ENDPOINT_PATTERN", "/__monetizer/{payer_id}")
    BALANCE_ENDPOINT = data.get("BALANCE_ENDPOINT", "/__monetizer/balance")
    PAYMENT_RECEIVER_ADDRESS = data.get("PAYMENT_RECEIVER_ADDRESS", "private.monetizer")
    PAYMENT_RECEIVER_AUTOCONNECT = bool(data.get("PAYMENT_RECEIVER_AUTOCONNECT", True))
    PAYMENT_RECEIVER_RETRY_SECONDS = data.get("PAYMENT_RECEIVER_RETRY_SECONDS", 5)

    # Gated resources
    AWAIT_BALANCE_TIMEOUT_SECONDS = data.get("AWAIT_BALANCE_TIMEOUT_SECONDS", None)  # None = wait forever
    DISCONNECT_POLL_INTERVAL_SECONDS = data.get("DISCONNECT_POLL_INTERVAL_SECONDS", 1.0)
