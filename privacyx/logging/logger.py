"""
Logger Implementation
=====================

structlog on top of stdlib logging for the SDK:
- JSON lines or Rich console output
- Redaction of key material and RPC credentials
- contextvars binding (chain id, pass name, ...)

The SDK never configures logging on import. Call `setup_logging()` once
from the host application, or route the `privacyx` stdlib logger yourself.

Version: 0.1.0
"""

import datetime
import logging
import re
import sys
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit, urlunsplit

import structlog
from structlog.types import EventDict, Processor


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


SDK_LOGGER_NAME = "privacyx"

REDACTED = "***REDACTED***"

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "api_key",
        "secret",
        "token",
        "authorization",
        "private_key",
        "mnemonic",
    }
)

# Hosted RPC endpoints carry the API key in the last path segment
_URL_KEY_SEGMENT = re.compile(r"/(v\d+|[a-z0-9_-]*key)/[A-Za-z0-9_-]{16,}$", re.IGNORECASE)


def _add_sdk_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the SDK name and version."""
    event_dict.setdefault("sdk", SDK_LOGGER_NAME)
    event_dict.setdefault("sdk_version", "0.1.0")
    return event_dict


def _add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.datetime.now(datetime.UTC).isoformat()
    return event_dict


def redact_url(url: str) -> str:
    """Strip userinfo and path-embedded API keys from an RPC URL."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url

    netloc = parts.netloc.rsplit("@", 1)[-1]
    path = _URL_KEY_SEGMENT.sub(lambda m: f"/{m.group(1)}/{REDACTED}", parts.path)
    query = REDACTED if parts.query else ""
    return urlunsplit((parts.scheme, netloc, path, query, ""))


def _censor(value: Any, key: str = "") -> Any:
    if key and any(s in key.lower() for s in SENSITIVE_KEYS):
        return REDACTED
    if isinstance(value, dict):
        return {k: _censor(v, str(k)) for k, v in value.items()}
    if isinstance(value, str) and "://" in value:
        return redact_url(value)
    return value


def _censor_secrets(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Redact secret-looking keys (recursively) and RPC URL credentials."""
    return {key: _censor(value, key) for key, value in event_dict.items()}


# Runs on the emitting side, before the record reaches stdlib logging
_EVENT_CHAIN: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    _add_timestamp,
    _add_sdk_context,
    _censor_secrets,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# Without a host configuration SDK records are dropped, never printed
logging.getLogger(SDK_LOGGER_NAME).addHandler(logging.NullHandler())


def _renderers(json_logs: bool) -> list[Processor]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(
                show_locals=False,
                max_frames=10,
            ),
        )
    ]


def setup_logging(
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> None:
    """
    Attach a rendering handler to the `privacyx` stdlib logger.

    Global structlog configuration is left to the host application.

    Args:
        log_level: Level name; defaults to `settings.log_level`
        json_logs: JSON output; defaults to `settings.json_logs`
    """
    from privacyx.config import settings

    level_name = (log_level or settings.log_level.value).upper()
    use_json = settings.json_logs if json_logs is None else json_logs

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_EVENT_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(use_json),
            ],
        )
    )

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    sdk_logger.handlers.clear()
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(getattr(logging, level_name))
    sdk_logger.propagate = False

    # web3 logs every JSON-RPC request at DEBUG
    for noisy_logger in ["web3", "urllib3", "aiohttp"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> "BoundLogger":
    """
    Get a structured logger emitting through stdlib logging.

    The logger ignores the global structlog configuration: events are
    handed to the stdlib logger `name` and rendered by whatever handler
    `setup_logging()` or the host attached.

    Example:
        logger = get_logger(__name__)
        logger.info("proof_submitted", pass_name="IdentityPass", tx_hash="0x...")
    """
    return structlog.wrap_logger(
        logging.getLogger(name or SDK_LOGGER_NAME),
        processors=[
            structlog.stdlib.filter_by_level,
            *_EVENT_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def bind_context(**kwargs: Any) -> None:
    """
    Bind values to every log entry of the current async context.

    Example:
        bind_context(chain_id=1, pass_name="BalancePass")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
