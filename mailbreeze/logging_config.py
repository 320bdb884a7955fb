import structlog
from logging import getLevelName

SENSITIVE_KEYS = frozenset({"api_key", "authorization", "token", "secret"})
REDACTED = "[REDACTED]"


def redact_secrets(logger, method_name, event_dict):
    """structlog processor that masks credentials passed as log fields"""
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def configure_structlog(log_level="WARNING"):
    """Configure structlog if it has not been configured by the user"""
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                redact_secrets,
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.make_filtering_bound_logger(getLevelName(log_level))
        )
