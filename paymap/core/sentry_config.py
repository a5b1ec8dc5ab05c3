# paymap/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Only the logging integration is enabled: the engine has no web layer, so
errors reach Sentry either as ERROR log records or through
capture_exception() from the pipeline.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)

#: Context keys whose values may identify an employee.
SENSITIVE_CONTEXT_KEYS = ("employee", "employee_id", "name")


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not is_production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    logging_integration = LoggingIntegration(
        level=logging.INFO,  # Breadcrumbs from INFO and above
        event_level=logging.ERROR,  # Send errors and above as events
    )

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[logging_integration],
        sample_rate=1.0,
        release=os.getenv("RELEASE_VERSION", "paymap@0.1.0"),
        environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
        send_default_pii=False,
        attach_stacktrace=True,
        before_send=before_send_hook,
    )

    logger.info("Sentry initialized (environment: %s)", os.getenv("SENTRY_ENVIRONMENT", "production"))
    return True


def before_send_hook(event, hint):
    """
    Filter employee-identifying context before sending to Sentry.

    Args:
        event: Sentry event data
        hint: Additional context

    Returns:
        Modified event
    """
    contexts = event.get("contexts") or {}
    for context in contexts.values():
        if not isinstance(context, dict):
            continue
        for key in SENSITIVE_CONTEXT_KEYS:
            if key in context:
                context[key] = "[Filtered]"
    return event


def capture_exception(error: Exception, context: dict | None = None) -> None:
    """
    Capture an exception to Sentry with additional context.

    Args:
        error: Exception to capture
        context: Additional context sections (name -> dict)
    """
    if context:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_context(key, value)
            sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_exception(error)


def add_breadcrumb(message: str, category: str = "paymap", level: str = "info", data: dict | None = None) -> None:
    """
    Add a breadcrumb for debugging.

    Args:
        message: Breadcrumb message
        category: Category
        level: Severity level
        data: Additional data
    """
    sentry_sdk.add_breadcrumb(message=message, category=category, level=level, data=data or {})
