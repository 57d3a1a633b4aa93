"""Alert Headers - pure builders for the X-<app>-alert / X-<app>-error header convention.

Invariants:
    - Success alerts: X-<app>-alert = "<app>.<entity>.<event>", X-<app>-params = affected id
    - Failure alerts: X-<app>-error = "error.<error_key>", X-<app>-params = entity name
    - Pure functions returning plain dicts (no Response objects, no IO)

Design Decisions:
    - Headers are for client-side notification display only; nothing server-side parses them
"""

from ester.core.domain_types import AlertEvent


def alert_header_name(application_name: str) -> str:
    return f"X-{application_name}-alert"


def error_header_name(application_name: str) -> str:
    return f"X-{application_name}-error"


def params_header_name(application_name: str) -> str:
    return f"X-{application_name}-params"


def create_alert(application_name: str, message: str, param: str) -> dict[str, str]:
    """Build a raw alert header pair."""
    return {
        alert_header_name(application_name): message,
        params_header_name(application_name): param,
    }


def create_entity_alert(
    application_name: str, entity_name: str, event: AlertEvent, param: str,
) -> dict[str, str]:
    """Build the alert for a created/updated/deleted entity."""
    return create_alert(
        application_name, f"{application_name}.{entity_name}.{event.value}", param,
    )


def create_entity_creation_alert(
    application_name: str, entity_name: str, param: str,
) -> dict[str, str]:
    return create_entity_alert(application_name, entity_name, AlertEvent.CREATED, param)


def create_entity_update_alert(
    application_name: str, entity_name: str, param: str,
) -> dict[str, str]:
    return create_entity_alert(application_name, entity_name, AlertEvent.UPDATED, param)


def create_entity_deletion_alert(
    application_name: str, entity_name: str, param: str,
) -> dict[str, str]:
    return create_entity_alert(application_name, entity_name, AlertEvent.DELETED, param)


def create_failure_alert(
    application_name: str, entity_name: str, error_key: str,
) -> dict[str, str]:
    """Build the failure alert shown when a request is rejected."""
    return {
        error_header_name(application_name): f"error.{error_key}",
        params_header_name(application_name): entity_name,
    }


def exposed_header_names(application_name: str) -> list[str]:
    """Headers the browser must be allowed to read through CORS."""
    return [
        alert_header_name(application_name),
        error_header_name(application_name),
        params_header_name(application_name),
        "X-Total-Count",
        "Link",
        "Location",
    ]
