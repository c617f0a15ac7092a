import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten(detail):
    """Collapse DRF error detail (str / list / dict) into one message."""
    if isinstance(detail, dict):
        if "detail" in detail and len(detail) == 1:
            return _flatten(detail["detail"])
        parts = []
        for field, value in detail.items():
            message = _flatten(value)
            parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return "; ".join(_flatten(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF's handler wrapped into the API envelope:
    {"success": false, "error": "<message>"}.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if response.status_code >= 500:
        logger.error("API error in %s: %s", context.get("view").__class__.__name__, exc)

    response.data = {"success": False, "error": _flatten(response.data)}
    return response
