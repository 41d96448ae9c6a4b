"""Error handling helpers for catalogue listings."""
from typing import Any, Dict
import logging

from storefront.integrations.response_wrappers import CatalogError, CatalogResponseError, CatalogTransportError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to fetch products"


class ErrorHandler:
    def describe(self, exc: Exception) -> str:
        """User-facing message for a failed catalogue fetch."""
        if isinstance(exc, CatalogTransportError):
            if exc.status_code is not None:
                return f"HTTP error! status: {exc.status_code}" + (f" ({exc})" if str(exc) else "")
            return str(exc) or GENERIC_FAILURE
        if isinstance(exc, CatalogResponseError):
            return f"Invalid catalogue response: {exc}"
        if isinstance(exc, CatalogError):
            return str(exc) or GENERIC_FAILURE
        logger.error("Unhandled exception in catalogue listing: %s", exc, exc_info=exc)
        return str(exc) or GENERIC_FAILURE

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.describe(exc),
            "metadata": {"type": type(exc).__name__, "context": context or {}},
        }
