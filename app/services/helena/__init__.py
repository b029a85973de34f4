"""Helena CRM integration."""

from .client import HelenaAPIError, HelenaContactsClient

__all__ = ["HelenaAPIError", "HelenaContactsClient"]
