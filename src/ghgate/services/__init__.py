"""Services module for ghgate."""

from ghgate.services.connect import get_credential_gate
from ghgate.services.queries import (
    repository_description_message,
    viewer_email_message,
    viewer_name_message,
)

__all__ = [
    "get_credential_gate",
    "repository_description_message",
    "viewer_email_message",
    "viewer_name_message",
]
