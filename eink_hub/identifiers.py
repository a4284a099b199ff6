"""
Generation of friendly IDs and API keys.
"""

import secrets
import string
import uuid

FRIENDLY_ID_LENGTH = 6
API_KEY_LENGTH = 22
API_KEY_ALPHABET = string.ascii_letters + string.digits


class IdentifierSource:
    """
    Source of new device identifiers.

    Swap in a subclass to get deterministic values in tests.
    """

    def friendly_id(self) -> str:
        """First 6 hex characters of a random UUID, uppercased."""
        return uuid.uuid4().hex[:FRIENDLY_ID_LENGTH].upper()

    def api_key(self) -> str:
        """22 characters drawn uniformly from [A-Za-z0-9]."""
        return "".join(secrets.choice(API_KEY_ALPHABET) for _ in range(API_KEY_LENGTH))
