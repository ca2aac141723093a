"""
Credential specifications and the store adapter used by the tools.
"""

from .base import CredentialSpec
from .statuspage import STATUSPAGE_CREDENTIALS
from .store import CredentialError, CredentialStoreAdapter

CREDENTIAL_SPECS: dict[str, CredentialSpec] = {
    **STATUSPAGE_CREDENTIALS,
}

__all__ = [
    "CREDENTIAL_SPECS",
    "STATUSPAGE_CREDENTIALS",
    "CredentialError",
    "CredentialSpec",
    "CredentialStoreAdapter",
]
