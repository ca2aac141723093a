"""
Credential store adapter used by the MCP tools.

Tools ask the adapter for a credential by its logical name ("statuspage")
instead of reading environment variables directly, so that the same tool code
works against the process environment, a ``.env`` file, or an in-memory store
in tests.

Example:
    credentials = CredentialStoreAdapter.from_env()
    credentials.validate_for_tools(["statuspage_list_unresolved_incidents"])
    api_key = credentials.get("statuspage")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping

from dotenv import load_dotenv

from .base import CredentialSpec

logger = logging.getLogger(__name__)


class CredentialError(Exception):
    """Raised when credentials required by a tool are missing."""


class CredentialStoreAdapter:
    """Resolve credentials by name from a backing mapping."""

    def __init__(
        self,
        specs: Mapping[str, CredentialSpec],
        values: Mapping[str, str] | None = None,
        use_environment: bool = True,
    ):
        self._specs = dict(specs)
        self._values = dict(values or {})
        self._use_environment = use_environment

    @classmethod
    def from_env(
        cls,
        specs: Mapping[str, CredentialSpec] | None = None,
        dotenv_path: str | None = None,
    ) -> CredentialStoreAdapter:
        """Build an adapter backed by the process environment (and a .env file)."""
        from . import CREDENTIAL_SPECS

        load_dotenv(dotenv_path)
        return cls(specs if specs is not None else CREDENTIAL_SPECS)

    @classmethod
    def for_testing(
        cls,
        values: Mapping[str, str],
        specs: Mapping[str, CredentialSpec] | None = None,
    ) -> CredentialStoreAdapter:
        """Build an in-memory adapter that ignores the environment."""
        from . import CREDENTIAL_SPECS

        return cls(
            specs if specs is not None else CREDENTIAL_SPECS,
            values=values,
            use_environment=False,
        )

    @property
    def specs(self) -> dict[str, CredentialSpec]:
        return dict(self._specs)

    def get(self, name: str) -> str | None:
        """Return the credential value, or None when it is not configured."""
        value = self._values.get(name)
        if value:
            return value
        if not self._use_environment:
            return None
        spec = self._specs.get(name)
        if spec is None:
            return None
        return os.getenv(spec.env_var) or None

    def is_available(self, name: str) -> bool:
        return self.get(name) is not None

    def get_missing_for_tools(self, tool_names: Iterable[str]) -> list[tuple[str, CredentialSpec]]:
        """List required credentials that back any of the given tools but are unset."""
        wanted = set(tool_names)
        missing = []
        for name, spec in self._specs.items():
            if not spec.required or not wanted.intersection(spec.tools):
                continue
            if not self.is_available(name):
                missing.append((name, spec))
        return missing

    def validate_for_tools(self, tool_names: Iterable[str]) -> None:
        """Raise CredentialError when a required credential for the tools is missing."""
        missing = self.get_missing_for_tools(tool_names)
        if not missing:
            return
        lines = ["Missing credentials:"]
        for name, spec in missing:
            entry = f"  {spec.env_var} for {name}"
            if spec.description:
                entry += f" ({spec.description})"
            lines.append(entry)
            if spec.help_url:
                lines.append(f"    Get it at: {spec.help_url}")
        logger.warning(f"Credential check failed for {len(missing)} credential(s)")
        raise CredentialError("\n".join(lines))
