"""
Credential specification shared by every tool package.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CredentialSpec:
    """Describes a single credential a tool needs and where it comes from."""

    env_var: str
    tools: list[str] = field(default_factory=list)
    node_types: list[str] = field(default_factory=list)
    required: bool = True
    startup_required: bool = False
    help_url: str = ""
    description: str = ""

    # Auth method support
    direct_api_key_supported: bool = True
    api_key_instructions: str = ""

    # Health check
    health_check_endpoint: str = ""
    health_check_method: str = "GET"

    # Credential store mapping
    credential_id: str = ""
    credential_key: str = "api_key"
