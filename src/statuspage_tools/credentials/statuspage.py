"""
StatusPage.io credential specifications.
"""

from .base import CredentialSpec

STATUSPAGE_TOOLS = [
    "statuspage_patch_component",
    "statuspage_create_incident",
    "statuspage_patch_incident_by_component",
    "statuspage_list_unresolved_incidents",
    "statuspage_add_metric_data_point",
    "statuspage_execute",
]

STATUSPAGE_CREDENTIALS = {
    "statuspage": CredentialSpec(
        env_var="STATUSPAGE_API_KEY",
        tools=STATUSPAGE_TOOLS,
        node_types=["statusPage"],
        required=True,
        startup_required=False,
        help_url="https://support.atlassian.com/statuspage/docs/create-and-manage-api-keys/",
        description="StatusPage.io API key",
        direct_api_key_supported=True,
        api_key_instructions=(
            "To get a StatusPage API key:\n"
            "1. Sign in to manage.statuspage.io\n"
            "2. Open your user menu and choose 'API info'\n"
            "3. Create a new API key and copy it\n"
            "4. Set it as the STATUSPAGE_API_KEY environment variable"
        ),
        health_check_endpoint="https://api.statuspage.io/v1/pages",
        health_check_method="GET",
        credential_id="statuspage",
        credential_key="api_key",
    ),
    "statuspage_url": CredentialSpec(
        env_var="STATUSPAGE_API_URL",
        tools=STATUSPAGE_TOOLS,
        required=False,
        description="Override for the StatusPage API base URL (defaults to https://api.statuspage.io/v1)",
        direct_api_key_supported=False,
        credential_id="statuspage",
        credential_key="base_url",
    ),
}
