"""
Connector catalogue for a user: which boards exist, which are usable, and
the configured connector instances themselves.
"""
from typing import Any, Optional

from jobpilot.app.core.config import settings
from jobpilot.app.core.exceptions import ConnectorNotConfiguredError

from .adzuna import AdzunaConnector
from .base import BaseJobConnector

# Boards without a usable public API are listed so the UI can show them, never configured
CONNECTOR_CATALOGUE: list[dict[str, Any]] = [
    {
        "type": "adzuna",
        "name": "Adzuna",
        "description": "Global job search engine aggregating positions from hundreds of job boards",
        "requiresCredentials": [
            {"field": "adzunaAppId", "label": "App ID"},
            {"field": "adzunaApiKey", "label": "API Key"},
        ],
    },
    {
        "type": "indeed",
        "name": "Indeed",
        "description": "World's largest job search engine (API access requires partnership)",
        "requiresCredentials": [{"field": "indeedApiKey", "label": "Publisher API Key"}],
    },
    {
        "type": "glassdoor",
        "name": "Glassdoor",
        "description": "Company reviews and salary data (API discontinued in 2018)",
        "requiresCredentials": [{"field": "glassdoorApiKey", "label": "API Key (Legacy)"}],
    },
    {
        "type": "greenhouse",
        "name": "Greenhouse",
        "description": "ATS platform with job board API for approved partners",
        "requiresCredentials": [{"field": "greenhouseApiKey", "label": "Job Board API Key"}],
    },
    {
        "type": "ziprecruiter",
        "name": "ZipRecruiter",
        "description": "Job distribution platform with partner API access",
        "requiresCredentials": [{"field": "ziprecruiterApiKey", "label": "Jobs API Key"}],
    },
]


class ConnectorManager:
    """Builds connectors from the user's stored credentials, falling back to app settings."""

    def __init__(self, user: Any):
        self.user = user
        self.user_id: Optional[int] = getattr(user, "id", None)
        self._connectors: dict[str, BaseJobConnector] = {
            "adzuna": self._build_adzuna(),
        }

    def _build_adzuna(self) -> AdzunaConnector:
        user_app_id = (getattr(self.user, "adzuna_app_id", None) or "").strip()
        user_key = (getattr(self.user, "adzuna_api_key", None) or "").strip()
        # Use the user's pair only when complete; never mix user and app credentials
        if user_app_id and user_key:
            app_id, api_key = user_app_id, user_key
        else:
            app_id, api_key = settings.adzuna_app_id, settings.adzuna_api_key
        return AdzunaConnector(
            app_id=app_id,
            api_key=api_key,
            country=settings.adzuna_country,
            user_id=self.user_id,
        )

    def get_available_connectors(self) -> list[dict[str, Any]]:
        out = []
        for entry in CONNECTOR_CATALOGUE:
            connector = self._connectors.get(entry["type"])
            out.append({**entry, "isConfigured": bool(connector and connector.is_configured())})
        return out

    def get(self, kind: str) -> BaseJobConnector | None:
        """Connector of the given kind whether configured or not."""
        return self._connectors.get(kind)

    def get_connector(self, kind: str = "adzuna") -> BaseJobConnector:
        """Configured connector of the given kind; raises ConnectorNotConfiguredError otherwise."""
        connector = self._connectors.get(kind)
        if connector is None:
            raise ConnectorNotConfiguredError(f"{kind} connector is not available")
        connector.validate_config()
        return connector
