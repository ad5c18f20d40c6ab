"""
Base class for job board connectors.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from jobpilot.app.core.exceptions import ConnectorNotConfiguredError
from jobpilot.app.core.logging_config import get_logger


class BaseJobConnector(ABC):
    """Abstract base class for job board connectors."""

    name: str = ""
    source: str = ""

    def __init__(self, app_id: Optional[str] = None, api_key: Optional[str] = None, user_id: Optional[int] = None):
        self.app_id = (app_id or "").strip()
        self.api_key = (api_key or "").strip()
        self.user_id = user_id
        self.logger = get_logger(f"services.job_connectors.{self.source or self.__class__.__name__}")

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the credentials needed to call the board are present."""

    @abstractmethod
    def search_jobs(
        self,
        query: str,
        location: Optional[str] = None,
        salary_min: Optional[int] = None,
        salary_max: Optional[int] = None,
        employment_type: Optional[str] = None,
        page: int = 1,
        results_per_page: int = 20,
    ) -> dict[str, Any]:
        """
        Search for jobs matching the criteria.

        Returns:
            {"jobs": [JobResult dict, ...], "totalCount": int}
        """

    @abstractmethod
    def get_job_details(self, external_id: str) -> Optional[dict[str, Any]]:
        """Single normalized job, or None when the board does not know the id."""

    @abstractmethod
    def get_categories(self) -> list[dict[str, str]]:
        """[{"tag": ..., "label": ...}] offered by the board."""

    @abstractmethod
    def test_connection(self) -> tuple[bool, str]:
        """Make one cheap authenticated call; (success, message)."""

    def validate_config(self) -> None:
        if not self.is_configured():
            raise ConnectorNotConfiguredError(
                f"{self.name} connector is not configured. Missing API credentials."
            )
