"""
Adzuna job search API.

Adzuna aggregates postings from hundreds of job boards. Every call needs an
app_id + app_key pair (https://developer.adzuna.com).
"""
from typing import Any, Optional
from urllib.parse import quote

import requests

from jobpilot.app.core.config import settings
from jobpilot.app.core.exceptions import ConnectorError, NetworkError
from jobpilot.app.services.api_logger import log_api_call

from .base import BaseJobConnector

ADZUNA_SERVICE = "Adzuna"

# Adzuna takes one boolean flag per contract kind instead of a single field
EMPLOYMENT_TYPE_FLAGS = {
    "full_time": "full_time",
    "fulltime": "full_time",
    "part_time": "part_time",
    "parttime": "part_time",
    "contract": "contract",
    "permanent": "permanent",
}

_ERROR_BODY_FIELDS = ("error", "message", "exception", "display")


def encode_query(params: dict[str, Any]) -> str:
    """Percent-encode every value (space -> %20, + -> %2B, & -> %26, , -> %2C)."""
    return "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params.items())


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for field in _ERROR_BODY_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f"HTTP {response.status_code}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _salary(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _display_name(value: Any) -> str:
    if isinstance(value, dict):
        return _text(value.get("display_name"))
    return ""


def normalize_job(raw: dict[str, Any]) -> dict[str, Any]:
    """Adzuna result -> JobResult shape. Missing strings become "", missing salary None."""
    return {
        "id": _text(raw.get("id")),
        "title": _text(raw.get("title")),
        "company": _display_name(raw.get("company")),
        "description": _text(raw.get("description")),
        "location": _display_name(raw.get("location")),
        "salaryMin": _salary(raw.get("salary_min")),
        "salaryMax": _salary(raw.get("salary_max")),
        "employmentType": _text(raw.get("contract_type")),
        "datePosted": _text(raw.get("created")),
        "url": _text(raw.get("redirect_url")),
        "source": "adzuna",
    }


class AdzunaConnector(BaseJobConnector):
    """Adzuna job search connector."""

    name = "Adzuna"
    source = "adzuna"

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        country: str = "us",
        user_id: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(app_id=app_id, api_key=api_key, user_id=user_id)
        self.country = (country or "us").lower()
        self.base_url = (base_url or settings.adzuna_base_url).rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.app_id and self.api_key)

    def _auth_params(self) -> dict[str, str]:
        return {"app_id": self.app_id, "app_key": self.api_key}

    def _get(self, path: str, params: dict[str, Any], network_error: str) -> requests.Response:
        url = f"{self.base_url}/{self.country}/{path}?{encode_query(params)}"
        masked = {**params, "app_key": "***"}
        log_url = f"{self.base_url}/{self.country}/{path}?{encode_query(masked)}"
        try:
            return log_api_call(
                ADZUNA_SERVICE,
                url,
                "GET",
                request_data=masked,
                user_id=self.user_id,
                log_endpoint=log_url,
            )
        except requests.RequestException as e:
            self.logger.warning("Adzuna unreachable path=%s error=%s", path, e)
            raise NetworkError(network_error) from e

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise ConnectorError("Adzuna API error: invalid JSON response", response.status_code) from e
        return data if isinstance(data, dict) else {}

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
        self.validate_config()
        page = max(int(page or 1), 1)
        per_page = min(max(int(results_per_page or 20), 1), settings.adzuna_max_results_per_page)

        params: dict[str, Any] = {**self._auth_params(), "results_per_page": per_page}
        if query and query.strip():
            params["what"] = query.strip()
        if location and location.strip():
            params["where"] = location.strip()
        if salary_min:
            params["salary_min"] = int(salary_min)
        if salary_max:
            params["salary_max"] = int(salary_max)
        if employment_type:
            flag = EMPLOYMENT_TYPE_FLAGS.get(employment_type.strip().lower().replace("-", "_").replace(" ", "_"))
            if flag:
                params[flag] = 1

        response = self._get(f"search/{page}", params, "Network error while searching jobs")
        if not response.ok:
            raise ConnectorError(f"Adzuna API error: {_error_detail(response)}", response.status_code)

        data = self._json(response)
        results = data.get("results")
        jobs = [normalize_job(r) for r in results if isinstance(r, dict)] if isinstance(results, list) else []
        total = data.get("count")
        total_count = total if isinstance(total, int) and not isinstance(total, bool) else len(jobs)
        self.logger.info(
            "Adzuna search user_id=%s page=%d per_page=%d jobs=%d total=%d",
            self.user_id, page, per_page, len(jobs), total_count,
        )
        return {"jobs": jobs, "totalCount": total_count}

    def get_job_details(self, external_id: str) -> Optional[dict[str, Any]]:
        self.validate_config()
        response = self._get(
            f"details/{quote(str(external_id), safe='')}",
            self._auth_params(),
            "Network error while fetching job details",
        )
        if response.status_code == 404:
            return None
        if not response.ok:
            raise ConnectorError(f"Adzuna API error: {_error_detail(response)}", response.status_code)
        data = self._json(response)
        return normalize_job(data) if data else None

    def get_categories(self) -> list[dict[str, str]]:
        self.validate_config()
        response = self._get("categories", self._auth_params(), "Network error while fetching categories")
        if not response.ok:
            raise ConnectorError(f"Failed to fetch categories: {_error_detail(response)}", response.status_code)
        results = self._json(response).get("results")
        if not isinstance(results, list):
            return []
        return [
            {"tag": _text(c.get("tag")), "label": _text(c.get("label"))}
            for c in results
            if isinstance(c, dict) and c.get("tag")
        ]

    def test_connection(self) -> tuple[bool, str]:
        if not self.is_configured():
            return False, "Adzuna App ID and API Key are required"
        try:
            self.search_jobs("developer", results_per_page=1)
        except (ConnectorError, NetworkError) as e:
            return False, e.message
        return True, "Adzuna connection successful"
