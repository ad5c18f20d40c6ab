"""
Fetch a job posting page and pull out its description text.

Strategy (in order):
1. JSON-LD <script type="application/ld+json"> with JobPosting schema
   (also yields title, company and location when present)
2. CSS selector matching against known job description containers
3. DOM walk scoring heuristic
The text then goes through the job analyzer like a pasted description.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from jobpilot.app.core.config import MAX_HTML_BYTES, SCRAPER_USER_AGENT
from jobpilot.app.core.exceptions import ConnectorError, NetworkError, ValidationError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.services.api_logger import log_api_call

logger = get_logger("services.job_scraper")

SCRAPER_SERVICE = "JobPage"
MIN_DESCRIPTION_CHARS = 200
MAX_DESCRIPTION_CHARS = 8000

SELECTORS = [
    # Workday
    "[data-automation-id='jobPostingDescription']",
    "[data-automation-id='jobDescription']",
    # Lever / Greenhouse
    ".posting-description",
    "#content .section-wrapper",
    # Generic
    ".job-description",
    "#job-description",
    "#jobDescription",
    "[class*='job-description']",
    "[class*='jobDescription']",
    "[data-testid*='job-description']",
    ".job-details",
    ".job-body",
    "article",
    "main",
]

_POSITIVE = (
    "responsibilities", "requirements", "qualifications", "experience",
    "skills", "about the role", "what you'll do", "you will", "engineer",
    "developer", "manager", "analyst",
)
_NEGATIVE = ("privacy policy", "cookie policy", "sign up", "subscribe", "all rights reserved")
_SKIP_TAGS = {"script", "style", "nav", "footer", "header", "aside", "noscript", "form"}


@dataclass
class ScrapedJobPage:
    url: str
    description: str
    title: str = ""
    company: str = ""
    location: str = ""
    method: str = ""


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").strip())


def _html_to_text(fragment: str) -> str:
    return _normalize(BeautifulSoup(fragment, "html.parser").get_text(separator=" ", strip=True))


def _score_text(text: str) -> int:
    lower = text.lower()
    score = sum(2 for k in _POSITIVE if k in lower)
    score -= sum(3 for k in _NEGATIVE if k in lower)
    return score


def _name_of(value: Any) -> str:
    if isinstance(value, dict):
        return _normalize(str(value.get("name") or ""))
    return _normalize(str(value or ""))


def _location_of(value: Any) -> str:
    if isinstance(value, list):
        value = value[0] if value else None
    if not isinstance(value, dict):
        return ""
    address = value.get("address")
    if isinstance(address, dict):
        parts = [address.get("addressLocality"), address.get("addressRegion"), address.get("addressCountry")]
        return ", ".join(_name_of(p) for p in parts if p)
    return _name_of(value)


def _json_ld_items(soup: BeautifulSoup):
    for script in soup.find_all("script", type="application/ld+json"):
        raw = (script.string or "").strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except ValueError:
            continue
        items = data if isinstance(data, list) else data.get("@graph", [data]) if isinstance(data, dict) else []
        for item in items:
            if isinstance(item, dict):
                yield item


def _from_json_ld(soup: BeautifulSoup, url: str) -> Optional[ScrapedJobPage]:
    for item in _json_ld_items(soup):
        kind = item.get("@type")
        kinds = kind if isinstance(kind, list) else [kind]
        if "JobPosting" not in kinds:
            continue
        text = _html_to_text(str(item.get("description") or ""))
        if len(text) < MIN_DESCRIPTION_CHARS:
            continue
        return ScrapedJobPage(
            url=url,
            description=text[:MAX_DESCRIPTION_CHARS],
            title=_normalize(str(item.get("title") or "")),
            company=_name_of(item.get("hiringOrganization")),
            location=_location_of(item.get("jobLocation")),
            method="json-ld",
        )
    return None


def _from_selectors(body) -> Optional[str]:
    best = ""
    for sel in SELECTORS:
        for el in body.select(sel):
            text = _normalize(el.get_text(separator=" ", strip=True))
            if len(text) >= MIN_DESCRIPTION_CHARS and _score_text(text) >= 3 and len(text) > len(best):
                best = text
    return best[:MAX_DESCRIPTION_CHARS] or None


def _from_dom_walk(body) -> Optional[str]:
    candidates: list[tuple[int, int, str]] = []
    for node in body.find_all(["article", "main", "section", "div"]):
        if node.find_parent(list(_SKIP_TAGS)):
            continue
        marker = " ".join(node.get("class") or []).lower() + " " + (node.get("id") or "").lower()
        if node.name == "div" and not any(k in marker for k in ("job", "description", "posting", "content")):
            continue
        text = _normalize(node.get_text(separator=" ", strip=True))
        if len(text) >= MIN_DESCRIPTION_CHARS:
            score = _score_text(text)
            if score >= 2:
                candidates.append((score, len(text), text))
    if not candidates:
        return None
    return max(candidates)[2][:MAX_DESCRIPTION_CHARS]


def parse_job_page(html: str, url: str = "") -> Optional[ScrapedJobPage]:
    """Parse fetched HTML. Returns None when no description-like block is found."""
    if not html or len(html.strip()) < 100:
        return None
    soup = BeautifulSoup(html[:MAX_HTML_BYTES], "html.parser")

    page = _from_json_ld(soup, url)
    if page:
        return page

    title_tag = soup.find("h1") or soup.find("title")
    title = _normalize(title_tag.get_text()) if title_tag else ""
    body = soup.find("body") or soup
    for tag in body.find_all(list(_SKIP_TAGS)):
        tag.decompose()

    text = _from_selectors(body)
    method = "selectors"
    if not text:
        text = _from_dom_walk(body)
        method = "dom-walk"
    if not text:
        return None
    return ScrapedJobPage(url=url, description=text, title=title[:255], method=method)


def fetch_job_page(url: str, user_id: int | None = None) -> ScrapedJobPage:
    """
    Download and parse a job posting URL. The fetch is audited like any other
    outbound call. Raises ValidationError (bad URL or no description found),
    ConnectorError (non-2xx) or NetworkError (no response).
    """
    parsed = urlparse((url or "").strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("A valid http(s) job posting URL is required")
    url = parsed.geturl()

    try:
        response = log_api_call(
            SCRAPER_SERVICE,
            url,
            "GET",
            user_id=user_id,
            headers={"User-Agent": SCRAPER_USER_AGENT, "Accept": "text/html,application/xhtml+xml"},
        )
    except requests.RequestException as e:
        logger.warning("Job page unreachable url=%s error=%s", url[:200], e)
        raise NetworkError("Network error while fetching job page") from e

    if not response.ok:
        raise ConnectorError(f"Job page returned HTTP {response.status_code}", response.status_code)

    page = parse_job_page(response.text, url)
    if page is None:
        raise ValidationError("Could not find a job description at that URL")
    logger.info("Job page scraped url=%s method=%s chars=%d", url[:200], page.method, len(page.description))
    return page
