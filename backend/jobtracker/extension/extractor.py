from __future__ import annotations

import enum
import re
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import urlparse

from bs4 import BeautifulSoup


class Site(str, enum.Enum):
    LINKEDIN = "linkedin"
    INDEED = "indeed"
    GLASSDOOR = "glassdoor"
    GREENHOUSE = "greenhouse"
    LEVER = "lever"


@dataclass(frozen=True)
class JobDetails:
    title: str | None
    company: str | None
    url: str
    location: str | None = None
    salary: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


# Path patterns a URL must match for the page to count as a job posting.
# Sites without an entry are recognized by hostname alone.
JOB_PATH_PATTERNS: dict[Site, tuple[re.Pattern[str], ...]] = {
    Site.LINKEDIN: (re.compile(r"^/jobs/"),),
    Site.INDEED: (re.compile(r"^/viewjob"), re.compile(r"^/jobs"), re.compile(r"^/m/viewjob")),
    Site.GLASSDOOR: (re.compile(r"^/job-listing/"), re.compile(r"^/Job/", re.I)),
    Site.GREENHOUSE: (re.compile(r"/jobs/"), re.compile(r"^/embed/job_app")),
    Site.LEVER: (re.compile(r"^/[^/]+/[^/]+"),),
}


def _clean(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def first_text(soup: BeautifulSoup, selectors: tuple[str, ...]) -> str | None:
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = _clean(element.get_text(" ", strip=True))
        if text:
            return text
    return None


def _extract_linkedin(soup: BeautifulSoup, url: str) -> JobDetails:
    # Single job view, collections and premium layouts use different class names.
    return JobDetails(
        title=first_text(
            soup,
            (
                ".job-details-jobs-unified-top-card__job-title",
                ".jobs-unified-top-card__job-title",
                ".top-card-layout__title",
                "h1.t-24",
            ),
        ),
        company=first_text(
            soup,
            (
                ".job-details-jobs-unified-top-card__company-name",
                ".jobs-unified-top-card__company-name",
                ".job-details-jobs-unified-top-card__company-name a",
                ".topcard__org-name-link",
            ),
        ),
        location=first_text(
            soup,
            (
                ".job-details-jobs-unified-top-card__bullet",
                ".jobs-unified-top-card__bullet",
                ".job-details-jobs-unified-top-card__primary-description-container .tvm__text",
                ".topcard__flavor--bullet",
            ),
        ),
        salary=first_text(
            soup,
            (
                ".job-details-jobs-unified-top-card__job-insight",
                ".salary.compensation__salary",
            ),
        ),
        url=url,
    )


def _extract_indeed(soup: BeautifulSoup, url: str) -> JobDetails:
    return JobDetails(
        title=first_text(
            soup,
            (
                ".jobsearch-JobInfoHeader-title",
                "[data-testid='jobsearch-JobInfoHeader-title']",
                "h1",
            ),
        ),
        company=first_text(
            soup,
            (
                "[data-company-name='true']",
                "[data-testid='inlineHeader-companyName']",
                ".jobsearch-CompanyInfoContainer a",
            ),
        ),
        location=first_text(
            soup,
            (
                "[data-testid='job-location']",
                "[data-testid='inlineHeader-companyLocation']",
                ".jobsearch-JobInfoHeader-subtitle > div:last-child",
            ),
        ),
        salary=first_text(
            soup,
            (
                "#salaryInfoAndJobType",
                ".js-match-insights-provider-tvvxwd",
                "[data-testid='attribute_snippet_testid']",
            ),
        ),
        url=url,
    )


def _extract_glassdoor(soup: BeautifulSoup, url: str) -> JobDetails:
    return JobDetails(
        title=first_text(soup, ("[data-test='job-title']", "[data-test='jobTitle']", "h1")),
        company=first_text(soup, ("[data-test='employer-name']", "[data-test='employerName']")),
        location=first_text(soup, ("[data-test='location']", "[data-test='emp-location']")),
        salary=first_text(soup, ("[data-test='detailSalary']", "[data-test='salaryEstimate']")),
        url=url,
    )


def _extract_greenhouse(soup: BeautifulSoup, url: str) -> JobDetails:
    return JobDetails(
        title=first_text(soup, (".app-title", ".job__title h1", "h1.section-header")),
        company=first_text(soup, (".company-name", ".job__title .company-name")),
        location=first_text(soup, (".location", ".job__location")),
        url=url,
    )


def _extract_lever(soup: BeautifulSoup, url: str) -> JobDetails:
    return JobDetails(
        title=first_text(soup, (".posting-headline h2",)),
        company=first_text(soup, (".main-header-text-logo", ".main-header-text")),
        location=first_text(soup, (".posting-categories .location", ".posting-category.location")),
        url=url,
    )


EXTRACTORS: dict[Site, Callable[[BeautifulSoup, str], JobDetails]] = {
    Site.LINKEDIN: _extract_linkedin,
    Site.INDEED: _extract_indeed,
    Site.GLASSDOOR: _extract_glassdoor,
    Site.GREENHOUSE: _extract_greenhouse,
    Site.LEVER: _extract_lever,
}


def detect_site(url: str) -> Site | None:
    """Map a page URL to a known job site, or None when it is not a job posting."""
    parsed = urlparse(url or "")
    host = (parsed.hostname or "").lower()
    if not host:
        return None
    for site in Site:
        if site.value not in host:
            continue
        patterns = JOB_PATH_PATTERNS.get(site)
        if patterns and not any(pattern.search(parsed.path or "/") for pattern in patterns):
            return None
        return site
    return None


def extract_job(page: str | BeautifulSoup, url: str) -> JobDetails | None:
    site = detect_site(url)
    if site is None:
        return None
    soup = page if isinstance(page, BeautifulSoup) else BeautifulSoup(page or "", "html.parser")
    job = EXTRACTORS[site](soup, url)
    if not job.title:
        return None
    return job
