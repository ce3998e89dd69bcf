"""GitHub API client for release listings.

Provides a lightweight REST client for fetching the release tag names of a
GitHub repository, following the API's Link-header pagination.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from requests.utils import parse_header_links

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, redact, safe_url

logger = logging.getLogger(__name__)


class RemoteFetchError(RuntimeError):
    """Raised when a repository's release listing cannot be fetched."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"failed to list releases for {path}: {reason}")
        self.path = path
        self.reason = reason


class GitHubClient:
    """Lightweight REST client for GitHub release listings.

    Built once by the entry point and shared across workers. Supports optional
    authentication via the GITHUB_TOKEN environment variable.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        per_page: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for GitHub API (defaults to Constants.GITHUB_API_BASE)
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            per_page: Page size for listings (defaults to Constants.REPO_API_PER_PAGE)
            session: Optional requests session to reuse connections
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)
        self.per_page = per_page or Constants.REPO_API_PER_PAGE
        self.session = session if session is not None else requests.Session()
        if is_debug_enabled(logger):
            logger.debug(
                "GitHub client ready",
                extra=extra_context(
                    event="init",
                    component="github",
                    target=safe_url(self.base_url),
                    token=redact(self.token) if self.token else "none",
                )
            )

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": Constants.USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list_release_tags(self, owner: str, repo: str) -> List[str]:
        """Fetch the tag names of every published release.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Tag names in API order; drafts and untagged entries are skipped.

        Raises:
            RemoteFetchError: on any non-200 response or transport failure.
        """
        path = f"{owner}/{repo}"
        tags = []
        for release in self._get_paginated_results(
            path,
            f"{self.base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/releases",
        ):
            if not isinstance(release, dict) or release.get("draft"):
                continue
            tag = release.get("tag_name")
            if tag:
                tags.append(str(tag))
        return tags

    def _get_paginated_results(self, path: str, url: str) -> List[Dict[str, Any]]:
        """Fetch all pages of a paginated endpoint.

        Args:
            path: ``owner/repo`` used in error messages
            url: Base URL for paginated endpoint

        Returns:
            List of all results across pages
        """
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = f"{url}?per_page={self.per_page}"
        pages = 0

        while current_url and pages < Constants.REPO_API_MAX_PAGES:
            status, headers, data = get_json(
                current_url, headers=self._get_headers(), session=self.session
            )
            if status == 0:
                raise RemoteFetchError(path, "connection failed")
            if status != 200:
                raise RemoteFetchError(path, f"HTTP {status}")
            if not isinstance(data, list):
                raise RemoteFetchError(path, "unexpected response body")

            results.extend(data)
            pages += 1
            current_url = self._get_next_url(headers)

        if current_url:
            logger.warning(
                "%s: stopped after %d pages (%d releases); older releases are not considered",
                path,
                pages,
                len(results),
                extra=extra_context(
                    event="decision",
                    component="github",
                    action="paginate",
                    outcome="page_limit",
                    target=safe_url(current_url),
                )
            )
        return results

    def _get_next_url(self, headers: Dict[str, str]) -> Optional[str]:
        """Extract the rel="next" URL from a Link header.

        Args:
            headers: Response headers

        Returns:
            Next page URL or None
        """
        link = None
        for key, value in headers.items():
            if key.lower() == "link":
                link = value
                break
        if not link:
            return None
        for entry in parse_header_links(link):
            if entry.get("rel") == "next" and entry.get("url"):
                return entry["url"]
        return None
