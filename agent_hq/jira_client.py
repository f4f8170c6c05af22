"""
Read-only Jira REST client.

Requests go to the configured site (`{base_url}/rest/api/3/...`). When cloud
routing is enabled the client first tries to discover the site's Atlassian
cloud id and sends requests to `https://api.atlassian.com/ex/jira/{cloudId}`
instead; if discovery fails for any reason it quietly uses the site URL.
"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlparse

import httpx

from agent_hq.config import JiraConfig
from agent_hq.errors import JiraRequestError
from agent_hq.logging_utils import get_logger

logger = get_logger(__name__)

ACCESSIBLE_RESOURCES_URL = "https://api.atlassian.com/oauth/token/accessible-resources"
CLOUD_API_BASE = "https://api.atlassian.com/ex/jira"

_CLOUD_PREFIX = re.compile(r"^/+(ex/jira/[^/]+/)?")


def _join_list(values: Optional[List[str]]) -> Optional[str]:
    return ",".join(values) if values else None


class JiraClient:
    """Async Jira client bound to one JiraConfig"""

    def __init__(self, config: JiraConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=config.timeout_seconds,
        )
        # Resolved once per process; failures are not cached
        self._cloud_id: Optional[str] = None

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self) -> "JiraClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": self.config.auth_header,
        }

    async def _send(self, url: str, params: Optional[Dict[str, Any]], error_prefix: str) -> Any:
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._client.get(url, params=clean_params or None, headers=self._headers())

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            logger.warning(f"Jira request to {url} failed with status {response.status_code}")
            raise JiraRequestError(response.status_code, body, prefix=error_prefix)

        if response.status_code == 204:
            return None
        return response.json()

    async def request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a path relative to the site base URL (absolute URLs pass through).

        Raises:
            JiraRequestError: on any non-2xx response
        """
        if path.startswith("http"):
            url = path
        else:
            url = f"{self.config.base_url}/{path.lstrip('/')}"
        return await self._send(url, params, "Jira request failed with status")

    async def resolve_cloud_id(self) -> Optional[str]:
        """
        Find the Atlassian cloud id for the configured site.

        Picks the accessible resource whose URL host matches the site host,
        else the first resource. Returns None on any failure.
        """
        if self._cloud_id:
            return self._cloud_id

        try:
            response = await self._client.get(ACCESSIBLE_RESOURCES_URL, headers=self._headers())
            if not response.is_success:
                return None
            resources = response.json()
            if not isinstance(resources, list):
                return None
            base_host = urlparse(self.config.base_url).netloc

            match = None
            for resource in resources:
                url = resource.get("url") if isinstance(resource, dict) else None
                if url and urlparse(url).netloc == base_host:
                    match = resource
                    break
            if match is None and resources:
                match = resources[0]

            if isinstance(match, dict) and match.get("id"):
                self._cloud_id = str(match["id"])
                logger.info(f"Resolved Jira cloud id for {base_host}")
                return self._cloud_id
            return None
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logger.debug(f"Cloud id resolution failed, using site URL: {e}")
            return None

    async def cloud_request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET through the cloud API gateway, falling back to the site URL."""
        cloud_id = await self.resolve_cloud_id()
        if not cloud_id:
            return await self.request(path, params)

        if path.startswith("http"):
            url = path
        else:
            url = f"{CLOUD_API_BASE}/{cloud_id}/{_CLOUD_PREFIX.sub('', path)}"
        return await self._send(url, params, "Cloud Jira request failed")

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if self.config.cloud_routing:
            return await self.cloud_request(path, params)
        return await self.request(path, params)

    async def search(self, jql: str, fields: Optional[List[str]] = None,
                     expand: Optional[List[str]] = None,
                     max_results: Optional[int] = None,
                     start_at: Optional[int] = None) -> Any:
        """Run a JQL search."""
        params = {
            "jql": jql,
            "fields": _join_list(fields),
            "expand": _join_list(expand),
            "maxResults": str(max_results) if max_results is not None else None,
            "startAt": str(start_at) if start_at is not None else None,
        }
        return await self._get("/rest/api/3/search", params)

    async def get_issue(self, issue_key: str, fields: Optional[List[str]] = None,
                        expand: Optional[List[str]] = None) -> Any:
        """Fetch one issue by key."""
        params = {
            "fields": _join_list(fields),
            "expand": _join_list(expand),
        }
        return await self._get(f"/rest/api/3/issue/{quote(issue_key, safe='')}", params)
