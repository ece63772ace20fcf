"""GitHub GraphQL API client for contribution queries."""

import logging
import threading
from datetime import datetime
from typing import Dict, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import QueryError
from .models import ContributionRecord, ContributionSnapshot, format_timestamp
from .queries import CONTRIBUTIONS_QUERY, TEAM_MEMBERS_QUERY, CONTRIBUTION_KIND_FIELDS


GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_TIMEOUT = 30


class GitHubAPIClient:
    """Handles GitHub GraphQL requests with retry logic and token auth."""

    def __init__(self, token: str = None, api_url: str = GRAPHQL_URL,
                 timeout: float = DEFAULT_TIMEOUT, pool_size: int = 20):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            api_url: GraphQL endpoint URL
            timeout: Per-request timeout in seconds
            pool_size: Maximum number of pooled connections (one per concurrent subject)
        """
        self.token = token
        self.api_url = api_url
        self.timeout = timeout
        self.session = requests.Session()
        self._cancelled = threading.Event()

        # One connection per worker thread, retrying transient server errors only
        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=None
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        if self.token:
            self.session.headers.update({
                'Authorization': f'bearer {self.token}',
                'Accept': 'application/json'
            })
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. The GraphQL API rejects anonymous requests.")
            logging.warning("Set GITHUB_TOKEN environment variable or pass token as argument.")

    def close(self):
        """Release pooled connections."""
        self.session.close()

    def cancel(self):
        """Abort outstanding work: later requests fail and pooled connections are dropped.

        A request already on the wire ends at the latest when its timeout expires;
        its result is reported as a QueryError.
        """
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        logging.debug("Cancelling GitHub API client")
        self.session.close()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def post_graphql(self, query: str, variables: Dict = None) -> Dict:
        """Make a GraphQL query to the GitHub API.

        Args:
            query: GraphQL query string
            variables: Optional query variables

        Returns:
            The 'data' member of the JSON response

        Raises:
            QueryError: On transport failure, HTTP error status, GraphQL errors
                or a response that is not JSON
        """
        if self.cancelled:
            raise QueryError("GraphQL request cancelled")

        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.session.post(self.api_url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"GraphQL request failed: {e}")
            if self.cancelled:
                raise QueryError("GraphQL request cancelled", cause=e) from e
            raise QueryError(f"GraphQL request failed: {e}", cause=e) from e

        if response.status_code in (401, 403):
            logging.error(f"GraphQL request rejected with status {response.status_code}: {response.text}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise QueryError(f"GraphQL request failed: {e}", cause=e) from e

        try:
            result = response.json()
        except ValueError as e:
            raise QueryError(f"GraphQL response is not valid JSON: {e}", cause=e) from e

        # Check for GraphQL errors
        if result.get("errors"):
            logging.error(f"GraphQL errors: {result['errors']}")
            raise QueryError(f"GraphQL query failed: {result['errors']}")

        return result.get("data") or {}

    def fetch_contributions(self, login: str, from_time: datetime, to_time: datetime,
                            max_per_kind: int) -> ContributionSnapshot:
        """Fetch the contribution snapshot of one user.

        Args:
            login: GitHub login of the user
            from_time: Start of the time window
            to_time: End of the time window
            max_per_kind: Maximum repositories returned per contribution kind

        Returns:
            ContributionSnapshot with the three contribution lists as returned by the API

        Raises:
            QueryError: If the request fails, the user does not exist or the
                payload does not have the expected shape
        """
        logging.debug(f"Fetching contributions for {login}")
        data = self.post_graphql(CONTRIBUTIONS_QUERY, {
            'login': login,
            'fromTime': format_timestamp(from_time),
            'toTime': format_timestamp(to_time),
            'maxRepos': max_per_kind,
        })

        user = data.get('user')
        if not user:
            raise QueryError(f"User '{login}' not found")

        try:
            collection = user['contributionsCollection']
            lists = {
                kind: self._parse_contributions(collection[field_name] or [])
                for kind, field_name in CONTRIBUTION_KIND_FIELDS.items()
            }
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(f"Malformed contributions response for '{login}': {e!r}", cause=e) from e

        snapshot = ContributionSnapshot(
            subject_login=user.get('login') or login,
            subject_display_name=user.get('name') or '',
            **lists
        )
        logging.debug(
            f"Fetched {login}: {len(snapshot.commits)} commit, {len(snapshot.pull_requests)} PR "
            f"and {len(snapshot.pull_request_reviews)} review repositories"
        )
        return snapshot

    @staticmethod
    def _parse_contributions(items: List[Dict]) -> List[ContributionRecord]:
        """Map *ContributionsByRepository nodes to records, keeping API order and duplicates."""
        return [
            ContributionRecord(
                repository_full_name=item['repository']['nameWithOwner'],
                count=int(item['contributions']['totalCount'])
            )
            for item in items
        ]

    def list_team_members(self, org: str, team_slug: str) -> List[str]:
        """List the logins of all members of an organization team.

        Args:
            org: Organization login
            team_slug: Team slug within the organization

        Returns:
            Member logins sorted ascending

        Raises:
            QueryError: If the request fails or the organization or team does not exist
        """
        logins = []
        cursor = None
        page = 1

        while True:
            logging.debug(f"Fetching page {page} of {org}/{team_slug} members")
            data = self.post_graphql(TEAM_MEMBERS_QUERY, {'org': org, 'team': team_slug, 'cursor': cursor})

            organization = data.get('organization')
            if not organization:
                raise QueryError(f"Organization '{org}' not found")
            team = organization.get('team')
            if not team:
                raise QueryError(f"Team '{team_slug}' not found in organization '{org}'")

            try:
                members = team['members']
                logins.extend(node['login'] for node in members['nodes'])
                page_info = members['pageInfo']
                has_next_page = page_info.get('hasNextPage')
                cursor = page_info.get('endCursor')
            except (KeyError, TypeError, AttributeError) as e:
                raise QueryError(f"Malformed team members response for '{org}/{team_slug}': {e!r}", cause=e) from e

            if not has_next_page:
                break

            page += 1

        logging.info(f"Found {len(logins)} members in {org}/{team_slug}")
        return sorted(logins)
