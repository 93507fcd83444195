"""Bitbucket Server REST client.

``base_url`` is the REST root of the server (e.g. ``https://bitbucket.example.com/rest``);
pull-request endpoints live under ``api/latest`` and build statuses under
``build-status/1.0``.
"""

from __future__ import annotations

import logging

import requests

from prstatus_core.errors import RemoteListError, RemoteWriteError, VersionConflictError
from prstatus_core.models import BuildStatusRecord, Comment, Credentials, PullRequest, User

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30


class BitbucketClient:
    def __init__(
        self,
        base_url: str,
        project_slug: str,
        repo_slug: str,
        credentials: Credentials,
        timeout: float = _DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._project_slug = project_slug
        self._repo_slug = repo_slug
        self._username = credentials.username
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.auth = (credentials.username, credentials.password)
        self._session.headers.update({"Accept": "application/json"})

    # ------------------------------------------------------------------ #
    # RepositoryClient                                                     #
    # ------------------------------------------------------------------ #

    def get_pr_list(self) -> list[PullRequest]:
        try:
            values = self._get_paged(self._pr_url())
            return [self._parse_pull_request(v) for v in values]
        except (requests.RequestException, ValueError, KeyError) as e:
            raise RemoteListError(f"Error getting list of Pull Requests {e}") from e

    def list_own_comments(self, pr_id: int) -> list[Comment]:
        """Return comments authored by the configured user, in the order the server lists them."""
        try:
            activities = self._get_paged(self._pr_url(pr_id, "activities"), params={"fromType": "COMMENT"})
            return [
                self._parse_comment(activity["comment"])
                for activity in activities
                if activity.get("comment") is not None and activity.get("user", {}).get("name") == self._username
            ]
        except (requests.RequestException, ValueError, KeyError) as e:
            raise RemoteListError(f"Error getting comments {e}") from e

    def create_comment(self, pr_id: int, text: str) -> Comment:
        response = self._write("POST", self._pr_url(pr_id, "comments"), {"text": text}, expected=201)
        return self._comment_from(response)

    def edit_comment(self, pr_id: int, comment_id: int, version: int, text: str) -> Comment:
        response = self._write(
            "PUT",
            self._pr_url(pr_id, "comments", str(comment_id)),
            {"text": text, "version": version},
            expected=200,
        )
        return self._comment_from(response)

    def post_build_status(self, commit_id: str, record: BuildStatusRecord) -> None:
        url = f"{self._base_url}/build-status/1.0/commits/{commit_id}"
        self._write("POST", url, record.to_dict(), expected=204)

    # ------------------------------------------------------------------ #
    # Transport                                                            #
    # ------------------------------------------------------------------ #

    def _pr_url(self, pr_id: int | None = None, *parts: str) -> str:
        url = f"{self._base_url}/api/latest/projects/{self._project_slug}/repos/{self._repo_slug}/pull-requests"
        if pr_id is not None:
            url += f"/{pr_id}"
        for part in parts:
            url += f"/{part}"
        return url

    def _get_paged(self, url: str, params: dict | None = None) -> list[dict]:
        """Collect ``values`` from every page of a Bitbucket paged response."""
        params = dict(params or {})
        values: list[dict] = []
        while True:
            response = self._session.get(url, params=dict(params), timeout=self._timeout)
            response.raise_for_status()
            page = response.json()
            values.extend(page.get("values", []))
            if page.get("isLastPage", True) or page.get("nextPageStart") is None:
                return values
            params["start"] = page["nextPageStart"]

    def _write(self, method: str, url: str, body: dict, expected: int) -> requests.Response:
        try:
            response = self._session.request(method, url, json=body, timeout=self._timeout)
        except requests.RequestException as e:
            raise RemoteWriteError(f"Error posting to {url}: {e}") from e

        if response.status_code == expected:
            return response
        if response.status_code == 409:
            raise VersionConflictError(f"Version conflict for {url}: {response.text}")
        raise RemoteWriteError(f"Unexpected status {response.status_code} from {method} {url}: {response.text}")

    def _comment_from(self, response: requests.Response) -> Comment:
        try:
            return self._parse_comment(response.json())
        except (ValueError, KeyError) as e:
            raise RemoteWriteError(f"Malformed comment in response from {response.url}: {e}") from e

    # ------------------------------------------------------------------ #
    # Parsing                                                              #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _parse_pull_request(d: dict) -> PullRequest:
        from_ref = d.get("fromRef", {})
        user = d.get("author", {}).get("user", {})
        self_links = d.get("links", {}).get("self", [])
        return PullRequest(
            id=d["id"],
            web_url=self_links[0]["href"] if self_links else "",
            from_ref=from_ref.get("id", ""),
            from_commit=from_ref.get("latestCommit", ""),
            title=d.get("title", ""),
            author=User(name=user.get("displayName", ""), email=user.get("emailAddress", "")),
        )

    @staticmethod
    def _parse_comment(d: dict) -> Comment:
        return Comment(
            id=d["id"],
            version=d.get("version", 0),
            text=d.get("text", ""),
            author=d.get("author", {}).get("name", ""),
            created_date=d.get("createdDate", 0),
            updated_date=d.get("updatedDate", 0),
        )
