"""GitHub client built on PyGithub.

PR status comments are issue comments. GitHub has no optimistic-concurrency
token for comments, so ``Comment.version`` is always 0 and edits are
last-writer-wins. Build statuses are commit statuses whose context is the
build key.
"""

from __future__ import annotations

import logging

import requests
from github import Github, GithubException

from prstatus_core.errors import RemoteListError, RemoteWriteError
from prstatus_core.models import BuildLabel, BuildStatusRecord, Comment, PullRequest, User

logger = logging.getLogger(__name__)

_COMMIT_STATES = {
    BuildLabel.INPROGRESS: "pending",
    BuildLabel.SUCCESSFUL: "success",
    BuildLabel.FAILED: "failure",
}
_MAX_DESCRIPTION = 140

# Transport failures surface as requests exceptions, not GithubException.
_REMOTE_ERRORS = (GithubException, requests.RequestException)


def _millis(dt) -> int:
    return int(dt.timestamp() * 1000) if dt is not None else 0


class GitHubClient:
    def __init__(self, repo, login: str):
        self._repo = repo
        self._login = login

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GitHubClient:
        gh = Github(token)
        try:
            return cls(gh.get_repo(repo_name), gh.get_user().login)
        except _REMOTE_ERRORS as e:
            raise RemoteListError(f"Could not open GitHub repository {repo_name}: {e}") from e

    def get_pr_list(self) -> list[PullRequest]:
        try:
            pulls = list(self._repo.get_pulls(state="open"))
        except _REMOTE_ERRORS as e:
            raise RemoteListError(f"Error getting list of Pull Requests {e}") from e
        return [
            PullRequest(
                id=p.number,
                web_url=p.html_url,
                from_ref=p.head.ref,
                from_commit=p.head.sha,
                title=p.title or "",
                author=User(name=p.user.login),
            )
            for p in pulls
        ]

    def list_own_comments(self, pr_id: int) -> list[Comment]:
        try:
            comments = list(self._repo.get_issue(pr_id).get_comments())
        except _REMOTE_ERRORS as e:
            raise RemoteListError(f"Error getting comments {e}") from e
        return [self._to_comment(c) for c in comments if c.user is not None and c.user.login == self._login]

    def create_comment(self, pr_id: int, text: str) -> Comment:
        try:
            created = self._repo.get_issue(pr_id).create_comment(text)
        except _REMOTE_ERRORS as e:
            raise RemoteWriteError(f"Error posting comment {e}") from e
        return self._to_comment(created)

    def edit_comment(self, pr_id: int, comment_id: int, version: int, text: str) -> Comment:
        try:
            comment = self._repo.get_issue(pr_id).get_comment(comment_id)
            comment.edit(text)
        except _REMOTE_ERRORS as e:
            raise RemoteWriteError(f"Error editing comment {comment_id}: {e}") from e
        return self._to_comment(comment)

    def post_build_status(self, commit_id: str, record: BuildStatusRecord) -> None:
        try:
            self._repo.get_commit(commit_id).create_status(
                state=_COMMIT_STATES[record.state],
                target_url=record.url,
                description=record.description[:_MAX_DESCRIPTION],
                context=record.key,
            )
        except _REMOTE_ERRORS as e:
            raise RemoteWriteError(f"Error posting build {e}") from e

    @staticmethod
    def _to_comment(c) -> Comment:
        return Comment(
            id=c.id,
            version=0,
            text=c.body or "",
            author=c.user.login if c.user is not None else "",
            created_date=_millis(c.created_at),
            updated_date=_millis(c.updated_at),
        )
