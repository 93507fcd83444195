"""Capabilities a code-review platform must offer.

Providers are structural: any object with the right methods qualifies.

    CommentStore       list / create / edit the integration's own PR comments
    BuildStatusClient  post a native build-status record for a commit
    RepositoryClient   both of the above, plus listing open pull requests
    RepositoryProvider the lifecycle surface callers drive (see BuildNotifier)

Clients raise RemoteListError / RemoteWriteError on failure; they never
return sentinel values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from prstatus_core.models import BuildDetails, BuildStatusRecord, Comment, PullRequest, ReconciliationOutcome


class CommentStore(Protocol):
    def list_own_comments(self, pr_id: int) -> list[Comment]:
        """Comments on the PR authored by the integration account, in a stable order."""
        ...

    def create_comment(self, pr_id: int, text: str) -> Comment: ...

    def edit_comment(self, pr_id: int, comment_id: int, version: int, text: str) -> Comment:
        """Raise VersionConflictError when ``version`` is stale."""
        ...


class BuildStatusClient(Protocol):
    def post_build_status(self, commit_id: str, record: BuildStatusRecord) -> None:
        """Raise RemoteWriteError unless the platform acknowledges with no content."""
        ...


class RepositoryClient(CommentStore, BuildStatusClient, Protocol):
    def get_pr_list(self) -> list[PullRequest]: ...


class RepositoryProvider(Protocol):
    def get_pr_list(self) -> list[PullRequest]: ...

    def build_queued(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome: ...

    def build_running(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome: ...

    def build_success(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome: ...

    def build_failure(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome: ...
