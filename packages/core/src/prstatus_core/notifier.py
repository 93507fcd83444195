"""Build lifecycle notifications for a pull request.

    build_queued / build_running / build_success / build_failure
        → _notify(event)                  one code path for all four
            → label_for_event(event)      queued and running share INPROGRESS
            → CommentSynchronizer.reconcile
            → StatusPoster.post_status    only when post_build is enabled

Callers must deliver lifecycle events for the same pull request one at a
time, in build order. Nothing here locks the remote comment list: two
concurrent calls for the same commit can both see no match and both create
a comment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prstatus_core.build_state import label_for_event
from prstatus_core.config import bitbucket_credentials
from prstatus_core.errors import NotificationError, ReconciliationError, RemoteWriteError, StatusPostError
from prstatus_core.events import EventEmitter
from prstatus_core.models import BuildDetails, LifecycleEvent, PullRequest, ReconciliationOutcome
from prstatus_core.status import StatusPoster
from prstatus_core.synchronizer import CommentSynchronizer

if TYPE_CHECKING:
    from prstatus_core.events import Broadcaster
    from prstatus_core.providers.base import RepositoryClient

logger = logging.getLogger(__name__)


class BuildNotifier:
    """RepositoryProvider for any RepositoryClient."""

    def __init__(self, client: RepositoryClient, broadcaster: Broadcaster, post_build: bool = False):
        self._client = client
        self._post_build = post_build
        emitter = EventEmitter(broadcaster)
        self._synchronizer = CommentSynchronizer(client, emitter)
        self._status_poster = StatusPoster(client, emitter)

    def get_pr_list(self) -> list[PullRequest]:
        return self._client.get_pr_list()

    def build_queued(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        return self._notify(LifecycleEvent.QUEUED, pr, build)

    def build_running(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        return self._notify(LifecycleEvent.RUNNING, pr, build)

    def build_success(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        return self._notify(LifecycleEvent.SUCCESS, pr, build)

    def build_failure(self, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        return self._notify(LifecycleEvent.FAILURE, pr, build)

    def notify(self, event: LifecycleEvent, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        """Dispatch by event value; used by callers that receive the event as data."""
        return self._notify(LifecycleEvent(event), pr, build)

    def _notify(self, event: LifecycleEvent, pr: PullRequest, build: BuildDetails) -> ReconciliationOutcome:
        label = label_for_event(event)
        logger.debug("Build %s %s for PR #%s", build.build_id, event.value, pr.id)

        try:
            outcome = self._synchronizer.reconcile(pr, build, label)
        except ReconciliationError as e:
            raise NotificationError(f"Error submitting comment: {e}") from e

        if self._post_build:
            try:
                self._status_poster.post_status(build, pr)
            except RemoteWriteError as e:
                raise StatusPostError(f"Error posting build: {e}", outcome=outcome) from e

        return outcome


def get_client(config: dict) -> RepositoryClient:
    """Instantiate the platform client selected by ``provider`` in config."""
    provider = config["provider"]
    if provider == "bitbucket":
        from prstatus_core.providers.bitbucket import BitbucketClient

        return BitbucketClient(
            base_url=config["base_url"],
            project_slug=config["project_slug"],
            repo_slug=config["repo_slug"],
            credentials=bitbucket_credentials(config),
            timeout=config.get("timeout", 30),
        )
    if provider == "github":
        from prstatus_core.providers.github import GitHubClient

        return GitHubClient.from_token(config["repo"], config["github_token"])
    raise ValueError(f"Unknown provider: {provider!r}. Choose 'bitbucket' or 'github'.")


def build_notifier(config: dict, broadcaster: Broadcaster, client: RepositoryClient | None = None) -> BuildNotifier:
    return BuildNotifier(
        client if client is not None else get_client(config),
        broadcaster,
        post_build=bool(config.get("post_build", False)),
    )
