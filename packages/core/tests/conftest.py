"""Shared stubs for notification engine tests."""

import pytest

from prstatus_core.errors import RemoteListError, RemoteWriteError
from prstatus_core.models import BuildDetails, BuildOutcome, BuildPhase, Comment, PullRequest, User

COMMIT = "abc123def456"


class RecordingBroadcaster:
    def __init__(self):
        self.events = []

    def broadcast(self, opcode, payload):
        self.events.append((opcode, payload))

    @property
    def opcodes(self):
        return [opcode for opcode, _ in self.events]


class FakeClient:
    """In-memory RepositoryClient that records every call."""

    def __init__(self, comments=None, prs=None):
        self.comments = list(comments or [])
        self.prs = list(prs or [])
        self.calls = []
        self.list_error = None
        self.write_error = None
        self.status_error = None
        self._next_id = 100

    def get_pr_list(self):
        return list(self.prs)

    def list_own_comments(self, pr_id):
        self.calls.append(("list", pr_id))
        if self.list_error:
            raise RemoteListError(self.list_error)
        return list(self.comments)

    def create_comment(self, pr_id, text):
        self.calls.append(("create", pr_id, text))
        if self.write_error:
            raise RemoteWriteError(self.write_error)
        self._next_id += 1
        comment = Comment(id=self._next_id, version=0, text=text, author="ci-bot")
        self.comments.append(comment)
        return comment

    def edit_comment(self, pr_id, comment_id, version, text):
        self.calls.append(("edit", pr_id, comment_id, version, text))
        if self.write_error:
            raise RemoteWriteError(self.write_error)
        edited = Comment(id=comment_id, version=version + 1, text=text, author="ci-bot")
        self.comments = [edited if c.id == comment_id else c for c in self.comments]
        return edited

    def post_build_status(self, commit_id, record):
        self.calls.append(("status", commit_id, record))
        if self.status_error:
            raise RemoteWriteError(self.status_error)

    @property
    def writes(self):
        return [c for c in self.calls if c[0] in ("create", "edit")]

    @property
    def status_posts(self):
        return [c for c in self.calls if c[0] == "status"]


def make_pr(id=7, commit=COMMIT):
    return PullRequest(
        id=id,
        web_url=f"http://bitbucket/pr/{id}",
        from_ref="refs/heads/feature",
        from_commit=commit,
        title="Add feature",
        author=User(name="Jo Dev", email="jo@example.com"),
    )


def make_build(state=BuildPhase.QUEUED, status=None, status_text=None):
    return BuildDetails(
        id=42, build_id="PLAN-JOB", web_url="http://ci/42", state=state, status=status, status_text=status_text
    )


def finished(outcome=BuildOutcome.SUCCESS, status_text="done"):
    return make_build(state=BuildPhase.FINISHED, status=outcome, status_text=status_text)


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def client():
    return FakeClient()
