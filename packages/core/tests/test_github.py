"""Tests for the PyGithub-backed client."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException

from conftest import RecordingBroadcaster, make_build, make_pr
from prstatus_core.errors import ReconciliationError, RemoteListError, RemoteWriteError
from prstatus_core.events import EventEmitter
from prstatus_core.models import BuildLabel, BuildStatusRecord
from prstatus_core.providers.github import GitHubClient
from prstatus_core.synchronizer import CommentSynchronizer

SHA = "a" * 40


def _issue_comment(id, body, login="ci-bot"):
    c = MagicMock()
    c.id = id
    c.body = body
    c.user.login = login
    c.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    c.updated_at = datetime(2024, 1, 2, tzinfo=timezone.utc)
    return c


def _gh_error(status=500):
    return GithubException(status, {"message": "boom"}, None)


class TestGetPrList:
    def test_maps_open_pulls(self):
        pull = MagicMock()
        pull.number = 3
        pull.html_url = "https://github.com/owner/repo/pull/3"
        pull.head.ref = "feature"
        pull.head.sha = SHA
        pull.title = "Add feature"
        pull.user.login = "jodev"
        repo = MagicMock()
        repo.get_pulls.return_value = [pull]

        prs = GitHubClient(repo, "ci-bot").get_pr_list()

        repo.get_pulls.assert_called_once_with(state="open")
        assert prs[0].id == 3
        assert prs[0].from_commit == SHA
        assert prs[0].from_ref == "feature"
        assert prs[0].author.name == "jodev"

    def test_error_is_remote_list_error(self):
        repo = MagicMock()
        repo.get_pulls.side_effect = _gh_error()
        with pytest.raises(RemoteListError):
            GitHubClient(repo, "ci-bot").get_pr_list()


class TestComments:
    def test_lists_only_own_comments_in_order(self):
        repo = MagicMock()
        repo.get_issue.return_value.get_comments.return_value = [
            _issue_comment(1, "mine"),
            _issue_comment(2, "theirs", login="human"),
            _issue_comment(3, "mine again"),
        ]

        comments = GitHubClient(repo, "ci-bot").list_own_comments(3)

        repo.get_issue.assert_called_once_with(3)
        assert [c.id for c in comments] == [1, 3]
        assert comments[0].version == 0
        assert comments[0].created_date == int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)

    def test_list_error_is_remote_list_error(self):
        repo = MagicMock()
        repo.get_issue.side_effect = _gh_error(404)
        with pytest.raises(RemoteListError):
            GitHubClient(repo, "ci-bot").list_own_comments(3)

    def test_connection_error_is_remote_list_error(self):
        repo = MagicMock()
        repo.get_issue.side_effect = requests.exceptions.ConnectionError("connection reset")
        with pytest.raises(RemoteListError, match="connection reset"):
            GitHubClient(repo, "ci-bot").list_own_comments(3)

    def test_connection_error_during_reconcile_emits_error_event(self):
        repo = MagicMock()
        repo.get_issue.side_effect = requests.exceptions.ConnectionError("connection reset")
        broadcaster = RecordingBroadcaster()
        sync = CommentSynchronizer(GitHubClient(repo, "ci-bot"), EventEmitter(broadcaster))

        with pytest.raises(ReconciliationError) as exc_info:
            sync.reconcile(make_pr(), make_build(), BuildLabel.INPROGRESS)

        assert exc_info.value.kind == "RemoteListError"
        assert broadcaster.opcodes == ["Comment::Error"]
        repo.get_issue.return_value.create_comment.assert_not_called()

    def test_create_comment(self):
        repo = MagicMock()
        repo.get_issue.return_value.create_comment.return_value = _issue_comment(9, "hello")

        comment = GitHubClient(repo, "ci-bot").create_comment(3, "hello")

        repo.get_issue.return_value.create_comment.assert_called_once_with("hello")
        assert comment.id == 9
        assert comment.text == "hello"

    def test_edit_comment(self):
        existing = _issue_comment(9, "old")
        repo = MagicMock()
        repo.get_issue.return_value.get_comment.return_value = existing

        GitHubClient(repo, "ci-bot").edit_comment(3, 9, 0, "new")

        repo.get_issue.return_value.get_comment.assert_called_once_with(9)
        existing.edit.assert_called_once_with("new")

    def test_write_error_is_remote_write_error(self):
        repo = MagicMock()
        repo.get_issue.return_value.create_comment.side_effect = _gh_error(403)
        with pytest.raises(RemoteWriteError):
            GitHubClient(repo, "ci-bot").create_comment(3, "hello")

    def test_edit_timeout_is_remote_write_error(self):
        repo = MagicMock()
        repo.get_issue.return_value.get_comment.return_value.edit.side_effect = requests.exceptions.Timeout("timed out")
        with pytest.raises(RemoteWriteError, match="timed out"):
            GitHubClient(repo, "ci-bot").edit_comment(3, 9, 0, "new")


class TestPostBuildStatus:
    @pytest.mark.parametrize(
        "label,state",
        [(BuildLabel.INPROGRESS, "pending"), (BuildLabel.SUCCESSFUL, "success"), (BuildLabel.FAILED, "failure")],
    )
    def test_maps_label_to_commit_state(self, label, state):
        repo = MagicMock()
        record = BuildStatusRecord(state=label, key="ci/build", name="42", url="http://ci/42", description="x" * 200)

        GitHubClient(repo, "ci-bot").post_build_status(SHA, record)

        repo.get_commit.assert_called_once_with(SHA)
        repo.get_commit.return_value.create_status.assert_called_once_with(
            state=state, target_url="http://ci/42", description="x" * 140, context="ci/build"
        )

    def test_error_is_remote_write_error(self):
        repo = MagicMock()
        repo.get_commit.return_value.create_status.side_effect = _gh_error(422)
        record = BuildStatusRecord(BuildLabel.FAILED, "k", "1", "u", "")
        with pytest.raises(RemoteWriteError):
            GitHubClient(repo, "ci-bot").post_build_status(SHA, record)

    def test_connection_error_is_remote_write_error(self):
        repo = MagicMock()
        repo.get_commit.side_effect = requests.exceptions.ConnectionError("refused")
        record = BuildStatusRecord(BuildLabel.FAILED, "k", "1", "u", "")
        with pytest.raises(RemoteWriteError):
            GitHubClient(repo, "ci-bot").post_build_status(SHA, record)


class TestFromToken:
    def test_resolves_repo_and_login(self, mocker):
        mock_github = mocker.patch("prstatus_core.providers.github.Github")
        mock_github.return_value.get_user.return_value.login = "ci-bot"

        client = GitHubClient.from_token("owner/repo", "tok")

        mock_github.assert_called_once_with("tok")
        mock_github.return_value.get_repo.assert_called_once_with("owner/repo")
        assert client._login == "ci-bot"

    def test_failure_is_remote_list_error(self, mocker):
        mock_github = mocker.patch("prstatus_core.providers.github.Github")
        mock_github.return_value.get_repo.side_effect = _gh_error(404)
        with pytest.raises(RemoteListError, match="owner/repo"):
            GitHubClient.from_token("owner/repo", "tok")
