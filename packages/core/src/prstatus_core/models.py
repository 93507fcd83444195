"""Descriptors passed through a build notification.

Pull requests and builds are supplied by the caller and never mutated.
Comments belong to the remote platform: they are read and written through
a provider client and never cached between calls.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class BuildPhase(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"


class BuildOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class BuildLabel(str, Enum):
    """Tri-state label shown in comments and build-status records.

    Values are the Bitbucket build-status wire values.
    """

    INPROGRESS = "INPROGRESS"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"


class LifecycleEvent(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"


class OutcomeKind(str, Enum):
    EXISTING = "Existing"
    UPDATE = "Update"
    POST = "Post"
    ERROR = "Error"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class User:
    name: str
    email: str = ""


@dataclass(frozen=True)
class PullRequest:
    id: int
    web_url: str
    from_ref: str
    from_commit: str
    title: str
    author: User


@dataclass(frozen=True)
class BuildDetails:
    """A normalised build.

    ``id`` is the build-run number, ``build_id`` the build identifier
    (used as the build-status key). ``status`` is only meaningful once
    ``state`` is FINISHED.
    """

    id: int
    build_id: str
    web_url: str
    state: BuildPhase
    status: BuildOutcome | None = None
    status_text: str | None = None


@dataclass(frozen=True)
class Comment:
    id: int
    version: int
    text: str
    author: str = ""
    created_date: int = 0
    updated_date: int = 0


@dataclass(frozen=True)
class BuildStatusRecord:
    state: BuildLabel
    key: str
    name: str
    url: str
    description: str

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "key": self.key,
            "name": self.name,
            "url": self.url,
            "description": self.description,
        }


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result of one comment reconciliation. ``comment`` is None on ERROR."""

    kind: OutcomeKind
    pr: PullRequest
    build: BuildDetails
    comment: Comment | None = None


def _plain_dict(items) -> dict:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in items}


def to_payload(obj) -> dict:
    """Convert a descriptor dataclass into a JSON-friendly dict (enums become their values)."""
    return asdict(obj, dict_factory=_plain_dict)
