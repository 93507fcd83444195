"""Build lifecycle → tri-state label → comment text.

The comment templates are read by people and by anything scraping the PR
discussion, so their wording (emoji and markdown link included) must not
change.
"""

from __future__ import annotations

from prstatus_core.models import (
    BuildDetails,
    BuildLabel,
    BuildOutcome,
    BuildPhase,
    BuildStatusRecord,
    LifecycleEvent,
)

_EVENT_LABELS = {
    LifecycleEvent.QUEUED: BuildLabel.INPROGRESS,
    LifecycleEvent.RUNNING: BuildLabel.INPROGRESS,
    LifecycleEvent.SUCCESS: BuildLabel.SUCCESSFUL,
    LifecycleEvent.FAILURE: BuildLabel.FAILED,
}

_EVENT_PHASES = {
    LifecycleEvent.QUEUED: (BuildPhase.QUEUED, None),
    LifecycleEvent.RUNNING: (BuildPhase.RUNNING, None),
    LifecycleEvent.SUCCESS: (BuildPhase.FINISHED, BuildOutcome.SUCCESS),
    LifecycleEvent.FAILURE: (BuildPhase.FINISHED, BuildOutcome.FAILURE),
}


def label_for(phase: BuildPhase, outcome: BuildOutcome | None = None) -> BuildLabel:
    """Queued and running are both INPROGRESS; a finished build is SUCCESSFUL only on success."""
    if phase != BuildPhase.FINISHED:
        return BuildLabel.INPROGRESS
    if outcome == BuildOutcome.SUCCESS:
        return BuildLabel.SUCCESSFUL
    return BuildLabel.FAILED


def label_for_event(event: LifecycleEvent) -> BuildLabel:
    return _EVENT_LABELS[LifecycleEvent(event)]


def text_for(label: BuildLabel, build_url: str, commit_id: str, status_message: str | None = None) -> str:
    """Render the status comment for a build of ``commit_id``."""
    message = status_message or ""
    if label == BuildLabel.INPROGRESS:
        return f"⏳ [Build]({build_url}) for commit {commit_id} queued"
    if label == BuildLabel.SUCCESSFUL:
        return f"✔️ [Build]({build_url}) for commit {commit_id} is **successful**: {message}"
    return f"❌ [Build]({build_url}) for commit {commit_id} has **failed**: {message}"


def make_status_record(build: BuildDetails) -> BuildStatusRecord:
    return BuildStatusRecord(
        state=label_for(build.state, build.status),
        key=build.build_id,
        name=str(build.id),
        url=build.web_url,
        description=build.status_text or "",
    )


def details_for_event(
    event: LifecycleEvent,
    run_id: int,
    build_key: str,
    web_url: str,
    status_text: str | None = None,
) -> BuildDetails:
    """Build a BuildDetails whose phase and outcome match a lifecycle event."""
    phase, outcome = _EVENT_PHASES[LifecycleEvent(event)]
    return BuildDetails(
        id=run_id,
        build_id=build_key,
        web_url=web_url,
        state=phase,
        status=outcome,
        status_text=status_text,
    )
