"""Decide whether a prior status comment can be reused, edited, or must be created."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from prstatus_core.models import Comment, OutcomeKind


@dataclass(frozen=True)
class CommentMatch:
    kind: OutcomeKind  # EXISTING | UPDATE | POST
    comment: Comment | None = None


def match_comment(candidates: Iterable[Comment], desired_text: str, commit_id: str) -> CommentMatch:
    """Classify the integration's own comments against the desired text.

    Precedence, first match wins in received order:
      1. a comment whose text equals ``desired_text`` → EXISTING (no write)
      2. a comment mentioning ``commit_id`` → UPDATE (edit that comment)
      3. otherwise → POST (create a new comment)
    """
    candidates = list(candidates)

    for comment in candidates:
        if comment.text == desired_text:
            return CommentMatch(OutcomeKind.EXISTING, comment)

    for comment in candidates:
        if commit_id in comment.text:
            return CommentMatch(OutcomeKind.UPDATE, comment)

    return CommentMatch(OutcomeKind.POST)
