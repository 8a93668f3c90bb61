"""Subject and body builders for the heuristic path."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from scommit import SUBJECT_LIMIT, SUBJECT_FILE_LIMIT, BODY_FILE_LIMIT
from scommit.git.analyzer import ChangeStatus, FileChange, StagedChangeSet
from scommit.message.prefix import Prefix, choose_prefix

ELLIPSIS = "..."
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


class GenerationPath(Enum):
    """Which path produced a commit message."""
    AI = "ai"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class CommitMessage:
    """Final subject and body handed to whoever performs the commit."""
    subject: str
    body: str = ""
    path: GenerationPath = GenerationPath.HEURISTIC

    def __post_init__(self):
        if '\n' in self.subject:
            raise ValueError("Commit subject must be a single line")
        if len(self.subject) > SUBJECT_LIMIT:
            raise ValueError(f"Commit subject exceeds {SUBJECT_LIMIT} characters")

    def with_subject(self, subject: str) -> 'CommitMessage':
        """Same body and path, new subject (capped like any other)."""
        return replace(self, subject=truncate_subject(' '.join(subject.split())))

    @property
    def text(self) -> str:
        if not self.body:
            return self.subject
        return f"{self.subject}\n\n{self.body}"


def rank_files(changes: StagedChangeSet) -> list[FileChange]:
    """Most-changed files first; equal volumes keep their input order.

    Shared by the subject and body builders so both pick the same files.
    """
    return sorted(changes.files, key=lambda f: f.total_changes, reverse=True)


def truncate_subject(text: str, limit: int = SUBJECT_LIMIT) -> str:
    """Cap `text` at `limit` characters, cutting at a word boundary when possible."""
    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]

    room = limit - len(ELLIPSIS)
    cut = text[:room]
    boundary = cut.rfind(' ')
    # A boundary too far back would throw away most of the text
    if boundary > room // 2:
        cut = cut[:boundary]
    cut = cut.rstrip(' ,;')
    return (cut or text[:room]) + ELLIPSIS


def _render_subject(prefix: str, names: list[str], hidden: int) -> str:
    focus = ", ".join(names) if names else "update files"
    more = f" (+{hidden} more)" if hidden else ""
    return f"{prefix}: {focus}{more}"


def build_subject(prefix: Prefix, changes: StagedChangeSet) -> str:
    """Render "<prefix>: a.py, b.py, c.py (+N more)" within the subject limit.

    Names are dropped from the end before any hard truncation happens.
    """
    ranked = rank_files(changes)
    names = [f.short_name for f in ranked[:SUBJECT_FILE_LIMIT]]
    hidden = len(ranked) - len(names)

    subject = _render_subject(str(prefix), names, hidden)
    while len(subject) > SUBJECT_LIMIT and len(names) > 1:
        names.pop()
        hidden += 1
        subject = _render_subject(str(prefix), names, hidden)
    return truncate_subject(subject)


def format_entry(change: FileChange) -> str:
    counts = f"(+{change.additions}/-{change.deletions})"
    if change.status is ChangeStatus.RENAMED:
        return f"{change.old_path} -> {change.path} {counts}"
    return f"{change.path} {counts}"


def format_timestamp(timestamp: datetime | str) -> str:
    if isinstance(timestamp, datetime):
        return timestamp.strftime(TIMESTAMP_FORMAT)
    return str(timestamp)


def build_body(changes: StagedChangeSet, timestamp: datetime | str) -> str:
    """List the most-changed files with +/- counts, then the generation time."""
    if changes.is_empty:
        return ""

    ranked = rank_files(changes)
    lines = [format_entry(f) for f in ranked[:BODY_FILE_LIMIT]]

    hidden = len(ranked) - BODY_FILE_LIMIT
    if hidden > 0:
        lines.append(f"... {hidden} more file(s) not listed")

    lines.append("")
    lines.append(f"Generated {format_timestamp(timestamp)}")
    return "\n".join(lines)


def build_heuristic_message(changes: StagedChangeSet, timestamp: datetime | str) -> CommitMessage:
    """Deterministic message for a non-empty change set."""
    prefix = choose_prefix(changes)
    return CommitMessage(
        subject=build_subject(prefix, changes),
        body=build_body(changes, timestamp),
        path=GenerationPath.HEURISTIC,
    )
