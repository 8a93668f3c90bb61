"""Git Analyzer - Extract staged changes from git."""

import logging
import re
import subprocess
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scommit.git.categorizer import Category, categorize

logger = logging.getLogger(__name__)


class ChangeStatus(Enum):
    """How a staged file changed."""
    ADDED = "add"
    MODIFIED = "update"
    DELETED = "remove"
    RENAMED = "rename"

    @classmethod
    def from_code(cls, code: str) -> 'ChangeStatus':
        """Map a `git diff --name-status` code (A, M, D, R100, ...) to a status."""
        letter = code.strip()[:1].upper()
        if letter == 'R':
            return cls.RENAMED
        if letter in ('A', 'C'):
            return cls.ADDED
        if letter == 'D':
            return cls.DELETED
        return cls.MODIFIED


@dataclass(frozen=True)
class FileChange:
    """Represents a single file's changes.

    For renames, ``path`` is the new location and ``old_path`` the previous one.
    Binary files carry zero additions and deletions.
    """
    path: str
    additions: int = 0
    deletions: int = 0
    status: ChangeStatus = ChangeStatus.MODIFIED
    old_path: Optional[str] = None

    def __post_init__(self):
        if not self.path:
            raise ValueError("FileChange.path must be non-empty")
        if self.additions < 0 or self.deletions < 0:
            raise ValueError(f"Negative line counts for {self.path}")
        if self.status is ChangeStatus.RENAMED and not self.old_path:
            raise ValueError(f"Rename of {self.path} is missing its source path")

    @property
    def category(self) -> Category:
        return categorize(self.path)

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions

    @property
    def from_path(self) -> str:
        return self.old_path if self.status is ChangeStatus.RENAMED else self.path

    @property
    def to_path(self) -> str:
        return self.path

    @property
    def short_name(self) -> str:
        return self.path.rstrip('/').rsplit('/', 1)[-1] or self.path


@dataclass(frozen=True)
class StagedChangeSet:
    """Complete picture of what's staged for commit.

    Aggregates are computed on access; the set itself never changes.
    """
    files: tuple[FileChange, ...] = field(default_factory=tuple)
    diff: str = ""

    def __post_init__(self):
        if not isinstance(self.files, tuple):
            object.__setattr__(self, 'files', tuple(self.files))

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def total_deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    @property
    def category_counts(self) -> Counter:
        return Counter(f.category for f in self.files)

    @property
    def new_files(self) -> int:
        return sum(1 for f in self.files if f.status is ChangeStatus.ADDED)

    @property
    def removed_files(self) -> int:
        return sum(1 for f in self.files if f.status is ChangeStatus.DELETED)

    @property
    def is_empty(self) -> bool:
        return len(self.files) == 0


class GitError(Exception):
    """Raised when git operations fail."""
    pass


# "src/{old => new}/mod.py" or "old.py => new.py" in --numstat output
_BRACE_RENAME_RE = re.compile(r'^(.*)\{(.*) => (.*)\}(.*)$')


def _numstat_target(path: str) -> str:
    """Resolve the destination path from numstat rename notation."""
    match = _BRACE_RENAME_RE.match(path)
    if match:
        prefix, _, new, suffix = match.groups()
        return (prefix + new + suffix).replace('//', '/')
    if ' => ' in path:
        return path.split(' => ', 1)[1]
    return path


def _parse_count(value: str) -> int:
    """numstat reports '-' for binary files; those count as zero."""
    value = value.strip()
    return int(value) if value.isdigit() else 0


def parse_numstat(output: str) -> dict[str, tuple[int, int]]:
    """Parse 'git diff --cached --numstat' into {path: (additions, deletions)}."""
    counts = {}
    for line in output.splitlines():
        parts = line.split('\t')
        if len(parts) < 3:
            continue
        path = _numstat_target(parts[-1].strip())
        counts[path] = (_parse_count(parts[0]), _parse_count(parts[1]))
    return counts


def parse_name_status(output: str, counts: dict[str, tuple[int, int]]) -> list[FileChange]:
    """Parse 'git diff --cached --name-status' into FileChange records.

    Order follows git's output. Counts missing from numstat default to zero.
    """
    files = []
    for line in output.splitlines():
        parts = [p.strip() for p in line.split('\t')]
        if len(parts) < 2 or not parts[1]:
            continue

        status = ChangeStatus.from_code(parts[0])
        old_path = None
        path = parts[1]
        if status is ChangeStatus.RENAMED:
            if len(parts) < 3 or not parts[2]:
                logger.debug("Rename without target, treating as modification: %s", line)
                status = ChangeStatus.MODIFIED
            else:
                old_path, path = parts[1], parts[2]
        elif parts[0].upper().startswith('C') and len(parts) >= 3:
            path = parts[2]

        additions, deletions = counts.get(path, counts.get(parts[1], (0, 0)))
        files.append(FileChange(
            path=path,
            additions=additions,
            deletions=deletions,
            status=status,
            old_path=old_path,
        ))
    return files


class GitAnalyzer:
    """Extracts staged changes from git. Never modifies the repository."""

    DIFF_EXCERPT_CHARS = 4000
    # Report non-ASCII paths verbatim instead of C-quoted
    UNQUOTED_PATHS = ('-c', 'core.quotePath=false')

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_staged_changes(self) -> StagedChangeSet:
        """Get staged changes only."""
        counts = parse_numstat(
            self._run_git(*self.UNQUOTED_PATHS, 'diff', '--cached', '--numstat', '-M')
        )
        files = parse_name_status(
            self._run_git(*self.UNQUOTED_PATHS, 'diff', '--cached', '--name-status', '-M'), counts
        )
        diff = self._run_git('diff', '--cached', '--unified=3', '--no-color')
        logger.debug("Found %d staged file(s)", len(files))
        return StagedChangeSet(files=tuple(files), diff=diff[:self.DIFF_EXCERPT_CHARS])

    def get_recent_subjects(self, count: int = 6) -> list[str]:
        """Subjects of the last `count` commits, newest first."""
        if count <= 0:
            return []
        try:
            output = self._run_git('log', '-n', str(count), '--pretty=%s')
        except GitError:
            # A repository without commits has no log yet
            logger.debug("No commit history available")
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]
