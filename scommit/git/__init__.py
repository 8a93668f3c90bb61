"""Git Operations Package"""

from scommit.git.analyzer import (
    GitAnalyzer, GitError, FileChange, ChangeStatus, StagedChangeSet,
    parse_numstat, parse_name_status,
)
from scommit.git.categorizer import Category, categorize

__all__ = [
    "GitAnalyzer",
    "GitError",
    "FileChange",
    "ChangeStatus",
    "StagedChangeSet",
    "parse_numstat",
    "parse_name_status",
    "Category",
    "categorize",
]
