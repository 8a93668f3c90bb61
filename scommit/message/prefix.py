"""Prefix Chooser - Pick a conventional-commit prefix for a change set."""

from enum import Enum

from scommit.git.analyzer import ChangeStatus, StagedChangeSet
from scommit.git.categorizer import Category
from scommit.message.errors import InvalidInput


class Prefix(str, Enum):
    DOCS = "docs"
    TEST = "test"
    CHORE = "chore"
    FEAT = "feat"
    REFACTOR = "refactor"

    def __str__(self) -> str:
        return self.value


# Single-category change sets map straight to a prefix, checked in this order
_UNIFORM_PREFIXES = [
    (Category.DOCS, Prefix.DOCS),
    (Category.TESTS, Prefix.TEST),
    (Category.CONFIG, Prefix.CHORE),
]


def choose_prefix(changes: StagedChangeSet) -> Prefix:
    """Pick the prefix for a non-empty change set. First matching rule wins."""
    if changes.is_empty:
        raise InvalidInput("Cannot choose a prefix for an empty change set")

    categories = [f.category for f in changes.files]
    for category, prefix in _UNIFORM_PREFIXES:
        if all(c is category for c in categories):
            return prefix

    adds_new_code = any(
        f.status is ChangeStatus.ADDED and f.category is Category.CODE
        for f in changes.files
    )
    if changes.total_deletions == 0 and adds_new_code:
        return Prefix.FEAT

    return Prefix.REFACTOR
