"""Categorizer - Classify a staged path into a semantic category."""

from enum import Enum
import re


class Category(Enum):
    """What kind of file a path points at."""
    DOCS = "docs"
    TESTS = "tests"
    CONFIG = "config"
    CODE = "code"
    OTHER = "other"


DOCS_PATTERNS: list[str] = [
    r'(^|/)docs?/', r'(^|/)documentation/',
    r'(^|/)README[^/]*$', r'(^|/)CHANGELOG[^/]*$', r'(^|/)LICENSE[^/]*$',
    r'(^|/)CONTRIBUTING[^/]*$', r'(^|/)AUTHORS[^/]*$',
    r'\.md$', r'\.markdown$', r'\.rst$', r'\.txt$', r'\.adoc$', r'\.org$',
]

TEST_PATTERNS: list[str] = [
    r'(^|/)tests?/', r'(^|/)specs?/', r'(^|/)__tests__/',
    r'test[^/]*$', r'spec[^/]*$', r'\.snap$',
]

CONFIG_PATTERNS: list[str] = [
    r'\.toml$', r'\.ya?ml$', r'\.json$', r'\.ini$', r'\.cfg$', r'\.conf$',
    r'\.lock$', r'\.env$', r'\.properties$',
    r'(^|/)Makefile$', r'(^|/)Dockerfile$', r'(^|/)docker-compose[^/]*$',
    r'(^|/)\.[^/]+$', r'(^|/)config/', r'(^|/)\.github/',
]

CODE_EXTENSIONS: frozenset[str] = frozenset({
    'py', 'pyi', 'rs', 'go', 'js', 'jsx', 'mjs', 'cjs', 'ts', 'tsx',
    'rb', 'java', 'kt', 'kts', 'c', 'h', 'cc', 'cpp', 'cxx', 'hpp',
    'swift', 'scala', 'php', 'cs', 'm', 'mm', 'lua', 'dart', 'ex', 'exs',
    'sh', 'bash', 'zsh', 'sql', 'vue', 'svelte',
})

_docs_re = [re.compile(p, re.IGNORECASE) for p in DOCS_PATTERNS]
_test_re = [re.compile(p, re.IGNORECASE) for p in TEST_PATTERNS]
_config_re = [re.compile(p, re.IGNORECASE) for p in CONFIG_PATTERNS]


def _extension(path: str) -> str:
    name = path.rsplit('/', 1)[-1]
    if '.' not in name.lstrip('.'):
        return ''
    return name.rsplit('.', 1)[-1].lower()


def categorize(path: str) -> Category:
    """Map a repo-relative path to exactly one category. First match wins."""
    path = path.replace('\\', '/')
    if any(p.search(path) for p in _docs_re):
        return Category.DOCS
    if any(p.search(path) for p in _test_re):
        return Category.TESTS
    if any(p.search(path) for p in _config_re):
        return Category.CONFIG
    if _extension(path) in CODE_EXTENSIONS:
        return Category.CODE
    return Category.OTHER
