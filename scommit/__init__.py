"""
scommit

Smart commit messages from staged git changes, with an AI-assisted path
and a deterministic heuristic fallback.
"""

__version__ = "1.0.0"

# Hard cap for every subject, whichever path produced it
SUBJECT_LIMIT = 72

# Files named in the subject / listed in the body before collapsing
SUBJECT_FILE_LIMIT = 3
BODY_FILE_LIMIT = 12
