"""Commit Message Engine"""

from scommit.message.errors import (
    MessageError, InvalidInput, ResponseError, MalformedResponse, MissingField,
)
from scommit.message.prefix import Prefix, choose_prefix
from scommit.message.builder import (
    CommitMessage, GenerationPath, rank_files, truncate_subject,
    build_subject, build_body, build_heuristic_message,
)
from scommit.message.sanitizer import sanitize_json_blob, parse_payload, coerce_body, parse_ai_response
from scommit.message.generator import MessageGenerator, GenerationState

__all__ = [
    "MessageError",
    "InvalidInput",
    "ResponseError",
    "MalformedResponse",
    "MissingField",
    "Prefix",
    "choose_prefix",
    "CommitMessage",
    "GenerationPath",
    "rank_files",
    "truncate_subject",
    "build_subject",
    "build_body",
    "build_heuristic_message",
    "sanitize_json_blob",
    "parse_payload",
    "coerce_body",
    "parse_ai_response",
    "MessageGenerator",
    "GenerationState",
]
