"""Response Sanitizer - Turn a raw AI reply into a CommitMessage.

Two strict stages: pull the first balanced JSON object out of the text,
then validate it against the {subject, body} schema. Anything that doesn't
fit raises a ResponseError subclass; nothing is guessed.
"""

import json
import re

from scommit.message.builder import CommitMessage, GenerationPath, truncate_subject
from scommit.message.errors import MalformedResponse, MissingField

_FENCE_RE = re.compile(r'^\s*```[\w-]*\s*$')
_BULLET_RE = re.compile(r'^[-•*]\s*')


def _strip_fences(text: str) -> str:
    lines = [line for line in text.strip().split('\n') if not _FENCE_RE.match(line)]
    return '\n'.join(lines).strip()


def _balanced_object_end(text: str, start: int) -> int | None:
    """Index just past the object opened at `start`, or None if it never closes."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def sanitize_json_blob(raw: str) -> str:
    """Extract the first balanced {...} span, dropping code fences and prose."""
    if not raw or not raw.strip():
        raise MalformedResponse("AI response is empty")

    text = _strip_fences(raw)
    start = text.find('{')
    while start != -1:
        end = _balanced_object_end(text, start)
        if end is not None:
            return text[start:end]
        start = text.find('{', start + 1)

    raise MalformedResponse(f"AI response has no JSON object: {raw.strip()[:200]}")


def _body_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        bullets = [_BULLET_RE.sub('', item.strip()) for item in value]
        return '\n'.join(f"- {b}" for b in bullets if b)
    raise MalformedResponse(f"'body' must be a string or a list of strings, got {type(value).__name__}")


def parse_payload(blob: str) -> dict:
    """Parse a sanitized blob into {'subject': str, 'body': str}."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"AI response is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedResponse("AI response JSON is not an object")

    subject = data.get('subject')
    if subject is None or (isinstance(subject, str) and not subject.strip()):
        raise MissingField('subject')
    if not isinstance(subject, str):
        raise MalformedResponse(f"'subject' must be a string, got {type(subject).__name__}")

    return {'subject': subject, 'body': _body_text(data.get('body'))}


def _normalize(text: str) -> str:
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return '\n'.join(line.rstrip() for line in text.split('\n')).strip('\n')


def coerce_body(parsed: dict) -> CommitMessage:
    """Normalize a parsed payload and enforce the subject cap."""
    subject = ' '.join(_normalize(parsed['subject']).split())
    return CommitMessage(
        subject=truncate_subject(subject),
        body=_normalize(parsed.get('body', '')),
        path=GenerationPath.AI,
    )


def parse_ai_response(raw: str) -> CommitMessage:
    return coerce_body(parse_payload(sanitize_json_blob(raw)))
