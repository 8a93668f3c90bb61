"""Prompt Builder - Construct the AI prompt for a staged change set."""

import json
from dataclasses import dataclass

from scommit.git.analyzer import ChangeStatus, StagedChangeSet


@dataclass
class PromptConfig:
    """Limits on how much of the change set goes into the prompt."""
    max_files: int = 24
    max_diff_chars: int = 4000


class PromptBuilder:
    """Builds the user prompt: a JSON summary of the changes plus a diff excerpt."""

    def __init__(self, config: PromptConfig | None = None):
        self.config = config or PromptConfig()

    def summarize(self, changes: StagedChangeSet, recent_subjects: list[str] | tuple = ()) -> dict:
        """JSON-able summary of per-file categories and counts."""
        files = []
        for change in changes.files[:self.config.max_files]:
            entry = {
                "action": change.status.value,
                "path": change.path,
                "category": change.category.value,
                "additions": change.additions,
                "deletions": change.deletions,
            }
            if change.status is ChangeStatus.RENAMED:
                entry["from"] = change.old_path
            files.append(entry)

        return {
            "totals": {
                "files": changes.total_files,
                "additions": changes.total_additions,
                "deletions": changes.total_deletions,
                "new_files": changes.new_files,
                "removed_files": changes.removed_files,
            },
            "categories": {
                category.value: count
                for category, count in sorted(changes.category_counts.items(), key=lambda kv: kv[0].value)
            },
            "files": files,
            "omitted_files": max(changes.total_files - len(files), 0),
            "recent_subjects": list(recent_subjects),
        }

    def build(self, changes: StagedChangeSet, recent_subjects: list[str] | tuple = ()) -> str:
        sections = [
            self._build_summary_section(changes, recent_subjects),
            self._build_diff_section(changes),
            self._build_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_summary_section(self, changes: StagedChangeSet, recent_subjects) -> str:
        summary = json.dumps(self.summarize(changes, recent_subjects), indent=2)
        return f"<changes>\n{summary}\n</changes>"

    def _build_diff_section(self, changes: StagedChangeSet) -> str:
        if not changes.diff:
            return ""
        excerpt = changes.diff[:self.config.max_diff_chars]
        parts = ["<diff>", excerpt.rstrip()]
        if len(changes.diff) > self.config.max_diff_chars:
            parts.append("[Note: Diff was truncated due to size. Rely on the summary above for scope.]")
        parts.append("</diff>")
        return "\n".join(parts)

    def _build_instructions(self) -> str:
        return """<instructions>
Write 2-5 bullets that capture the most meaningful changes (what and why).
Call out new commands, flags, examples, or config and doc topics when present.
Note any behavioral impacts or risks. Match the tone of the recent subjects.

Respond with ONLY a JSON object: {"subject": "...", "body": ["- ...", "- ..."]}
</instructions>"""
