"""Journal export functionality."""

import json
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import structlog

from .models import JournalEntry

logger = structlog.get_logger()


def _entry_record(entry: JournalEntry) -> dict:
    record = asdict(entry)
    del record["owner"]
    record["sentiment"] = str(entry.sentiment)
    for key in ("created_at", "updated_at"):
        record[key] = record[key].isoformat() if record[key] else None
    return record


class JournalExporter:
    """Export one owner's journal entries to JSON or Markdown."""

    def __init__(self, storage, clock=None):
        self.storage = storage
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def collect(self, owner: str, days: Optional[int] = None) -> dict:
        """All of the owner's entries (oldest first), optionally only the last N days."""
        now = self._clock()
        since = now - timedelta(days=days) if days else None
        entries = self.storage.find_by_owner_since(owner, since)
        return {
            "owner": owner,
            "export_date": now.isoformat(),
            "count": len(entries),
            "entries": [_entry_record(e) for e in entries],
        }

    def export_json(self, owner: str, output_path: Path, days: Optional[int] = None) -> int:
        """Export entries to JSON.

        Args:
            owner: Whose entries to export
            output_path: Output file path
            days: Only include entries from last N days

        Returns:
            Number of entries exported
        """
        data = self.collect(owner, days)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("journal.exported", owner=owner, count=data["count"], fmt="json")
        return data["count"]

    def export_markdown(self, owner: str, output_path: Path, days: Optional[int] = None) -> int:
        """Export entries as one Markdown document, a section per entry."""
        data = self.collect(owner, days)

        lines = [
            "# Journal Export",
            "",
            f"Exported: {data['export_date'][:16].replace('T', ' ')}",
            f"Entries: {data['count']}",
            "",
            "---",
            "",
        ]
        for entry in data["entries"]:
            lines.append(f"## {entry['created_at'][:10]}")
            lines.append("")
            lines.append(
                f"**Mood:** {entry['mood']}/10 | **Productivity:** {entry['productivity']}/10"
                f" | **Sentiment:** {entry['sentiment']}"
            )
            if entry["tags"]:
                lines.append(f"**Tags:** {', '.join(entry['tags'])}")
            if entry["gratitude"]:
                lines.append(f"**Grateful for:** {', '.join(entry['gratitude'])}")
            lines.append("")
            lines.append(entry["content"])
            lines.append("")
            lines.append("---")
            lines.append("")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write("\n".join(lines))

        logger.info("journal.exported", owner=owner, count=data["count"], fmt="markdown")
        return data["count"]
