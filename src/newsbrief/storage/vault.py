"""Report vault: markdown briefings persisted in an Obsidian folder."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from newsbrief.exceptions import ToolError
from newsbrief.models.config import DEFAULT_VAULT_PATH

logger = logging.getLogger(__name__)

REPORT_EXTENSION = ".md"
REPORT_PREFIX = "Daily-Briefing-"


def normalize_filename(filename: str) -> str:
    """Append the report extension unless ``filename`` already ends with it."""
    return filename if filename.endswith(REPORT_EXTENSION) else f"{filename}{REPORT_EXTENSION}"


def report_filename(day: date | None = None) -> str:
    """Standard briefing filename for ``day`` (today when omitted)."""
    day = day or date.today()
    return f"{REPORT_PREFIX}{day.isoformat()}{REPORT_EXTENSION}"


class ReportWriter:
    """Writes and reads reports in the vault directory.

    Writes overwrite silently: filenames are date-derived and the latest
    report for a day wins.
    """

    def __init__(self, vault_path: str | Path = DEFAULT_VAULT_PATH) -> None:
        self.vault_path = Path(vault_path)

    def path_for(self, filename: str) -> Path:
        """Location of ``filename`` inside the vault.

        Raises:
            ToolError: If the name resolves outside the vault directory
                (absolute paths, ``..`` segments).
        """
        path = self.vault_path / normalize_filename(filename)
        if not path.resolve().is_relative_to(self.vault_path.resolve()):
            raise ToolError(f"Report path escapes the vault: {filename}")
        return path

    def write(self, filename: str, content: str) -> Path:
        """Write ``content`` under the normalized ``filename``.

        Creates the vault directory if needed and returns the absolute path
        written.  Names that leave the vault raise ToolError; filesystem
        errors propagate to the caller.
        """
        full_path = self.path_for(filename)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        logger.info("Saved report %s (%d chars)", full_path, len(content))
        return full_path.absolute()

    def list_reports(self) -> list[str]:
        """Markdown filenames in the vault, newest name first."""
        if not self.vault_path.is_dir():
            return []
        names = [
            p.name for p in self.vault_path.iterdir()
            if p.is_file() and p.name.endswith(REPORT_EXTENSION)
        ]
        return sorted(names, reverse=True)

    def read_report(self, filename: str) -> str:
        """Return the text of a report.

        Raises:
            FileNotFoundError: If no such report exists.
        """
        return self.path_for(filename).read_text(encoding="utf-8")
