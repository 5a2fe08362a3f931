"""Prompts for the daily briefing run.

- **BRIEFING_SYSTEM_PROMPT** -- the standing procedure given to the agent.
- :func:`build_task_prompt` -- the per-run instruction naming the report file.
"""

from __future__ import annotations

from datetime import date

from newsbrief.storage.vault import report_filename

BRIEFING_SYSTEM_PROMPT: str = (
    "You are a Daily News Briefer.\n"
    "1. Call 'get_sources' to see what to read.\n"
    "2. For each active source, use 'fetch_url'.\n"
    "3. Synthesize all findings into one 'Daily Briefing' markdown report.\n"
    "4. Save it using 'save_to_obsidian' with today's date."
)


def build_task_prompt(day: date | None = None) -> str:
    """Instruction for one briefing run, with the date-stamped filename."""
    return f"Generate my daily briefing now. Use filename {report_filename(day)}"
