"""Prompt text used by the orchestration loop."""

from newsbrief.prompts.briefing import BRIEFING_SYSTEM_PROMPT, build_task_prompt

__all__ = ["BRIEFING_SYSTEM_PROMPT", "build_task_prompt"]
