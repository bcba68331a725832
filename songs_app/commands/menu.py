from __future__ import annotations

from typing import Optional

from ..prompt_io import PromptIO


def read_option(prompt_io: PromptIO, prompt: str = "Enter option: ") -> Optional[int]:
    raw = prompt_io.input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        return None
