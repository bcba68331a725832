from __future__ import annotations

import logging
from typing import Any, Optional

from .prompt_io import ConsolePromptIO, PromptIO
from .properties import DescriptorTable, Validator, default_descriptor_table

logger = logging.getLogger(__name__)


class ValidatedInputReader:
    """Runs the prompt -> read -> validate -> retry cycle for one property.

    The reader never returns an invalid value. Blank (or otherwise invalid)
    input while updating keeps the old value; without an old value the
    property's error message is shown and another line is read.
    """

    def __init__(
        self,
        table: Optional[DescriptorTable] = None,
        prompt_io: Optional[PromptIO] = None,
    ) -> None:
        self.table = table or default_descriptor_table()
        self.prompt_io: PromptIO = prompt_io or ConsolePromptIO()

    def read(
        self,
        name: str,
        old_value: Any = None,
        *,
        validator: Optional[Validator] = None,
        prompt: Optional[str] = None,
        error: Optional[str] = None,
    ) -> Any:
        descriptor = self.table.resolve(name)
        if validator is None and descriptor.requires_custom_validator:
            raise ValueError(f"Property {name} needs a caller supplied validator")
        is_valid = validator or descriptor.validate

        raw = self.prompt_io.input(prompt or descriptor.prompt(old_value))
        fallback_used = False
        while not is_valid(raw):
            logger.debug("Rejected input %r for %s", raw, name)
            if old_value is not None and not fallback_used:
                fallback_used = True
                raw = descriptor.format(old_value)
                if is_valid(raw):
                    logger.debug("Keeping previous value for %s", name)
                    return old_value
                logger.debug("Previous value for %s no longer valid", name)
                continue
            self.prompt_io.print(error or descriptor.error_text)
            raw = self.prompt_io.input(prompt or descriptor.prompt(old_value))
            fallback_used = False
        return descriptor.coerce(raw)

    def ask_yes_no(self, prompt: str) -> bool:
        return bool(self.read("yesNo", prompt=prompt))
