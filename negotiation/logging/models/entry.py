from typing import Any

import msgspec

from .log_level import LogLevel


class Entry(msgspec.Struct, kw_only=True):
    """
    Base log record. Subclasses add their own fields and pin a default
    level, every field is available to templates by name.
    """

    message: str
    level: LogLevel

    def to_template(
        self,
        template: str,
        context: dict[str, Any] | None = None,
    ) -> str:
        values = msgspec.structs.asdict(self)
        values["level"] = self.level.value

        if context:
            values.update(context)

        return template.format(**values)
