from enum import IntEnum, StrEnum
from typing import Any


class SeverityColor(StrEnum):
    red = "red"
    orange = "orange"
    green = "green"


class Severity(IntEnum):
    info = 1
    critical = 2
    warning = 3

    @classmethod
    def coerce(cls, value: Any) -> "Severity":
        """Anything but an explicit critical or warning is informational."""
        try:
            severity = int(value)
        except (TypeError, ValueError):
            return cls.info
        if severity in (cls.critical, cls.warning):
            return cls(severity)
        return cls.info

    @property
    def color(self) -> SeverityColor:
        if self is Severity.critical:
            return SeverityColor.red
        if self is Severity.warning:
            return SeverityColor.orange
        return SeverityColor.green
