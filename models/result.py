from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ActionResult:
    """Outcome of a mutating operation.

    ``value`` carries the created/updated entity (or import stats), ``count``
    the number of records applied by a bulk import.
    """
    success: bool
    message: Optional[str] = None
    value: Any = None
    count: Optional[int] = None

    @classmethod
    def ok(cls, value: Any = None, count: Optional[int] = None) -> "ActionResult":
        return cls(success=True, value=value, count=count)

    @classmethod
    def fail(cls, message: str) -> "ActionResult":
        return cls(success=False, message=message)
