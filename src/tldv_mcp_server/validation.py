"""Input validation with a tagged result.

`validate` parses raw input against one of the schema models and returns
either `Valid` (holding the parsed model) or `Invalid` (holding the list
of constraint violations). Callers branch on the result type and never
handle pydantic exceptions themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message


@dataclass(frozen=True)
class Valid(Generic[M]):
    value: M


@dataclass(frozen=True)
class Invalid:
    violations: List[Violation] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "Validation failed: " + "; ".join(str(v) for v in self.violations)


Result = Union[Valid[M], Invalid]


def _violations(exc: ValidationError) -> List[Violation]:
    out: List[Violation] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        # Strip pydantic's "Value error, " prefix from custom validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append(Violation(loc, msg))
    return out


def validate(model: Type[M], raw: Optional[Mapping[str, Any]]) -> Result:
    """Parse `raw` into `model`.

    Args:
        model: Target schema model.
        raw: Mapping of wire (alias) names or attribute names. None is
            treated as an empty mapping.

    Returns:
        `Valid(value)` or `Invalid(violations)`.
    """

    if raw is None:
        raw = {}
    if isinstance(raw, model):
        return Valid(raw)
    if not isinstance(raw, Mapping):
        return Invalid([Violation("", "input must be an object")])
    try:
        return Valid(model.model_validate(dict(raw)))
    except ValidationError as exc:
        return Invalid(_violations(exc))
