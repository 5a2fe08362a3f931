"""Tagged variants for source registry mutations.

The ``manage_sources`` tool receives a loose argument dict keyed by an
``action`` discriminator.  :func:`parse_action` decodes it exactly once into
one of four frozen models, each carrying only the fields its action needs,
so missing or mistyped arguments are rejected before any storage access.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, TypeAdapter, ValidationError

from newsbrief.exceptions import InvalidArgumentError, MissingFieldError

_ACTIONS = ("add", "remove", "toggle", "set_active")


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class _MatchAction(_Action):
    """Shared selector: match by URL if provided, else by name."""

    url: str | None = None
    name: str | None = None

    @property
    def match(self) -> str:
        return self.url or self.name or ""


class AddSource(_Action):
    action: Literal["add"] = "add"
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    active: StrictBool = True


class RemoveSource(_MatchAction):
    action: Literal["remove"] = "remove"


class ToggleSource(_MatchAction):
    action: Literal["toggle"] = "toggle"


class SetActiveSource(_MatchAction):
    action: Literal["set_active"] = "set_active"
    active: StrictBool


SourceAction = Annotated[
    Union[AddSource, RemoveSource, ToggleSource, SetActiveSource],
    Field(discriminator="action"),
]

_adapter: TypeAdapter[SourceAction] = TypeAdapter(SourceAction)


def parse_action(arguments: dict[str, Any]) -> SourceAction:
    """Decode a raw ``manage_sources`` argument dict.

    ``None`` values are treated as absent so that optional JSON nulls from
    a model behave the same as omitted keys.

    Raises:
        MissingFieldError: A field required by the chosen action is absent,
            or neither ``url`` nor ``name`` selects an entry.
        InvalidArgumentError: Unknown action or a field of the wrong type.
    """
    data = {k: v for k, v in arguments.items() if v is not None}
    action = data.get("action")
    if action is None:
        raise MissingFieldError("manage_sources", ["action"])
    if action not in _ACTIONS:
        raise InvalidArgumentError(
            f"Unknown action: {action!r} (expected one of {', '.join(_ACTIONS)})"
        )

    try:
        parsed = _adapter.validate_python(data)
    except ValidationError as exc:
        raise _translate(action, exc) from None

    if isinstance(parsed, _MatchAction) and not parsed.match:
        raise MissingFieldError(action, ["url or name"])
    return parsed


def _translate(action: str, exc: ValidationError) -> InvalidArgumentError:
    missing: list[str] = []
    for err in exc.errors():
        field = str(err["loc"][-1]) if err["loc"] else "?"
        if field == "active":
            return InvalidArgumentError(f"{action} requires active boolean")
        if err["type"] in ("missing", "string_too_short"):
            missing.append(field)
            continue
        return InvalidArgumentError(f"Invalid {field} for {action}: {err['msg']}")
    return MissingFieldError(action, missing)
