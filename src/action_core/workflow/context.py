from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from .result import capture


class ActionContext(Protocol):
    """Per-invocation handle supplied by the orchestrator.

    The core only reads from a context; it never constructs one on the
    orchestrator's behalf and never keeps it after returning.
    """

    @property
    def code(self) -> str: ...

    @property
    def parameters(self) -> Mapping[str, object]: ...

    def entity(self, name: str) -> object | None: ...

    def abort_requested(self) -> bool: ...


def _never() -> bool:
    return False


@dataclass(frozen=True, slots=True)
class SimpleActionContext:
    """Read-only ActionContext backed by plain mappings.

    Suitable for hosts without a richer process model, and for tests.
    """

    code: str = ""
    entities: Mapping[str, object] = field(default_factory=dict)
    parameters: Mapping[str, object] = field(default_factory=dict)
    abort_check: Callable[[], bool] = _never

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", MappingProxyType(dict(self.entities)))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def entity(self, name: str) -> object | None:
        return self.entities.get(name)

    def abort_requested(self) -> bool:
        return bool(self.abort_check())


_ID_FIELDS = ("code", "id", "pk")


def _identifier(entity: object) -> str | None:
    if entity is None:
        return None
    for name in _ID_FIELDS:
        if isinstance(entity, Mapping):
            value = entity.get(name)
        else:
            value = getattr(entity, name, None)
        if value is not None:
            return str(value)
    return None


def describe_entity(entity: object) -> str | None:
    """Best-effort identifier for log records (code, id or pk).

    Never raises: a lazily loaded attribute that fails yields None.
    """

    resolved = capture(_identifier, entity)
    return resolved.value if resolved.ok else None


def _code(context: object) -> str:
    code = getattr(context, "code", "")
    if code is None:
        return ""
    return code if isinstance(code, str) else str(code)


def context_code(context: object) -> str:
    """The context's `code` for log records, or "" if it cannot be read."""

    resolved = capture(_code, context)
    return resolved.value if resolved.ok else ""
