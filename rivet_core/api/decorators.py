"""Decorator that marks command classes with registry metadata."""

from __future__ import annotations

from typing import Any, Callable, Type

from .abc import RivetAbstractCommand

_CommandClass = Type[Any]

FEATURE_ATTRIBUTE = "__rivet_feature__"


def _attach_feature_metadata(cls: type, *, name: str | None, group: str) -> type:
    metadata = {
        "name": name or cls.__name__.lower(),
        "group": group,
    }
    metadata["qualified_name"] = f"{metadata['group']}:{metadata['name']}"
    setattr(cls, FEATURE_ATTRIBUTE, metadata)
    return cls


def rivetcommand(
    cls: _CommandClass | None = None,
    *,
    name: str | None = None,
    group: str = "rivet",
) -> Callable[[_CommandClass], _CommandClass] | _CommandClass:
    """Attach ``group``/``name`` metadata so the class can be registered."""

    def wrap(target: _CommandClass) -> _CommandClass:
        if not isinstance(target, type):
            raise TypeError("Decorated object must be a class.")
        if not issubclass(target, RivetAbstractCommand):
            raise TypeError(
                f"{target.__name__} must subclass RivetAbstractCommand to be registered as a command."
            )
        return _attach_feature_metadata(target, name=name, group=group)

    if cls is None:
        return wrap
    return wrap(cls)
