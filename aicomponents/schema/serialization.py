"""
Type-name registry for values stored in ``Message.extra``.

Extra values of component-specific types are written as
``{"_type": <registered name>, "_value": <json payload>}`` so a serialized
message can be rebuilt with the same concrete types. JSON-native values pass
through unchanged; anything else must be registered first. A plain dict that
happens to have exactly those two keys is escaped under the reserved name
``"_dict"`` so it decodes back to itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel

from aicomponents.core.exceptions import SerializationError

TYPE_KEY = "_type"
VALUE_KEY = "_value"
ESCAPED_DICT_NAME = "_dict"

_JSON_SCALARS = (str, int, float, bool)


@dataclass(frozen=True)
class _Entry:
    name: str
    tp: type
    dump: Callable[[Any], Any]
    load: Callable[[Any], Any]


def _codec_for(tp: type, item_type: Optional[type]) -> tuple[Callable[[Any], Any], Callable[[Any], Any]]:
    if issubclass(tp, BaseModel):
        return (lambda v: v.model_dump(mode="json")), tp.model_validate
    if item_type is not None:
        if issubclass(item_type, BaseModel):
            return (
                lambda v: [item.model_dump(mode="json") for item in v],
                lambda data: tp(item_type.model_validate(item) for item in data),
            )
        return (lambda v: list(v)), (lambda data: tp(item_type(item) for item in data))
    for base in _JSON_SCALARS:
        if issubclass(tp, base):
            return base, tp
    raise TypeError(f"Cannot derive a JSON codec for {tp.__name__}; register a BaseModel or scalar subclass")


class TypeNameRegistry:
    """Bidirectional name <-> type map with JSON codecs."""

    def __init__(self) -> None:
        self._by_name: Dict[str, _Entry] = {}
        self._by_type: Dict[type, _Entry] = {}

    def register(self, name: str, tp: Type[Any], *, item_type: Optional[type] = None) -> None:
        """Register ``tp`` under ``name``. Re-registering the same pair is a no-op.

        ``item_type`` is required for list subclasses and names the element type.
        """
        if name == ESCAPED_DICT_NAME:
            raise ValueError(f"Type name {name!r} is reserved")
        existing = self._by_name.get(name)
        if existing is not None:
            if existing.tp is tp:
                return
            raise ValueError(f"Type name {name!r} already registered for {existing.tp.__name__}")
        if tp in self._by_type:
            raise ValueError(f"{tp.__name__} already registered as {self._by_type[tp].name!r}")
        dump, load = _codec_for(tp, item_type)
        entry = _Entry(name=name, tp=tp, dump=dump, load=load)
        self._by_name[name] = entry
        self._by_type[tp] = entry

    def name_of(self, tp: type) -> Optional[str]:
        entry = self._by_type.get(tp)
        return entry.name if entry else None

    def type_of(self, name: str) -> Optional[type]:
        entry = self._by_name.get(name)
        return entry.tp if entry else None

    def encode(self, value: Any) -> Any:
        if value is None or type(value) in _JSON_SCALARS:
            return value
        entry = self._by_type.get(type(value))
        if entry is not None:
            return {TYPE_KEY: entry.name, VALUE_KEY: entry.dump(value)}
        if type(value) in (list, tuple):
            return [self.encode(v) for v in value]
        if type(value) is dict:
            out: Dict[str, Any] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError(f"Extra map keys must be strings, got {type(key).__name__}")
                out[key] = self.encode(item)
            if set(out) == {TYPE_KEY, VALUE_KEY}:
                return {TYPE_KEY: ESCAPED_DICT_NAME, VALUE_KEY: out}
            return out
        raise SerializationError(
            f"Type {type(value).__name__} has no registered name",
            details={"type": type(value).__name__},
        )

    def decode(self, data: Any) -> Any:
        if isinstance(data, list):
            return [self.decode(v) for v in data]
        if not isinstance(data, dict):
            return data
        if set(data) == {TYPE_KEY, VALUE_KEY}:
            if data[TYPE_KEY] == ESCAPED_DICT_NAME and isinstance(data[VALUE_KEY], dict):
                return {key: self.decode(item) for key, item in data[VALUE_KEY].items()}
            entry = self._by_name.get(data[TYPE_KEY])
            if entry is None:
                raise SerializationError(
                    f"Unknown type name {data[TYPE_KEY]!r}",
                    details={"type_name": data[TYPE_KEY]},
                )
            return entry.load(data[VALUE_KEY])
        return {key: self.decode(item) for key, item in data.items()}


default_name_registry = TypeNameRegistry()


def register_name(name: str, tp: Type[Any], *, item_type: Optional[type] = None, registry: Optional[TypeNameRegistry] = None) -> None:
    (registry or default_name_registry).register(name, tp, item_type=item_type)
