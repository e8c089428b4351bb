"""Typed access to one section of a YAML config mapping.

Every error names the dotted key it was raised for (`output.indent`,
`output.formats[1]`), so a bad config file points at the offending line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

T = TypeVar("T")

_MISSING: Any = object()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# kind -> (accepts value, name used in the error message)
_KINDS: dict[type, tuple[Callable[[Any], bool], str]] = {
    str: (lambda value: isinstance(value, str), "a string"),
    bool: (lambda value: isinstance(value, bool), "a boolean"),
    int: (_is_int, "an integer"),
}


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """A top-level config section and the name it was read under.

    Attributes:
        name: Section key in the root mapping, e.g. `log`.
        values: The section's own mapping.
    """

    name: str
    values: Mapping[str, Any]

    @classmethod
    def from_root(cls, root: Mapping[str, Any], name: str, *, required: bool = True) -> ConfigSection:
        """Pick section `name` out of the root mapping.

        Raises:
            ValueError: If the section is required and absent.
            TypeError: If the section is not a mapping.
        """
        values = root.get(name)
        if values is None:
            if required:
                raise ValueError(f"Missing required config: {name}")
            values = {}
        elif not isinstance(values, Mapping):
            raise TypeError(f"{name} must be an object")
        return cls(name=name, values=values)

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def _lookup(self, field: str, default: Any) -> Any:
        if field in self.values:
            return self.values[field]
        if default is _MISSING:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return default

    def value(self, field: str, kind: type[T], default: Any = _MISSING) -> T:
        """Return `field` checked against `kind` (str, bool or int).

        Omit `default` to make the field required. A present but null field
        fails the type check rather than falling back to the default.
        """
        raw = self._lookup(field, default)
        accepts, label = _KINDS[kind]
        if not accepts(raw):
            raise TypeError(f"{self.key(field)} must be {label}")
        return raw

    def str_list(self, field: str, default: Any = _MISSING) -> list[str]:
        raw = self._lookup(field, default)
        if not isinstance(raw, list):
            raise TypeError(f"{self.key(field)} must be a list")
        for idx, item in enumerate(raw):
            if not isinstance(item, str):
                raise TypeError(f"{self.key(field)}[{idx}] must be a string")
        return list(raw)
