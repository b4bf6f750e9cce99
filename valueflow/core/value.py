"""Value records for ValueFlow

A Value is what the analyzer knows about one name at one source line:
an optional concrete payload and the inferred type.
"""

from dataclasses import dataclass, replace
from typing import Any

from valueflow.core.type_system import Type


@dataclass(frozen=True)
class Value:
    """Inferred value of a variable, parameter or expression

    Attributes:
        name: Variable, parameter or synthetic positional name
        value: Concrete payload, a tuple of element Values for arrays,
            or None when unresolved
        type: Inferred type descriptor
        line: Source line the value was derived from
    """
    name: str
    value: Any
    type: Type
    line: int

    def with_name(self, name: str) -> 'Value':
        """Get a copy of this value bound to another name"""
        return replace(self, name=name)

    @property
    def is_resolved(self) -> bool:
        return self.value is not None

    @property
    def type_label(self) -> str:
        return self.type.describe()

    def __repr__(self) -> str:
        return (
            f"Value(name={self.name!r}, value={self.value!r}, "
            f"type={self.type_label!r}, line={self.line})"
        )
