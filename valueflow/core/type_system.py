"""Type system for ValueFlow

Defines type descriptors for inferred values. Types are kept as tagged
records internally and only formatted into descriptor strings
(``int``, ``int[]``, ``array<string, mixed>``, ``int|string``, ``mixed``)
when they are reported.
"""

from enum import Enum
from typing import Iterable, List, Optional
from dataclasses import dataclass, field


class TypeKind(Enum):
    """Type categories for inferred values"""
    UNKNOWN = 0      # mixed
    PRIMITIVE = 1    # int, float, string, array, declared labels
    HOMOGENEOUS = 2  # T[]
    MAPPING = 3      # array<K, V>
    UNION = 4        # A|B


UNKNOWN_LABEL = "mixed"
UNION_DELIMITER = "|"


@dataclass
class Type:
    """Type information for values and parameters"""
    kind: TypeKind
    label: Optional[str] = None
    subtypes: List['Type'] = field(default_factory=list)

    @classmethod
    def unknown(cls) -> 'Type':
        return cls(TypeKind.UNKNOWN)

    @classmethod
    def primitive(cls, label: str) -> 'Type':
        return cls(TypeKind.PRIMITIVE, label=label)

    @classmethod
    def homogeneous(cls, element: 'Type') -> 'Type':
        return cls(TypeKind.HOMOGENEOUS, subtypes=[element])

    @classmethod
    def mapping(cls, key: 'Type', value: 'Type') -> 'Type':
        return cls(TypeKind.MAPPING, subtypes=[key, value])

    @classmethod
    def union(cls, members: Iterable['Type']) -> 'Type':
        """Build a union, keeping members in the order given

        Duplicates are kept: a union records every contributing candidate.
        """
        return cls(TypeKind.UNION, subtypes=list(members))

    @classmethod
    def array_of(cls, key: Optional['Type'], value: Optional['Type']) -> 'Type':
        """Build the type of an array literal from unified key/value types

        Args:
            key: Unified key type (None when the array has no elements)
            value: Unified value type (None when the array has no elements)

        Returns:
            ``T[]`` if key and value agree, ``array<K, V>`` otherwise
        """
        if key is None and value is None:
            return cls.primitive("array")
        if key == value:
            return cls.homogeneous(value)
        return cls.mapping(key or cls.unknown(), value or cls.unknown())

    @classmethod
    def declared(cls, label: Optional[str]) -> 'Type':
        """Wrap a declared annotation, keeping its spelling

        Returns:
            Unknown for a missing annotation, otherwise the label as written
        """
        if not label or label == UNKNOWN_LABEL:
            return cls.unknown()
        return cls.primitive(label)

    @classmethod
    def parse(cls, label: Optional[str]) -> 'Type':
        """Read a descriptor string back into a Type

        Args:
            label: Descriptor such as ``int``, ``string[]`` or ``int|null``

        Returns:
            Parsed type; ``None`` or empty labels parse as unknown
        """
        if not label or label == UNKNOWN_LABEL:
            return cls.unknown()

        members = _split_top_level(label, UNION_DELIMITER)
        if len(members) > 1:
            return cls.union(cls.parse(m) for m in members)

        if label.endswith("[]"):
            return cls.homogeneous(cls.parse(label[:-2]))

        if label.startswith("array<") and label.endswith(">"):
            parts = _split_top_level(label[len("array<"):-1], ",")
            if len(parts) == 2:
                return cls.mapping(cls.parse(parts[0].strip()), cls.parse(parts[1].strip()))

        return cls.primitive(label)

    def is_unknown(self) -> bool:
        return self.kind == TypeKind.UNKNOWN

    def is_union(self) -> bool:
        return self.kind == TypeKind.UNION

    def describe(self) -> str:
        """Get the descriptor string for this type"""
        if self.kind == TypeKind.UNKNOWN:
            return UNKNOWN_LABEL
        elif self.kind == TypeKind.PRIMITIVE:
            return self.label or UNKNOWN_LABEL
        elif self.kind == TypeKind.HOMOGENEOUS:
            return f"{self.subtypes[0].describe()}[]"
        elif self.kind == TypeKind.MAPPING:
            key, value = self.subtypes
            return f"array<{key.describe()}, {value.describe()}>"
        elif self.kind == TypeKind.UNION:
            return UNION_DELIMITER.join(t.describe() for t in self.subtypes)
        else:
            return UNKNOWN_LABEL

    def __str__(self) -> str:
        return self.describe()


INT = Type.primitive("int")
FLOAT = Type.primitive("float")
STRING = Type.primitive("string")
ARRAY = Type.primitive("array")


def unify(current: Optional[Type], observed: Type) -> Type:
    """Unify an observed element type into the running one

    Args:
        current: Type unified so far (None before the first element)
        observed: Type of the next element

    Returns:
        ``observed`` if it agrees with ``current``, unknown otherwise
    """
    if current is None or current == observed:
        return observed
    return Type.unknown()


def _split_top_level(text: str, delimiter: str) -> List[str]:
    # Splits on delimiter outside of <...> brackets
    parts = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif ch == delimiter and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts
