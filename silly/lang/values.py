"""Runtime values of the SILLY language.

Every value carries a Kind tag. Strings are tagged separately from Lists even though both are ordered sequences, so
that type tests stay exact. All values are immutable: operations build new values instead of mutating old ones.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from silly.lang.error import SillyRuntimeError


class Kind(Enum):
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    CHARACTER = "Character"
    LIST = "List"
    STRING = "String"


class DataValue(ABC):
    """Superclass of all runtime values. Subclasses set kind and define the key used for ordering."""
    kind: Kind

    @abstractmethod
    def _key(self):
        """Python object whose natural ordering is this value's ordering within its kind."""

    def compare_to(self, other):
        """Returns a negative number, zero, or a positive number as self is less than, equal to, or greater than
        other. Values of different kinds are not comparable.
        """
        if self.kind is not other.kind:
            raise SillyRuntimeError("type mismatch in comparison: {} is a {}, {} is a {}",
                                    (self, self.kind.value, other, other.kind.value))
        key, other_key = self._key(), other._key()
        return (key > other_key) - (key < other_key)

    @abstractmethod
    def __str__(self):
        """Textual rendering, as written by print."""


@dataclass(frozen=True)
class NumberValue(DataValue):
    number: float
    kind = Kind.NUMBER

    def _key(self):
        # NaN equals only itself and orders above every other number, +Infinity included
        if math.isnan(self.number):
            return (1, 0.0)
        return (0, self.number)

    @property
    def is_integer(self):
        return float(self.number).is_integer()

    def __str__(self):
        if math.isnan(self.number):
            return "NaN"
        elif math.isinf(self.number):
            return "Infinity" if self.number > 0 else "-Infinity"
        elif self.is_integer:
            return str(int(self.number))
        return repr(float(self.number))


@dataclass(frozen=True)
class BooleanValue(DataValue):
    flag: bool
    kind = Kind.BOOLEAN

    def _key(self):
        return self.flag

    def __str__(self):
        return "true" if self.flag else "false"


@dataclass(frozen=True)
class CharValue(DataValue):
    char: str
    kind = Kind.CHARACTER

    def _key(self):
        return self.char

    def __str__(self):
        return self.char


@dataclass(frozen=True)
class ListValue(DataValue):
    elements: tuple = ()
    kind = Kind.LIST

    def _key(self):
        return str(self)  # lists order by their rendering, not elementwise

    def __len__(self):
        return len(self.elements)

    def __str__(self):
        rendered = []
        for value in self.elements:
            if value.kind is Kind.STRING:
                rendered.append(f"\"{value}\"")
            elif value.kind is Kind.CHARACTER:
                rendered.append(f"'{value}'")
            else:
                rendered.append(str(value))
        return "[" + " ".join(rendered) + "]"


@dataclass(frozen=True)
class StringValue(DataValue):
    elements: tuple = ()
    kind = Kind.STRING

    @classmethod
    def of(cls, text):
        """Builds a StringValue holding one CharValue per character of text."""
        return cls(tuple(CharValue(char) for char in text))

    def _key(self):
        return str(self)

    def __len__(self):
        return len(self.elements)

    def __str__(self):
        return "".join(str(char) for char in self.elements)


SEQUENCE_KINDS = (Kind.LIST, Kind.STRING)
