"""
Value handles connecting command-line flags with fields of a configuration object.

Every handle understands raw text passed on the command line ('set'),
renders the current value ('str') and names its type for help messages ('type_name').
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, MutableMapping

from cluster_dns.options.federation import parse_federations_flag
from cluster_dns.options.types import ClusterDomain, ControlPlaneURL, Duration
from cluster_dns.utils.modeling.errors import DataParsingError
from cluster_dns.utils.modeling.types import format_duration


class FlagValue(ABC):
    @abstractmethod
    def set(self, raw: str) -> None:
        """Parse 'raw' and store the result; raises 'DataModelingError' when 'raw' is not valid."""

    @abstractmethod
    def __str__(self) -> str: ...

    @abstractmethod
    def type_name(self) -> str: ...


class FieldValue(FlagValue):
    """Base class for values stored in an attribute of the owning object."""

    def __init__(self, owner: Any, field: str) -> None:
        self._owner = owner
        self._field = field

    def _get(self) -> Any:
        return getattr(self._owner, self._field)

    def _store(self, value: Any) -> None:
        setattr(self._owner, self._field, value)

    @property
    def tree_path(self) -> str:
        return f"/{self._field}"

    def __str__(self) -> str:
        return str(self._get())


class StringValue(FieldValue):
    def set(self, raw: str) -> None:
        self._store(raw)

    def type_name(self) -> str:
        return "string"


class IntValue(FieldValue):
    """
    Signed 64-bit integer.

    Prefixes '0x', '0o', '0b' and a leading '0' (octal) select the base, '_' may separate digits.
    """

    _re = re.compile(r"[+-]?(0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|0[0-7_]*|[1-9][0-9_]*)")
    _min = -(2**63)
    _max = 2**63 - 1

    def _parse(self, raw: str) -> int:
        if not self._re.fullmatch(raw):
            raise ValueError(f"malformed integer '{raw}'")

        sign = raw[0] if raw[0] in "+-" else ""
        digits = raw[len(sign) :]
        if len(digits) > 1 and digits[0] == "0" and digits[1] not in "xXoObB":
            digits = f"0o{digits[1:]}"

        value = int(sign + digits, 0)
        if not self._min <= value <= self._max:
            raise ValueError(f"integer '{raw}' out of range")
        return value

    def set(self, raw: str) -> None:
        try:
            self._store(self._parse(raw))
        except ValueError as e:
            raise DataParsingError(f"invalid integer '{raw}'", self.tree_path) from e

    def type_name(self) -> str:
        return "int"


class BoolValue(FieldValue):
    _true = ("1", "t", "T", "TRUE", "true", "True")
    _false = ("0", "f", "F", "FALSE", "false", "False")

    def set(self, raw: str) -> None:
        if raw in self._true:
            self._store(True)
        elif raw in self._false:
            self._store(False)
        else:
            raise DataParsingError(f"invalid boolean '{raw}'", self.tree_path)

    def __str__(self) -> str:
        return "true" if self._get() else "false"

    def type_name(self) -> str:
        return "bool"


class DurationValue(FieldValue):
    def set(self, raw: str) -> None:
        self._store(Duration(raw, self.tree_path).to_timedelta())

    def __str__(self) -> str:
        return format_duration(self._get())

    def type_name(self) -> str:
        return "duration"


class ClusterDomainValue(FieldValue):
    """Domain suffix; every label is checked and the value is stored with a single trailing dot."""

    def set(self, raw: str) -> None:
        self._store(ClusterDomain(raw, self.tree_path).canonical())

    def type_name(self) -> str:
        return "string"


class ControlPlaneURLValue(FieldValue):
    """
    URL of the control plane.

    Environment variables are expanded only to validate the URL,
    the unexpanded text is stored and expanded again by whoever uses it.
    """

    def set(self, raw: str) -> None:
        ControlPlaneURL(raw, self.tree_path).validate()
        self._store(raw)

    def type_name(self) -> str:
        return "string"


class FederationsValue(FlagValue):
    """Federation names and their domains; updates the very mapping it was given."""

    def __init__(self, federations: MutableMapping[str, str]) -> None:
        self._federations = federations

    def set(self, raw: str) -> None:
        parse_federations_flag(raw, self._federations)

    def __str__(self) -> str:
        return ",".join(f"{name}={domain}" for name, domain in self._federations.items())

    def type_name(self) -> str:
        return "[]string"
