from __future__ import annotations

import re
from datetime import timedelta
from typing import TYPE_CHECKING

from cluster_dns.utils.modeling.errors import DataTypeError, DataValidationError, DataValueError

from .base_types import BaseType

if TYPE_CHECKING:
    from re import Pattern


class BaseString(BaseType):
    """Base class to work with string value."""

    def validate(self) -> None:
        if not isinstance(self._value, str):
            msg = (
                f"Unexpected value for '{type(self)}'."
                f" Expected string, got '{self._value}' with type '{type(self._value)}'"
            )
            raise DataTypeError(msg, self._tree_path)


class BaseStringPattern(BaseString):
    """
    String that has to match a pattern and optionally fit into '_max_length' characters.

    Unlike a plain check, all broken rules are collected, so the error tells
    everything that is wrong with the value at once.
    """

    _re: Pattern[str]
    _max_length: int
    _description: str = "value"
    _pattern_msg: str = ""
    _examples: tuple[str, ...] = ()

    def errors(self) -> list[str]:
        super().validate()
        cls = type(self)

        msgs: list[str] = []
        if hasattr(cls, "_max_length") and len(self._value) > cls._max_length:
            msgs.append(f"must be no more than {cls._max_length} characters")
        if not cls._re.fullmatch(self._value):
            msgs.append(self._regex_msg())
        return msgs

    def _regex_msg(self) -> str:
        cls = type(self)
        msg = cls._pattern_msg or f"must match '{cls._re.pattern}'"
        if cls._examples:
            examples = ", or ".join(f"'{e}'" for e in cls._examples)
            msg += f" (e.g. {examples}, regex used for validation is '{cls._re.pattern}')"
        return msg

    def validate(self) -> None:
        msgs = self.errors()
        if msgs:
            raise DataValidationError(
                f"'{self._value}' is not a valid {type(self)._description}",
                self._tree_path,
                [DataValueError(msg) for msg in msgs],
            )


_NANOSECOND = 1
_MICROSECOND = 1_000 * _NANOSECOND
_MILLISECOND = 1_000 * _MICROSECOND
_SECOND = 1_000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


class BaseDuration(BaseString):
    """
    Duration written as a sequence of decimal numbers with unit suffixes, e.g. '300ms', '1.5h' or '2h45m'.

    Valid units are 'ns', 'us' (or 'µs'), 'ms', 's', 'm', 'h'. A bare '0' is accepted as well.
    """

    _units: dict[str, int] = {
        "ns": _NANOSECOND,
        "us": _MICROSECOND,
        "µs": _MICROSECOND,  # micro sign
        "μs": _MICROSECOND,  # greek small letter mu
        "ms": _MILLISECOND,
        "s": _SECOND,
        "m": _MINUTE,
        "h": _HOUR,
    }
    _re = re.compile(r"^[-+]?(0|((\d+(\.\d*)?|\.\d+)[a-zµμ]+)+)$")
    _component_re = re.compile(r"(\d*)(?:\.(\d*))?([a-zµμ]+)")

    def _get_nanoseconds(self) -> int:
        cls = type(self)
        super().validate()

        if not cls._re.match(self._value):
            msg = (
                f"invalid duration '{self._value}'."
                f" Expected decimal numbers with one of the units {list(cls._units.keys())}, e.g. '1m30s'"
            )
            raise DataValueError(msg, self._tree_path)

        value = self._value
        sign = -1 if value.startswith("-") else 1
        value = value.lstrip("-+")
        if value == "0":
            return 0

        total = 0
        for whole, frac, unit in cls._component_re.findall(value):
            if unit not in cls._units:
                msg = f"unknown unit '{unit}' in duration '{self._value}'. Accepted units are {list(cls._units.keys())}"
                raise DataValueError(msg, self._tree_path)
            scale = cls._units[unit]
            total += int(whole or "0") * scale
            if frac:
                total += int(frac) * scale // 10 ** len(frac)
        return sign * total

    def validate(self) -> None:
        self._get_nanoseconds()

    def to_timedelta(self) -> timedelta:
        return timedelta(microseconds=self._get_nanoseconds() // _MICROSECOND)


def _format_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Render 'value' the same way 'BaseDuration' reads it, e.g. '1m0s', '10s' or '500ms'."""

    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    nanos = abs(micros) * _MICROSECOND

    if nanos < _MILLISECOND:
        return f"{sign}{nanos // _MICROSECOND}µs"
    if nanos < _SECOND:
        return f"{sign}{_format_fraction(nanos, _MILLISECOND)}ms"

    hours, rest = divmod(nanos, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_format_fraction(rest, _SECOND)}s"
