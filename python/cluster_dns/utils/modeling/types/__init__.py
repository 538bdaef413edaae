from .base_string_types import BaseDuration, BaseString, BaseStringPattern, format_duration
from .base_types import BaseType

__all__ = [
    "BaseDuration",
    "BaseString",
    "BaseStringPattern",
    "BaseType",
    "format_duration",
]
