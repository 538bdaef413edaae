from .config import ResolverConfig
from .errors import FederationError, FlagParsingError, InvalidDomainLabelError, URLIncompleteError, URLParseError
from .flags import FlagSet, add_flags

__all__ = [
    "FederationError",
    "FlagParsingError",
    "FlagSet",
    "InvalidDomainLabelError",
    "ResolverConfig",
    "URLIncompleteError",
    "URLParseError",
    "add_flags",
]
