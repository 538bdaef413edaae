from __future__ import annotations

from cluster_dns.errors import BaseClusterDnsError
from cluster_dns.utils.modeling.errors import DataModelingError, DataParsingError, DataValidationError, DataValueError


class InvalidDomainLabelError(DataValidationError):
    """A label of a domain name is not a valid DNS-1123 label."""

    def __init__(self, label: str, child_errors: list[DataModelingError], error_path: str = "") -> None:
        super().__init__(f"not a valid DNS label '{label}'", error_path, child_errors)
        self.label = label


class URLParseError(DataParsingError):
    """Exception class for URLs that could not be parsed at all."""


class URLIncompleteError(DataValueError):
    """Exception class for URLs without a scheme or host."""


class FederationError(DataValueError):
    """Exception class for malformed federation definitions."""


class FlagParsingError(BaseClusterDnsError):
    """Exception class for errors raised while parsing command-line flags."""

    def __init__(self, msg: str) -> None:
        super().__init__()
        self._msg = f"flag parsing error: {msg}"

    def __str__(self) -> str:
        return self._msg
