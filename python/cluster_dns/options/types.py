from __future__ import annotations

import re
from datetime import timedelta
from urllib.parse import SplitResult, urlsplit

from cluster_dns.options.errors import InvalidDomainLabelError, URLIncompleteError, URLParseError
from cluster_dns.utils.environ import expand_env
from cluster_dns.utils.modeling.errors import DataValidationError, DataValueError
from cluster_dns.utils.modeling.types import BaseDuration, BaseString, BaseStringPattern

_DNS1123_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"


class DNS1123Label(BaseStringPattern):
    """
    Lowercase RFC 1123 label, e.g. a single component of a domain name.
    """

    _re = re.compile(_DNS1123_LABEL)
    _max_length = 63
    _description = "DNS-1123 label"
    _pattern_msg = (
        "a lowercase RFC 1123 label must consist of lower case alphanumeric characters or '-',"
        " and must start and end with an alphanumeric character"
    )
    _examples = ("my-name", "123-abc")


class DNS1123Subdomain(BaseStringPattern):
    """
    Lowercase RFC 1123 subdomain, DNS-1123 labels joined by dots.
    """

    _re = re.compile(rf"{_DNS1123_LABEL}(\.{_DNS1123_LABEL})*")
    _max_length = 253
    _description = "DNS-1123 subdomain"
    _pattern_msg = (
        "a lowercase RFC 1123 subdomain must consist of lower case alphanumeric characters, '-' or '.',"
        " and must start and end with an alphanumeric character"
    )
    _examples = ("example.com",)


class ClusterDomain(BaseString):
    """
    Domain suffix of the cluster; every label must be a DNS-1123 label.

    The canonical form always ends with a single dot.
    """

    def labels(self) -> list[str]:
        value: str = self._value
        if value.endswith("."):
            value = value[:-1]
        return value.split(".")

    def validate(self) -> None:
        super().validate()
        for label in self.labels():
            try:
                DNS1123Label(label, self._tree_path).validate()
            except DataValidationError as e:
                raise InvalidDomainLabelError(label, e.child_errors, self._tree_path) from e

    def canonical(self) -> str:
        self.validate()
        return ".".join(self.labels()) + "."


class ControlPlaneURL(BaseString):
    """
    URL of the cluster's control plane; may reference environment variables as '$NAME' or '${NAME}'.

    The references are expanded only to check the URL, the value keeps them.

    'urlsplit' alone accepts almost anything, so the text is checked for control
    characters, a leading space, broken '%XX' escapes, characters not allowed in
    a host and a non-numeric port. The port is not range checked.
    """

    _ctl_re = re.compile(r"[\x00-\x1f\x7f]")
    _bad_escape_re = re.compile(r"%(?![0-9A-Fa-f]{2})")
    _host_re = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=%]*")
    _ipv6_host_re = re.compile(r"\[[0-9A-Za-z:.%\-_~]*\]")
    _port_re = re.compile(r"[0-9]*")

    def expanded(self) -> str:
        return expand_env(self._value)

    def _check_host(self, hostport: str) -> None:
        if hostport.startswith("["):
            host, bracket, port = hostport.partition("]")
            host += bracket
            if port and not port.startswith(":"):
                raise ValueError(f"unexpected '{port}' after IPv6 address")
            if not self._ipv6_host_re.fullmatch(host):
                raise ValueError(f"invalid IPv6 host '{host}'")
        else:
            host, _, port = hostport.rpartition(":") if ":" in hostport else (hostport, "", "")
            if not self._host_re.fullmatch(host):
                raise ValueError(f"invalid character in host name '{host}'")
        if not self._port_re.fullmatch(port.lstrip(":")):
            raise ValueError(f"invalid port '{port}'")

    def _split(self) -> SplitResult:
        url = self.expanded()
        try:
            if self._ctl_re.search(url):
                raise ValueError("control character in URL")
            if url.startswith(" "):
                raise ValueError("leading space in URL")
            parsed = urlsplit(url)
            # the query is kept raw, escapes are not checked there
            for part in (parsed.netloc, parsed.path, parsed.fragment):
                if self._bad_escape_re.search(part):
                    raise ValueError(f"invalid URL escape in '{part}'")
            self._check_host(parsed.netloc.rpartition("@")[2])
        except ValueError as e:
            raise URLParseError("failed to parse control-plane URL", self._tree_path) from e
        return parsed

    def validate(self) -> None:
        super().validate()
        parsed = self._split()
        host = parsed.netloc.rpartition("@")[2]
        if not parsed.scheme or not host or host == ":":
            raise URLIncompleteError("invalid control-plane URL specified", self._tree_path)


class Duration(BaseDuration):
    """
    Non-negative duration, e.g. '60s' or '1m30s'.
    """

    def validate(self) -> None:
        if self._get_nanoseconds() < 0:
            raise DataValueError(f"duration '{self._value}' must not be negative", self._tree_path)

    def to_timedelta(self) -> timedelta:
        self.validate()
        return super().to_timedelta()
