from __future__ import annotations

from typing import MutableMapping

from cluster_dns.options.errors import FederationError
from cluster_dns.options.types import DNS1123Label, DNS1123Subdomain


def validate_federation_name(name: str) -> None:
    errs = DNS1123Label(name).errors()
    if errs:
        raise FederationError(f"'{name}' not a valid name: {errs}")


def validate_federation_domain(domain: str) -> None:
    errs = DNS1123Subdomain(domain).errors()
    if errs:
        raise FederationError(f"'{domain}' not a valid domain name: {errs}")


def parse_federations_flag(value: str, federations: MutableMapping[str, str]) -> None:
    """
    Parse comma separated '<name>=<domain>' pairs into 'federations'.

    Pairs are inserted one by one, so pairs in front of an invalid one stay in the mapping.
    A name that is already in 'federations' is an error.
    """

    if not value.strip():
        return

    for entry in value.split(","):
        name, sep, domain = entry.strip().partition("=")
        if not sep:
            raise FederationError(f"invalid format for federation: '{entry}', expected '<name>=<domain>'")

        name = name.strip()
        domain = domain.strip()
        validate_federation_name(name)
        validate_federation_domain(domain)

        if name in federations:
            raise FederationError(f"federation name '{name}' is already defined")
        federations[name] = domain
