from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from cluster_dns.constants import (
    DEFAULT_CLUSTER_DOMAIN,
    DEFAULT_CONFIG_PERIOD,
    DEFAULT_DNS_BIND_ADDRESS,
    DEFAULT_DNS_PORT,
    DEFAULT_HEALTHZ_PORT,
    DEFAULT_INITIAL_SYNC_TIMEOUT,
    NAMESPACE_SYSTEM,
)
from cluster_dns.utils.modeling.types import format_duration


@dataclass
class ResolverConfig:
    """
    Runtime configuration of the cluster DNS resolver.

    Created with defaults at startup and filled in by the command-line flags,
    afterwards it is only read.
    """

    cluster_domain: str = DEFAULT_CLUSTER_DOMAIN
    control_plane_config_file: str = ""
    control_plane_url: str = ""
    initial_sync_timeout: timedelta = DEFAULT_INITIAL_SYNC_TIMEOUT

    healthz_port: int = DEFAULT_HEALTHZ_PORT
    dns_bind_address: str = DEFAULT_DNS_BIND_ADDRESS
    dns_port: int = DEFAULT_DNS_PORT

    # cannot be combined with 'config_map' or 'config_dir'
    federations: dict[str, str] = field(default_factory=dict)

    config_map_namespace: str = NAMESPACE_SYSTEM
    # empty means that the config-map is not used
    config_map: str = ""

    config_dir: str = ""
    config_period: timedelta = DEFAULT_CONFIG_PERIOD

    name_servers: str = ""
    profiling: bool = False

    def uses_dynamic_config(self) -> bool:
        return bool(self.config_map or self.config_dir)

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.cluster_domain,
            "nameservers": self.name_servers,
            "kubecfg-file": self.control_plane_config_file,
            "kube-master-url": self.control_plane_url,
            "healthz-port": self.healthz_port,
            "dns-bind-address": self.dns_bind_address,
            "dns-port": self.dns_port,
            "federations": dict(self.federations),
            "config-map-namespace": self.config_map_namespace,
            "config-map": self.config_map,
            "initial-sync-timeout": format_duration(self.initial_sync_timeout),
            "config-dir": self.config_dir,
            "config-period": format_duration(self.config_period),
            "profiling": self.profiling,
        }
