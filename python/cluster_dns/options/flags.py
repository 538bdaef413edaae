from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NoReturn, Sequence

from cluster_dns.logging import get_logger
from cluster_dns.options.errors import FlagParsingError
from cluster_dns.options.values import (
    BoolValue,
    ClusterDomainValue,
    ControlPlaneURLValue,
    DurationValue,
    FederationsValue,
    FlagValue,
    IntValue,
    StringValue,
)
from cluster_dns.utils.modeling.errors import DataModelingError

if TYPE_CHECKING:
    from cluster_dns.options.config import ResolverConfig

logger = get_logger(__name__)


@dataclass
class Flag:
    name: str
    value: FlagValue
    usage: str
    action: argparse.Action
    deprecated: str | None = None
    changed: bool = False


class _FlagArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise FlagParsingError(message)


class _FlagAction(argparse.Action):
    def __init__(self, option_strings: list[str], dest: str, flagset: FlagSet, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self._flagset = flagset

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        flag = self._flagset.lookup(self.option_strings[0][2:])
        if flag.deprecated is not None:
            logger.warning(f"Flag --{flag.name} has been deprecated, {flag.deprecated}")
        try:
            flag.value.set(values)
        except DataModelingError as e:
            raise argparse.ArgumentError(self, str(e)) from e
        flag.changed = True


class FlagSet:
    """
    Set of named command-line flags backed by 'FlagValue' handles.

    The handles are applied in the order in which flags occur on the command line.
    """

    def __init__(self, name: str, description: str | None = None) -> None:
        self._parser = _FlagArgumentParser(prog=name, description=description, allow_abbrev=False)
        self._flags: dict[str, Flag] = {}

    def var(self, value: FlagValue, name: str, usage: str) -> None:
        if name in self._flags:
            raise FlagParsingError(f"flag redefined: {name}")

        action = self._parser.add_argument(
            f"--{name}",
            action=_FlagAction,
            flagset=self,
            dest=argparse.SUPPRESS,
            default=argparse.SUPPRESS,
            metavar=value.type_name(),
            help=self._help(value, usage),
        )
        self._flags[name] = Flag(name, value, usage, action)

    @staticmethod
    def _help(value: FlagValue, usage: str) -> str:
        default = str(value)
        if default and default not in ("0", "false", "0s"):
            if value.type_name() == "string":
                default = f'"{default}"'
            usage = f"{usage} (default {default})"
        return usage.replace("%", "%%")

    def string_var(self, owner: Any, field: str, name: str, usage: str) -> None:
        self.var(StringValue(owner, field), name, usage)

    def int_var(self, owner: Any, field: str, name: str, usage: str) -> None:
        self.var(IntValue(owner, field), name, usage)

    def bool_var(self, owner: Any, field: str, name: str, usage: str) -> None:
        self.var(BoolValue(owner, field), name, usage)

    def duration_var(self, owner: Any, field: str, name: str, usage: str) -> None:
        self.var(DurationValue(owner, field), name, usage)

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        """Add an option that is not backed by a 'FlagValue', it ends up in the namespace returned by 'parse'."""
        return self._parser.add_argument(*args, **kwargs)

    def lookup(self, name: str) -> Flag:
        if name not in self._flags:
            raise FlagParsingError(f"flag does not exist: {name}")
        return self._flags[name]

    def mark_deprecated(self, name: str, message: str) -> None:
        if not message:
            raise FlagParsingError(f"deprecated message for flag '{name}' must be set")
        flag = self.lookup(name)
        flag.deprecated = message
        flag.action.help = argparse.SUPPRESS

    def changed(self, name: str) -> bool:
        return self.lookup(name).changed

    def format_help(self) -> str:
        return self._parser.format_help()

    def _attach_bool_values(self, args: Sequence[str]) -> list[str]:
        # a bare boolean flag means true, its value is never taken from the next argument
        out: list[str] = []
        for i, arg in enumerate(args):
            if arg == "--":
                out.extend(args[i:])
                break
            flag = self._flags.get(arg[2:]) if arg.startswith("--") else None
            if flag is not None and isinstance(flag.value, BoolValue):
                arg = f"{arg}=true"
            out.append(arg)
        return out

    def parse(self, args: Sequence[str] | None = None) -> argparse.Namespace:
        if args is None:
            args = sys.argv[1:]
        return self._parser.parse_args(self._attach_bool_values(args))


def add_flags(config: ResolverConfig, fs: FlagSet) -> None:
    fs.var(ClusterDomainValue(config, "cluster_domain"), "domain", "domain under which to create names")

    fs.string_var(
        config,
        "name_servers",
        "nameservers",
        "List of ip:port, separated by commas of nameservers to forward queries to."
        " If set, overrides upstream servers taken from the nameserver option in /etc/resolv.conf."
        " Example: 8.8.8.8:53,8.8.4.4 (default port is 53)",
    )

    fs.string_var(
        config,
        "control_plane_config_file",
        "kubecfg-file",
        "Location of kubecfg file for access to the control plane;"
        " --kube-master-url overrides the URL part of this; if this is not"
        " provided, defaults to service account tokens",
    )
    fs.var(
        ControlPlaneURLValue(config, "control_plane_url"),
        "kube-master-url",
        "URL to reach the control plane. Env variables in this flag will be expanded.",
    )

    fs.int_var(config, "healthz_port", "healthz-port", "port on which to serve a cluster-dns HTTP readiness probe.")
    fs.string_var(config, "dns_bind_address", "dns-bind-address", "address on which to serve DNS requests.")
    fs.int_var(config, "dns_port", "dns-port", "port on which to serve DNS requests.")

    fs.var(
        FederationsValue(config.federations),
        "federations",
        "a comma separated list of the federation names and their corresponding"
        " domain names to which this cluster belongs. Example:"
        ' "myfederation1=example.com,myfederation2=example2.com,myfederation3=example.com".'
        " It is an error to set both the federations and config-map or config-dir flags.",
    )
    fs.mark_deprecated("federations", "use config-dir instead. Will be removed in future version")

    fs.string_var(config, "config_map_namespace", "config-map-namespace", "namespace for the config-map")
    fs.string_var(
        config,
        "config_map",
        "config-map",
        "config-map name. If empty, then the config-map will not used. Cannot be"
        " used in conjunction with federations or config-dir flag. config-map contains"
        " dynamically adjustable configuration.",
    )
    fs.duration_var(config, "initial_sync_timeout", "initial-sync-timeout", "Timeout for initial resource sync.")

    fs.string_var(
        config,
        "config_dir",
        "config-dir",
        "directory to read config values from. Cannot be used in conjunction with federations or config-map flag.",
    )
    fs.duration_var(config, "config_period", "config-period", "period at which to check for updates in config-dir.")
    fs.bool_var(config, "profiling", "profiling", "specifies whether to enable profiling")
