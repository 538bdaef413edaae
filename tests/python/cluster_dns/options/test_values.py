from datetime import timedelta

import pytest

from cluster_dns.options.config import ResolverConfig
from cluster_dns.options.errors import FederationError, InvalidDomainLabelError, URLIncompleteError
from cluster_dns.options.values import (
    BoolValue,
    ClusterDomainValue,
    ControlPlaneURLValue,
    DurationValue,
    FederationsValue,
    IntValue,
    StringValue,
)
from cluster_dns.utils.modeling.errors import DataModelingError, DataParsingError


@pytest.fixture
def config() -> ResolverConfig:
    return ResolverConfig()


@pytest.mark.parametrize(
    "raw,stored",
    [
        ("a.b.c", "a.b.c."),
        ("a.b.c.", "a.b.c."),
        ("cluster.local", "cluster.local."),
        ("my-domain", "my-domain."),
        ("0.1-a.z9", "0.1-a.z9."),
    ],
)
def test_cluster_domain_value(config: ResolverConfig, raw: str, stored: str):
    value = ClusterDomainValue(config, "cluster_domain")
    value.set(raw)
    assert config.cluster_domain == stored
    assert str(value) == stored
    assert value.type_name() == "string"


@pytest.mark.parametrize("raw", ["", "Cluster.local", "a.-b", "a-.b", f"{'a' * 64}.local", "a..b", "a_b.local"])
def test_cluster_domain_value_invalid(config: ResolverConfig, raw: str):
    value = ClusterDomainValue(config, "cluster_domain")
    with pytest.raises(InvalidDomainLabelError):
        value.set(raw)
    assert config.cluster_domain == "cluster.local."


def test_cluster_domain_value_is_idempotent(config: ResolverConfig):
    value = ClusterDomainValue(config, "cluster_domain")
    value.set("my.cluster")
    for _ in range(3):
        value.set(str(value))
        assert config.cluster_domain == "my.cluster."


def test_control_plane_url_value(config: ResolverConfig):
    value = ControlPlaneURLValue(config, "control_plane_url")
    value.set("http://host:1234")
    assert config.control_plane_url == "http://host:1234"
    assert str(value) == "http://host:1234"
    assert value.type_name() == "string"

    value.set(str(value))
    assert config.control_plane_url == "http://host:1234"


@pytest.mark.parametrize("raw", ["nohost", "http://", "http://:"])
def test_control_plane_url_value_invalid(config: ResolverConfig, raw: str):
    value = ControlPlaneURLValue(config, "control_plane_url")
    with pytest.raises(URLIncompleteError):
        value.set(raw)
    assert config.control_plane_url == ""


def test_control_plane_url_value_stores_unexpanded(config: ResolverConfig, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FOO", "bar")
    value = ControlPlaneURLValue(config, "control_plane_url")
    value.set("http://$FOO:80")
    assert config.control_plane_url == "http://$FOO:80"


def test_control_plane_url_value_error_path(config: ResolverConfig):
    with pytest.raises(DataModelingError) as e:
        ControlPlaneURLValue(config, "control_plane_url").set("nohost")
    assert str(e.value) == "[/control_plane_url] value error: invalid control-plane URL specified"


def test_federations_value(config: ResolverConfig):
    value = FederationsValue(config.federations)
    value.set("f1=example.com,f2=example2.com")
    assert config.federations == {"f1": "example.com", "f2": "example2.com"}
    assert value.type_name() == "[]string"

    pairs = {tuple(pair.split("=")) for pair in str(value).split(",")}
    assert pairs == {("f1", "example.com"), ("f2", "example2.com")}


def test_federations_value_mutates_config_mapping(config: ResolverConfig):
    federations = config.federations
    FederationsValue(config.federations).set("f1=example.com")
    FederationsValue(config.federations).set("f2=example2.com")
    assert config.federations is federations
    assert config.federations == {"f1": "example.com", "f2": "example2.com"}


def test_federations_value_error_is_forwarded(config: ResolverConfig):
    with pytest.raises(FederationError) as e:
        FederationsValue(config.federations).set("f1")
    assert str(e.value) == "value error: invalid format for federation: 'f1', expected '<name>=<domain>'"


def test_federations_value_empty(config: ResolverConfig):
    assert str(FederationsValue(config.federations)) == ""


def test_string_value(config: ResolverConfig):
    value = StringValue(config, "dns_bind_address")
    assert str(value) == "0.0.0.0"
    value.set("127.0.0.1")
    assert config.dns_bind_address == "127.0.0.1"
    assert value.type_name() == "string"


def test_int_value(config: ResolverConfig):
    value = IntValue(config, "dns_port")
    value.set("5353")
    assert config.dns_port == 5353
    assert str(value) == "5353"
    assert value.type_name() == "int"

    # ports are not range checked here
    value.set("-1")
    assert config.dns_port == -1


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("0", 0),
        ("+53", 53),
        ("0x35", 53),
        ("0X35", 53),
        ("-0x35", -53),
        ("065", 53),
        ("0o65", 53),
        ("0b110101", 53),
        ("5_353", 5353),
        ("0x_14_e9", 5353),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_int_value_bases(config: ResolverConfig, raw: str, expected: int):
    IntValue(config, "dns_port").set(raw)
    assert config.dns_port == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "-",
        "53a",
        "5.3",
        " 53 ",
        "53\n",
        "\uff15\uff13",
        "08",
        "0x",
        "_53",
        "53_",
        "5__3",
        "9223372036854775808",
        "-9223372036854775809",
    ],
)
def test_int_value_invalid(config: ResolverConfig, raw: str):
    with pytest.raises(DataParsingError):
        IntValue(config, "dns_port").set(raw)
    assert config.dns_port == 53


@pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("T", True), ("false", False), ("0", False), ("F", False)])
def test_bool_value(config: ResolverConfig, raw: str, expected: bool):
    value = BoolValue(config, "profiling")
    value.set(raw)
    assert config.profiling is expected
    assert str(value) == str(expected).lower()
    assert value.type_name() == "bool"


@pytest.mark.parametrize("raw", ["", "yes", "tRue", "2"])
def test_bool_value_invalid(config: ResolverConfig, raw: str):
    with pytest.raises(DataParsingError):
        BoolValue(config, "profiling").set(raw)


def test_duration_value(config: ResolverConfig):
    value = DurationValue(config, "initial_sync_timeout")
    assert str(value) == "1m0s"
    value.set("1m30s")
    assert config.initial_sync_timeout == timedelta(seconds=90)
    assert str(value) == "1m30s"
    assert value.type_name() == "duration"


@pytest.mark.parametrize("raw", ["", "-1s", "10", "1d"])
def test_duration_value_invalid(config: ResolverConfig, raw: str):
    with pytest.raises(DataModelingError):
        DurationValue(config, "config_period").set(raw)
    assert config.config_period == timedelta(seconds=10)


def test_default_config_passes_validators(config: ResolverConfig):
    domain = ClusterDomainValue(config, "cluster_domain")
    domain.set(str(domain))
    assert config.cluster_domain == "cluster.local."

    federations = FederationsValue(config.federations)
    federations.set(str(federations))
    assert config.federations == {}

    timeout = DurationValue(config, "initial_sync_timeout")
    timeout.set(str(timeout))
    assert config.initial_sync_timeout == timedelta(seconds=60)
