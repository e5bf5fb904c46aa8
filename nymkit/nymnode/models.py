"""Models for the responses of a nym node's HTTP API."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

PrometheusMetrics = str


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    return None if value is None else int(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    return data.get(key) or ""


def _bool(data: Mapping[str, Any], key: str) -> bool:
    return bool(data.get(key, False))


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return data.get(key) or {}


def _optional(data: Mapping[str, Any], key: str, kind: Any) -> Any:
    value = data.get(key)
    return None if value is None else kind.from_dict(value)


@dataclass(frozen=True)
class MixnetWebsockets:
    ws_port: int
    wss_port: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MixnetWebsockets:
        return cls(ws_port=_int(data, "ws_port"), wss_port=_optional_int(data, "wss_port"))


@dataclass(frozen=True)
class Wireguard:
    port: int
    public_key: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Wireguard:
        return cls(port=_int(data, "port"), public_key=_str(data, "public_key"))


@dataclass(frozen=True)
class ClientInterfaces:
    mixnet_websockets: MixnetWebsockets | None = None
    wireguard: Wireguard | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientInterfaces:
        return cls(
            mixnet_websockets=_optional(data, "mixnet_websockets", MixnetWebsockets),
            wireguard=_optional(data, "wireguard", Wireguard),
        )


@dataclass(frozen=True)
class Gateway:
    client_interfaces: ClientInterfaces | None
    enforces_zk_nyms: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Gateway:
        return cls(
            client_interfaces=_optional(data, "client_interfaces", ClientInterfaces),
            enforces_zk_nyms=_bool(data, "enforces_zk_nyms"),
        )


@dataclass(frozen=True)
class Health:
    """Node status; ``uptime`` is in seconds."""

    status: str
    uptime: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Health:
        return cls(status=_str(data, "status"), uptime=_int(data, "uptime"))


@dataclass(frozen=True)
class IPPacketRouter:
    encoded_identity_key: str
    encoded_x25519_key: str
    address: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IPPacketRouter:
        return cls(
            encoded_identity_key=_str(data, "encoded_identity_key"),
            encoded_x25519_key=_str(data, "encoded_x25519_key"),
            address=_str(data, "address"),
        )


@dataclass(frozen=True)
class IngressMixing:
    forward_hop_packets_received: int = 0
    final_hop_packets_received: int = 0
    malformed_packets_received: int = 0
    excessive_delay_packets: int = 0
    forward_hop_packets_dropped: int = 0
    final_hop_packets_dropped: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IngressMixing:
        names = (
            "forward_hop_packets_received",
            "final_hop_packets_received",
            "malformed_packets_received",
            "excessive_delay_packets",
            "forward_hop_packets_dropped",
            "final_hop_packets_dropped",
        )
        return cls(**{name: _int(data, name) for name in names})


@dataclass(frozen=True)
class EgressMixing:
    forward_hop_packets_sent: int = 0
    forward_hop_packets_dropped: int = 0
    ack_packets_sent: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EgressMixing:
        names = ("forward_hop_packets_sent", "forward_hop_packets_dropped", "ack_packets_sent")
        return cls(**{name: _int(data, name) for name in names})


@dataclass(frozen=True)
class PacketsStatsMetrics:
    ingress_mixing: IngressMixing
    egress_mixing: EgressMixing

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PacketsStatsMetrics:
        return cls(
            ingress_mixing=IngressMixing.from_dict(_mapping(data, "ingress_mixing")),
            egress_mixing=EgressMixing.from_dict(_mapping(data, "egress_mixing")),
        )


@dataclass(frozen=True)
class AnnouncePorts:
    verloc_port: int | None = None
    mix_port: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnnouncePorts:
        return cls(
            verloc_port=_optional_int(data, "verloc_port"),
            mix_port=_optional_int(data, "mix_port"),
        )


@dataclass(frozen=True)
class AuxiliaryDetails:
    location: str
    announce_ports: AnnouncePorts
    accepted_operator_terms_and_conditions: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AuxiliaryDetails:
        return cls(
            location=_str(data, "location"),
            announce_ports=AnnouncePorts.from_dict(_mapping(data, "announce_ports")),
            accepted_operator_terms_and_conditions=_bool(
                data, "accepted_operator_terms_and_conditions"
            ),
        )


@dataclass(frozen=True)
class BuildInformation:
    binary_name: str = ""
    build_timestamp: str = ""
    build_version: str = ""
    commit_sha: str = ""
    commit_timestamp: str = ""
    commit_branch: str = ""
    rustc_version: str = ""
    rustc_channel: str = ""
    cargo_profile: str = ""
    cargo_triple: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BuildInformation:
        names = (
            "binary_name",
            "build_timestamp",
            "build_version",
            "commit_sha",
            "commit_timestamp",
            "commit_branch",
            "rustc_version",
            "rustc_channel",
            "cargo_profile",
            "cargo_triple",
        )
        return cls(**{name: _str(data, name) for name in names})


@dataclass(frozen=True)
class Description:
    moniker: str = ""
    website: str = ""
    security_contact: str = ""
    details: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Description:
        names = ("moniker", "website", "security_contact", "details")
        return cls(**{name: _str(data, name) for name in names})


@dataclass(frozen=True)
class HostKeys:
    ed25519_identity: str
    x25519_sphinx: str
    x25519_noise: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HostKeys:
        return cls(
            ed25519_identity=_str(data, "ed25519_identity"),
            x25519_sphinx=_str(data, "x25519_sphinx"),
            x25519_noise=_str(data, "x25519_noise"),
        )


@dataclass(frozen=True)
class HostData:
    ips: list[str]
    keys: HostKeys
    hostname: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HostData:
        return cls(
            ips=list(data.get("ip_address") or []),
            keys=HostKeys.from_dict(_mapping(data, "keys")),
            hostname=_str(data, "hostname"),
        )


@dataclass(frozen=True)
class HostInformation:
    data: HostData
    signature: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HostInformation:
        return cls(
            data=HostData.from_dict(_mapping(data, "data")),
            signature=_str(data, "signature"),
        )


@dataclass(frozen=True)
class Roles:
    mixnode_enabled: bool = False
    gateway_enabled: bool = False
    network_requester_enabled: bool = False
    ip_packet_router_enabled: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Roles:
        names = (
            "mixnode_enabled",
            "gateway_enabled",
            "network_requester_enabled",
            "ip_packet_router_enabled",
        )
        return cls(**{name: _bool(data, name) for name in names})


@dataclass(frozen=True)
class Cpu:
    brand: str
    frequency: int
    name: str
    vendor_id: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Cpu:
        return cls(
            brand=_str(data, "brand"),
            frequency=_int(data, "frequency"),
            name=_str(data, "name"),
            vendor_id=_str(data, "vendor_id"),
        )


@dataclass(frozen=True)
class CryptoFeatures:
    aesni: bool = False
    avx2: bool = False
    osxsave: bool = False
    smt_logical_processor_count: list[int] = field(default_factory=list)
    sgx: bool = False
    xsave: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CryptoFeatures:
        return cls(
            aesni=_bool(data, "aesni"),
            avx2=_bool(data, "avx2"),
            osxsave=_bool(data, "osxsave"),
            smt_logical_processor_count=[
                int(count) for count in data.get("smt_logical_processor_count") or []
            ],
            sgx=_bool(data, "sgx"),
            xsave=_bool(data, "xsave"),
        )


@dataclass(frozen=True)
class Hardware:
    cpu: list[Cpu]
    crypto: CryptoFeatures
    total_memory: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Hardware:
        return cls(
            cpu=[Cpu.from_dict(item) for item in data.get("cpu") or []],
            crypto=CryptoFeatures.from_dict(_mapping(data, "crypto")),
            total_memory=_int(data, "total_memory"),
        )


@dataclass(frozen=True)
class SystemInformation:
    system_name: str
    kernel_version: str
    os_version: str
    hardware: Hardware

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SystemInformation:
        return cls(
            system_name=_str(data, "system_name"),
            kernel_version=_str(data, "kernel_version"),
            os_version=_str(data, "os_version"),
            hardware=Hardware.from_dict(_mapping(data, "hardware")),
        )


class PolicyAction(str, enum.Enum):
    """What an exit policy rule does with matching traffic."""

    ACCEPT = "accept"
    REJECT = "reject"
    ACCEPT6 = "accept6"
    REJECT6 = "reject6"


@dataclass(frozen=True)
class NetworkRequester:
    encoded_identity_key: str
    encoded_x25519_key: str
    address: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NetworkRequester:
        return cls(
            encoded_identity_key=_str(data, "encoded_identity_key"),
            encoded_x25519_key=_str(data, "encoded_x25519_key"),
            address=_str(data, "address"),
        )


@dataclass(frozen=True)
class PortRange:
    start: int
    end: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PortRange:
        return cls(start=_int(data, "start"), end=_int(data, "end"))


@dataclass(frozen=True)
class PolicyPattern:
    ip_pattern: str
    ports: PortRange

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PolicyPattern:
        return cls(
            ip_pattern=_str(data, "ip_pattern"),
            ports=PortRange.from_dict(_mapping(data, "ports")),
        )


@dataclass(frozen=True)
class PolicyRule:
    action: PolicyAction
    pattern: PolicyPattern

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PolicyRule:
        return cls(
            action=PolicyAction(data.get("action")),
            pattern=PolicyPattern.from_dict(_mapping(data, "pattern")),
        )


@dataclass(frozen=True)
class ExitPolicy:
    rules: list[PolicyRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExitPolicy:
        return cls(rules=[PolicyRule.from_dict(item) for item in data.get("rules") or []])


@dataclass(frozen=True)
class NetworkRequesterExitPolicy:
    enabled: bool
    upstream_source: str
    last_updated: int
    policy: ExitPolicy | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NetworkRequesterExitPolicy:
        return cls(
            enabled=_bool(data, "enabled"),
            upstream_source=_str(data, "upstream_source"),
            last_updated=_int(data, "last_updated"),
            policy=_optional(data, "policy", ExitPolicy),
        )