import pytest

from nymkit.nymnode.models import (
    AuxiliaryDetails,
    BuildInformation,
    ClientInterfaces,
    Description,
    Gateway,
    Health,
    HostInformation,
    IPPacketRouter,
    NetworkRequester,
    NetworkRequesterExitPolicy,
    PacketsStatsMetrics,
    PolicyAction,
    PolicyRule,
    Roles,
    SystemInformation,
)


def test_gateway_with_interfaces():
    data = {
        "client_interfaces": {
            "mixnet_websockets": {"ws_port": 9000, "wss_port": 9001},
            "wireguard": {"port": 51822, "public_key": "wg-public-key"},
        },
        "enforces_zk_nyms": True,
    }
    gateway = Gateway.from_dict(data)
    assert gateway.enforces_zk_nyms is True
    assert gateway.client_interfaces.mixnet_websockets.ws_port == 9000
    assert gateway.client_interfaces.mixnet_websockets.wss_port == 9001
    assert gateway.client_interfaces.wireguard.port == 51822
    assert gateway.client_interfaces.wireguard.public_key == "wg-public-key"


def test_client_interfaces_missing_parts():
    interfaces = ClientInterfaces.from_dict({"mixnet_websockets": {"ws_port": 9000}})
    assert interfaces.wireguard is None
    assert interfaces.mixnet_websockets.wss_port is None
    assert interfaces.mixnet_websockets.ws_port == 9000


def test_health():
    health = Health.from_dict({"status": "up", "uptime": 3600})
    assert health.status == "up"
    assert health.uptime == 3600


def test_packet_stats():
    data = {
        "ingress_mixing": {
            "forward_hop_packets_received": 10,
            "final_hop_packets_received": 20,
            "malformed_packets_received": 1,
            "excessive_delay_packets": 2,
            "forward_hop_packets_dropped": 3,
            "final_hop_packets_dropped": 4,
        },
        "egress_mixing": {
            "forward_hop_packets_sent": 30,
            "forward_hop_packets_dropped": 5,
            "ack_packets_sent": 6,
        },
    }
    stats = PacketsStatsMetrics.from_dict(data)
    assert stats.ingress_mixing.final_hop_packets_received == 20
    assert stats.ingress_mixing.final_hop_packets_dropped == 4
    assert stats.egress_mixing.ack_packets_sent == 6
    assert stats.egress_mixing.forward_hop_packets_dropped == 5


def test_auxiliary_details():
    data = {
        "location": "Atlantis",
        "announce_ports": {"verloc_port": 1790},
        "accepted_operator_terms_and_conditions": True,
    }
    details = AuxiliaryDetails.from_dict(data)
    assert details.location == "Atlantis"
    assert details.announce_ports.verloc_port == 1790
    assert details.announce_ports.mix_port is None
    assert details.accepted_operator_terms_and_conditions is True


def test_build_information():
    data = {"binary_name": "nym-node", "build_version": "1.3.1", "cargo_triple": "x86_64"}
    info = BuildInformation.from_dict(data)
    assert info.binary_name == "nym-node"
    assert info.build_version == "1.3.1"
    assert info.cargo_triple == "x86_64"
    assert info.commit_sha == ""


def test_description():
    data = {"moniker": "node", "website": "https://node.example.com", "details": "d"}
    description = Description.from_dict(data)
    assert description.moniker == "node"
    assert description.website == "https://node.example.com"
    assert description.security_contact == ""


def test_host_information():
    data = {
        "data": {
            "ip_address": ["192.0.2.1", "2001:db8::1"],
            "hostname": "node.example.com",
            "keys": {"ed25519_identity": "identity", "x25519_sphinx": "sphinx"},
        },
        "signature": "sig",
    }
    info = HostInformation.from_dict(data)
    assert info.data.ips == ["192.0.2.1", "2001:db8::1"]
    assert info.data.hostname == "node.example.com"
    assert info.data.keys.ed25519_identity == "identity"
    assert info.data.keys.x25519_noise == ""
    assert info.signature == "sig"


def test_roles():
    roles = Roles.from_dict({"gateway_enabled": True, "ip_packet_router_enabled": True})
    assert roles.gateway_enabled is True
    assert roles.ip_packet_router_enabled is True
    assert roles.mixnode_enabled is False


def test_system_information():
    data = {
        "system_name": "Linux",
        "kernel_version": "6.1",
        "os_version": "12",
        "hardware": {
            "cpu": [{"brand": "Brand", "frequency": 2400, "name": "cpu0", "vendor_id": "V"}],
            "crypto": {"aesni": True, "smt_logical_processor_count": [2, 4]},
            "total_memory": 8192,
        },
    }
    info = SystemInformation.from_dict(data)
    assert info.system_name == "Linux"
    assert info.hardware.cpu[0].frequency == 2400
    assert info.hardware.cpu[0].name == "cpu0"
    assert info.hardware.crypto.aesni is True
    assert info.hardware.crypto.smt_logical_processor_count == [2, 4]
    assert info.hardware.total_memory == 8192


def test_ipr_and_network_requester():
    data = {"encoded_identity_key": "id", "encoded_x25519_key": "x", "address": "addr"}
    ipr = IPPacketRouter.from_dict(data)
    nr = NetworkRequester.from_dict(data)
    assert (ipr.encoded_identity_key, ipr.encoded_x25519_key, ipr.address) == ("id", "x", "addr")
    assert (nr.encoded_identity_key, nr.encoded_x25519_key, nr.address) == ("id", "x", "addr")


def test_exit_policy():
    data = {
        "enabled": True,
        "upstream_source": "https://policy.example.com",
        "last_updated": 1700000000,
        "policy": {
            "rules": [
                {
                    "action": "accept6",
                    "pattern": {"ip_pattern": "*", "ports": {"start": 80, "end": 443}},
                },
                {"action": "reject", "pattern": {"ip_pattern": "10.0.0.0/8"}},
            ]
        },
    }
    policy = NetworkRequesterExitPolicy.from_dict(data)
    assert policy.enabled is True
    assert policy.upstream_source == "https://policy.example.com"
    assert policy.last_updated == 1700000000
    first, second = policy.policy.rules
    assert first.action is PolicyAction.ACCEPT6
    assert first.pattern.ports.start == 80
    assert first.pattern.ports.end == 443
    assert second.action is PolicyAction.REJECT
    assert second.pattern.ip_pattern == "10.0.0.0/8"


def test_exit_policy_without_policy():
    policy = NetworkRequesterExitPolicy.from_dict({"enabled": False, "policy": None})
    assert policy.policy is None
    assert policy.enabled is False


def test_unknown_policy_action():
    with pytest.raises(ValueError):
        PolicyRule.from_dict({"action": "maybe", "pattern": {}})