import math
import time

import pytest
import responses

from nymkit.nymnode.client import (
    Client,
    NodeRequestError,
    RateLimiter,
    UnsupportedNodeVersionError,
    endpoint_url,
)
from nymkit.nymnode.models import PolicyAction
from nymkit.version import InsufficientPartsError

HOST = "node.example.com:8080"


def url(endpoint):
    return f"http://{HOST}/api/v1/{endpoint}"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def test_endpoint_url():
    assert endpoint_url(HOST, "roles") == "http://node.example.com:8080/api/v1/roles"


def test_connect_accepts_supported_version(mocked):
    mocked.get(url("build-information"), json={"build_version": "1.3.1"})
    client = Client.connect(HOST)
    assert client.host == HOST


def test_connect_rejects_old_version(mocked):
    mocked.get(url("build-information"), json={"build_version": "1.2.9"})
    with pytest.raises(UnsupportedNodeVersionError):
        Client.connect(HOST)


def test_connect_rejects_malformed_version(mocked):
    mocked.get(url("build-information"), json={"build_version": "1.3"})
    with pytest.raises(InsufficientPartsError):
        Client.connect(HOST)


CASES = [
    (
        "get_auxiliary_details",
        "auxiliary-details",
        {"location": "Atlantis", "announce_ports": {"mix_port": 1789}},
        lambda r: r.announce_ports.mix_port,
        1789,
    ),
    (
        "get_build_information",
        "build-information",
        {"build_version": "1.5.0"},
        lambda r: r.build_version,
        "1.5.0",
    ),
    ("get_description", "description", {"moniker": "node"}, lambda r: r.moniker, "node"),
    (
        "get_host_information",
        "host-information",
        {"data": {"ip_address": ["192.0.2.1"]}, "signature": "sig"},
        lambda r: r.data.ips,
        ["192.0.2.1"],
    ),
    ("get_roles", "roles", {"gateway_enabled": True}, lambda r: r.gateway_enabled, True),
    (
        "get_system_information",
        "system-info",
        {"hardware": {"total_memory": 8192}},
        lambda r: r.hardware.total_memory,
        8192,
    ),
    (
        "get_gateway",
        "gateway",
        {"client_interfaces": {"wireguard": {"port": 51822}}},
        lambda r: r.client_interfaces.wireguard.port,
        51822,
    ),
    (
        "get_gateway_client_interfaces",
        "gateway/client-interfaces",
        {"mixnet_websockets": {"ws_port": 9000}},
        lambda r: r.mixnet_websockets.ws_port,
        9000,
    ),
    (
        "get_gateway_client_interfaces_mixnet_websockets",
        "gateway/client-interfaces/mixnet-websockets",
        {"ws_port": 9000, "wss_port": 9001},
        lambda r: r.wss_port,
        9001,
    ),
    ("health", "health", {"status": "up", "uptime": 60}, lambda r: r.status, "up"),
    ("get_ipr", "ip-packet-router", {"address": "addr"}, lambda r: r.address, "addr"),
    (
        "get_packet_stats_metrics",
        "metrics/packets-stats",
        {"ingress_mixing": {"final_hop_packets_received": 20}},
        lambda r: r.ingress_mixing.final_hop_packets_received,
        20,
    ),
    (
        "get_nr",
        "network-requester",
        {"encoded_identity_key": "id"},
        lambda r: r.encoded_identity_key,
        "id",
    ),
    (
        "get_nr_exit_policy",
        "network-requester/exit-policy",
        {"enabled": True, "policy": {"rules": [{"action": "reject", "pattern": {}}]}},
        lambda r: r.policy.rules[0].action,
        PolicyAction.REJECT,
    ),
]


@pytest.mark.parametrize("method, endpoint, payload, extract, expected", CASES)
def test_getters(mocked, method, endpoint, payload, extract, expected):
    mocked.get(url(endpoint), json=payload)
    client = Client(HOST)
    result = getattr(client, method)()
    assert extract(result) == expected
    assert mocked.calls[0].request.url == url(endpoint)


def test_error_status_raises(mocked):
    mocked.get(url("roles"), status=404)
    with pytest.raises(NodeRequestError) as info:
        Client(HOST).get_roles()
    assert info.value.url == url("roles")
    assert str(info.value).startswith(url("roles") + " -> 404")


def test_prometheus_metrics(mocked):
    body = "# TYPE packets counter\npackets 1\n"
    mocked.get(url("metrics/prometheus"), body=body)
    result = Client(HOST).get_prometheus_metrics("token")
    assert result == body
    assert mocked.calls[0].request.headers["Authorization"] == "Bearer token"


def test_prometheus_metrics_error(mocked):
    mocked.get(url("metrics/prometheus"), status=401)
    with pytest.raises(NodeRequestError) as info:
        Client(HOST).get_prometheus_metrics("token")
    assert info.value.url is None
    assert str(info.value).startswith("401")


def test_unlimited_limiter_does_not_wait(mocked):
    mocked.get(url("health"), json={"status": "up", "uptime": 5})
    client = Client(HOST, limiter=RateLimiter(math.inf, 0))
    start = time.monotonic()
    statuses = [client.health().status for _ in range(20)]
    assert time.monotonic() - start < 0.5
    assert statuses == ["up"] * 20
    assert len(mocked.calls) == 20


def test_limiter_without_burst_raises():
    with pytest.raises(ValueError):
        RateLimiter(1.0, 0).wait()


def test_limiter_spaces_events(mocked):
    mocked.get(url("health"), json={"status": "up", "uptime": 5})
    client = Client(HOST, limiter=RateLimiter(20, 2))
    start = time.monotonic()
    uptimes = [client.health().uptime for _ in range(3)]
    assert time.monotonic() - start >= 0.04
    assert uptimes == [5, 5, 5]
    assert len(mocked.calls) == 3


def test_limiter_is_used_for_requests(mocked):
    mocked.get(url("health"), json={"status": "up"})
    client = Client(HOST, limiter=RateLimiter(1.0, 0))
    with pytest.raises(ValueError):
        client.health()
    assert len(mocked.calls) == 0