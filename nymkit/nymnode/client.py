"""HTTP client for a nym node's API."""

from __future__ import annotations

import math
import threading
import time
from typing import Any

import requests

from nymkit.nymnode.models import (
    AuxiliaryDetails,
    BuildInformation,
    ClientInterfaces,
    Description,
    Gateway,
    Health,
    HostInformation,
    IPPacketRouter,
    MixnetWebsockets,
    NetworkRequester,
    NetworkRequesterExitPolicy,
    PacketsStatsMetrics,
    PrometheusMetrics,
    Roles,
    SystemInformation,
)
from nymkit.version import Version, parse

MIN_SUPPORTED_VERSION = Version(1, 3, 1)

ENDPOINT_TEMPLATE = "http://{host}/api/v1/{endpoint}"

ENDPOINT_AUXILIARY_DETAILS = "auxiliary-details"
ENDPOINT_BUILD_INFORMATION = "build-information"
ENDPOINT_DESCRIPTION = "description"
ENDPOINT_HOST_INFORMATION = "host-information"
ENDPOINT_ROLES = "roles"
ENDPOINT_SYSTEM_INFORMATION = "system-info"
ENDPOINT_GATEWAY = "gateway"
ENDPOINT_GATEWAY_CLIENT_INTERFACES = "gateway/client-interfaces"
ENDPOINT_GATEWAY_CLIENT_INTERFACES_MIXNET_WEBSOCKETS = (
    "gateway/client-interfaces/mixnet-websockets"
)
ENDPOINT_HEALTH = "health"
ENDPOINT_IPR = "ip-packet-router"
ENDPOINT_METRICS_PACKETS_STATS = "metrics/packets-stats"
ENDPOINT_METRICS_PROMETHEUS = "metrics/prometheus"
ENDPOINT_NR = "network-requester"
ENDPOINT_NR_EXIT_POLICY = "network-requester/exit-policy"

ENDPOINTS = (
    ENDPOINT_AUXILIARY_DETAILS,
    ENDPOINT_BUILD_INFORMATION,
    ENDPOINT_DESCRIPTION,
    ENDPOINT_HOST_INFORMATION,
    ENDPOINT_ROLES,
    ENDPOINT_SYSTEM_INFORMATION,
    ENDPOINT_GATEWAY,
    ENDPOINT_GATEWAY_CLIENT_INTERFACES,
    ENDPOINT_GATEWAY_CLIENT_INTERFACES_MIXNET_WEBSOCKETS,
    ENDPOINT_HEALTH,
    ENDPOINT_IPR,
    ENDPOINT_METRICS_PACKETS_STATS,
    ENDPOINT_METRICS_PROMETHEUS,
    ENDPOINT_NR,
    ENDPOINT_NR_EXIT_POLICY,
)


def endpoint_url(host: str, endpoint: str) -> str:
    """Return the URL of ``endpoint`` on the node at ``host``."""
    return ENDPOINT_TEMPLATE.format(host=host, endpoint=endpoint)


class UnsupportedNodeVersionError(Exception):
    """Raised when a node runs a version older than the client supports."""

    def __init__(self, version: Version) -> None:
        super().__init__(f"unsupported node version {version}")
        self.version = version


class NodeRequestError(Exception):
    """Raised when the node answers with a status other than 200 OK."""

    def __init__(self, status: str, url: str | None = None) -> None:
        super().__init__(status if url is None else f"{url} -> {status}")
        self.status = status
        self.url = url


class RateLimiter:
    """A token bucket allowing ``rate`` events per second with bursts of ``burst``.

    An infinite rate allows every event at once.
    """

    def __init__(self, rate: float = math.inf, burst: int = 0) -> None:
        if rate < 0:
            raise ValueError("rate cannot be negative")
        self._rate = float(rate)
        self._burst = int(burst)
        self._tokens = float(self._burst)
        self._last = time.monotonic()
        self._lock = threading.Lock()

    def wait(self) -> None:
        """Block until an event is allowed."""
        if math.isinf(self._rate):
            return
        if self._burst < 1:
            raise ValueError("wait exceeds limiter's burst")
        with self._lock:
            now = time.monotonic()
            refill = (now - self._last) * self._rate
            self._tokens = min(float(self._burst), self._tokens + refill)
            self._last = now
            self._tokens -= 1
            if self._tokens >= 0:
                return
            if self._rate == 0:
                self._tokens += 1
                raise ValueError("rate of zero never allows another event")
            delay = -self._tokens / self._rate
        time.sleep(delay)


def _status(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason}".strip()


class Client:
    """Reads the HTTP API of one nym node."""

    def __init__(
        self,
        host: str,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
    ) -> None:
        self.host = host
        self._session = session if session is not None else requests.Session()
        self._limiter = limiter if limiter is not None else RateLimiter()
        self._endpoints = {endpoint: endpoint_url(host, endpoint) for endpoint in ENDPOINTS}

    @classmethod
    def connect(
        cls,
        host: str,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
    ) -> Client:
        """Create a client and check that the node's version is supported."""
        client = cls(host, session, limiter)
        info = client.get_build_information()
        version = parse(info.build_version)
        if version < MIN_SUPPORTED_VERSION:
            raise UnsupportedNodeVersionError(version)
        return client

    def _get(self, endpoint: str, model: Any) -> Any:
        url = self._endpoints[endpoint]
        self._limiter.wait()
        with self._session.get(url) as response:
            if response.status_code != 200:
                raise NodeRequestError(_status(response), url)
            return model.from_dict(response.json())

    def get_auxiliary_details(self) -> AuxiliaryDetails:
        return self._get(ENDPOINT_AUXILIARY_DETAILS, AuxiliaryDetails)

    def get_build_information(self) -> BuildInformation:
        return self._get(ENDPOINT_BUILD_INFORMATION, BuildInformation)

    def get_description(self) -> Description:
        return self._get(ENDPOINT_DESCRIPTION, Description)

    def get_host_information(self) -> HostInformation:
        return self._get(ENDPOINT_HOST_INFORMATION, HostInformation)

    def get_roles(self) -> Roles:
        return self._get(ENDPOINT_ROLES, Roles)

    def get_system_information(self) -> SystemInformation:
        return self._get(ENDPOINT_SYSTEM_INFORMATION, SystemInformation)

    def get_gateway(self) -> Gateway:
        return self._get(ENDPOINT_GATEWAY, Gateway)

    def get_gateway_client_interfaces(self) -> ClientInterfaces:
        return self._get(ENDPOINT_GATEWAY_CLIENT_INTERFACES, ClientInterfaces)

    def get_gateway_client_interfaces_mixnet_websockets(self) -> MixnetWebsockets:
        return self._get(ENDPOINT_GATEWAY_CLIENT_INTERFACES_MIXNET_WEBSOCKETS, MixnetWebsockets)

    def health(self) -> Health:
        return self._get(ENDPOINT_HEALTH, Health)

    def get_ipr(self) -> IPPacketRouter:
        return self._get(ENDPOINT_IPR, IPPacketRouter)

    def get_packet_stats_metrics(self) -> PacketsStatsMetrics:
        return self._get(ENDPOINT_METRICS_PACKETS_STATS, PacketsStatsMetrics)

    def get_prometheus_metrics(self, token: str) -> PrometheusMetrics:
        """Return the node's Prometheus metrics text, authorised by a bearer token."""
        url = self._endpoints[ENDPOINT_METRICS_PROMETHEUS]
        headers = {"Authorization": "Bearer " + token}
        with self._session.get(url, headers=headers) as response:
            if response.status_code != 200:
                raise NodeRequestError(_status(response))
            return response.text

    def get_nr(self) -> NetworkRequester:
        return self._get(ENDPOINT_NR, NetworkRequester)

    def get_nr_exit_policy(self) -> NetworkRequesterExitPolicy:
        return self._get(ENDPOINT_NR_EXIT_POLICY, NetworkRequesterExitPolicy)