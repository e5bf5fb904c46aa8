# nymkit

Tools for talking to the Nym mixnet from Python:

- `nymkit.nymnode` — a client for the HTTP API that every Nym node serves
  (build information, roles, gateway details, health, metrics, exit policy),
  and dataclass models of its responses.
- `nymkit.wsc` — a websocket client for a local Nym native client, with typed
  requests, responses and message tags.
- `nymkit.mixnet` — typed models of mixnet smart-contract data: nodes,
  delegations, rewards, pending interval and epoch events, contract state and
  epochs, plus contract constants and event type names.
- `nymkit.uint128`, `nymkit.version`, `nymkit.successgroup` — small building
  blocks: an unsigned 128-bit integer, `x.y.z` version numbers and a
  "first success wins" thread group.

## Installation

```
pip install nymkit
```

For running the test suite:

```
pip install "nymkit[test]"
pytest
```

## Querying a node

`Client.connect` fetches the node's build information first and raises
`UnsupportedNodeVersionError` if the node runs a version older than 1.3.1.
Any answer other than `200 OK` raises `NodeRequestError`.

```python
from nymkit.nymnode.client import Client, NodeRequestError, RateLimiter

# at most 5 requests per second, bursts of 1
client = Client.connect("203.0.113.10:8080", None, RateLimiter(5, 1))

build = client.get_build_information()
print(build.build_version)

roles = client.get_roles()
print(roles.mixnode_enabled, roles.gateway_enabled)

try:
    policy = client.get_nr_exit_policy()
except NodeRequestError as exc:
    print("request failed:", exc)
```

`Client(host)` builds a client without the version check. A
`requests.Session` can be passed as the second argument; without a
`RateLimiter` requests are not limited.

Every endpoint has its own method: `get_auxiliary_details`,
`get_description`, `get_host_information`, `get_system_information`,
`get_gateway`, `get_gateway_client_interfaces`,
`get_gateway_client_interfaces_mixnet_websockets`, `health`, `get_ipr`,
`get_packet_stats_metrics`, `get_nr` and `get_nr_exit_policy`. Each returns
a frozen dataclass from `nymkit.nymnode.models`. Prometheus metrics need a
bearer token and come back as plain text:

```python
text = client.get_prometheus_metrics("token")
```

## Talking to a native client over websocket

```python
import threading

from nymkit.wsc.client import Client
from nymkit.wsc.messages import GetSelfAddress, Send

client = Client("ws://localhost:1977")
client.dial()
threading.Thread(target=client.listen_and_serve, daemon=True).start()

client.send_request_as_text(GetSelfAddress())
client.send_request_as_text(Send(message="hello", recipient="<nym address>"))

for response in client.messages():
    print(response.type().text(), response)
```

Incoming text frames are decoded into `ErrorResponse`, `Received`,
`SelfAddress` or `LaneQueueLength` objects and yielded by
`client.messages()`, which ends once `listen_and_serve` stops. Frames that
cannot be decoded, and binary frames, are reported on standard error and
skipped. Other requests are `SendAnonymous`, `Reply`, `ClosedConnection` and
`GetLaneQueueLength`.

Sending before `dial()` raises `ConnectionNotEstablishedError`; a failed
`dial()` raises `ConnectionError`. Call `client.close()` to send a close
frame.

`nymkit.wsc.tags` holds the `RequestTag` and `ResponseTag` enums with their
text and binary tags, and `response_tag_from_json` /
`response_tag_from_binary`, which raise `UnknownResponseTagError` for tags
they do not know.

## Contract types

Each model has a `from_dict` class method that takes the decoded JSON of a
contract query:

```python
from nymkit.mixnet.contract import EpochState
from nymkit.mixnet.nodes import BondedNode

state = EpochState.parse("in_progress")
assert state.is_in_progress()

node = BondedNode.from_dict({
    "node_id": 7,
    "owner": "n1owner",
    "original_pledge": {"denom": "unym", "amount": "100000000"},
    "bonding_height": 1234,
    "is_unbonding": False,
    "node": {"host": "203.0.113.10", "identity_key": "identity"},
})
print(node.node_id, node.original_pledge.amount)
```

Amounts are `Uint128` values; contract decimals and percentages are
`Decimal` and `Percent` wrappers around `decimal.Decimal`. Timestamps in
RFC 3339 form are read with `parse_offset_datetime` and written with
`format_offset_datetime`.

## Small helpers

```python
from nymkit.uint128 import Uint128
from nymkit.version import parse

big = Uint128.parse("340282366920938463463374607431768211455")
print(big.leading_zeros(), big.ones_count())
print(str(Uint128(1) << 100))

print(str(parse("1.3.1")))
```

Checked arithmetic on `Uint128` (`+`, `-`, `*`) raises `OverflowError` on
overflow and underflow; `add_wrap`, `sub_wrap` and `mul_wrap` wrap around
modulo 2**128. `parse` raises `InsufficientPartsError` when a version does
not have three parts and `ValueError` for a bad component.

`successgroup.Group` runs callables in threads, each receiving a
`threading.Event` that is set as soon as one of them returns without raising:

```python
from nymkit.successgroup import Group

group = Group()
group.set_limit(2)
group.go(lambda cancel: fetch_from_first_mirror(cancel))
group.go(lambda cancel: fetch_from_second_mirror(cancel))
errors = group.wait()  # empty if any task succeeded
```

## What it does not do

- It does not query the mixnet contract or any chain: `nymkit.mixnet` only
  models data that has already been fetched and decoded.
- The websocket client sends and understands text (JSON) frames only; there
  is no binary protocol.
- There is no command-line program; everything is used from Python.