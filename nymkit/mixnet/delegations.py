"""Delegation models from the mixnet contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from nymkit.mixnet.cosmwasm import Coin, Decimal

OwnerProxySubKey = str


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


@dataclass(frozen=True)
class StorageKey:
    """A delegation storage key: the node id paired with the delegator address."""

    node_id: int = 0
    address: str = ""

    @classmethod
    def from_json(cls, value: Any) -> StorageKey:
        """Read a key from its JSON form, a two-element array."""
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
            raise ValueError(f"storage key must be a pair, got {value!r}")
        node_id, address = value
        return cls(node_id=int(node_id or 0), address=address or "")

    def is_zero(self) -> bool:
        return self.node_id == 0 and not self.address


def _optional_key(data: Mapping[str, Any], key: str) -> StorageKey | None:
    value = data.get(key)
    return None if value is None else StorageKey.from_json(value)


@dataclass(frozen=True)
class Delegation:
    owner: str
    node_id: int
    cumulative_reward_ratio: Decimal
    amount: Coin
    height: int
    proxy: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Delegation:
        amount = data.get("amount") or data.get("Amount") or {}
        return cls(
            owner=data.get("owner") or "",
            node_id=_int(data, "node_id"),
            cumulative_reward_ratio=Decimal.from_json(data.get("cumulative_reward_ratio")),
            amount=Coin.from_dict(amount),
            height=_int(data, "height"),
            proxy=data.get("proxy") or "",
        )


def _delegations(data: Mapping[str, Any]) -> list[Delegation]:
    return [Delegation.from_dict(item) for item in data.get("delegations") or []]


@dataclass(frozen=True)
class PagedNodeDelegations:
    delegations: list[Delegation] = field(default_factory=list)
    start_next_after: OwnerProxySubKey = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedNodeDelegations:
        return cls(
            delegations=_delegations(data),
            start_next_after=data.get("start_next_after") or "",
        )


@dataclass(frozen=True)
class PagedDelegatorDelegations:
    delegations: list[Delegation] = field(default_factory=list)
    start_next_after: StorageKey | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedDelegatorDelegations:
        return cls(
            delegations=_delegations(data),
            start_next_after=_optional_key(data, "start_next_after"),
        )


@dataclass(frozen=True)
class DelegatorNodeDelegation:
    delegation: Delegation | None
    node_still_bonded: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DelegatorNodeDelegation:
        delegation = data.get("delegation")
        return cls(
            delegation=None if delegation is None else Delegation.from_dict(delegation),
            node_still_bonded=bool(data.get("node_still_bonded", False)),
        )


@dataclass(frozen=True)
class PagedAllDelegations:
    delegations: list[Delegation] = field(default_factory=list)
    start_next_after: StorageKey | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedAllDelegations:
        return cls(
            delegations=_delegations(data),
            start_next_after=_optional_key(data, "start_next_after"),
        )