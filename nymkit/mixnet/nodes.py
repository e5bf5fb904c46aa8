"""Nym node models from the mixnet contract."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

from nymkit.mixnet.cosmwasm import Coin, Decimal, Percent


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    return None if value is None else int(value)


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return data.get(key) or {}


class Role(str, enum.Enum):
    """The role a node plays in the rewarded set."""

    ENTRY_GATEWAY = "eg"
    LAYER1 = "l1"
    LAYER2 = "l2"
    LAYER3 = "l3"
    EXIT_GATEWAY = "xg"
    STANDBY = "stb"

    @classmethod
    def from_code(cls, code: int) -> Role:
        """Return the role for its numeric code on the wire."""
        if isinstance(code, bool):
            raise ValueError(f"invalid role code {code!r}")
        try:
            return _ROLE_CODES[int(code)]
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"unknown role code {code!r}") from None


_ROLE_CODES = {
    0: Role.ENTRY_GATEWAY,
    1: Role.LAYER1,
    2: Role.LAYER2,
    3: Role.LAYER3,
    4: Role.EXIT_GATEWAY,
    128: Role.STANDBY,
}


@dataclass(frozen=True)
class NodeCostParams:
    profit_margin_percent: Percent
    interval_operating_cost: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeCostParams:
        return cls(
            profit_margin_percent=Percent.from_json(data.get("profit_margin_percent")),
            interval_operating_cost=Coin.from_dict(_mapping(data, "interval_operating_cost")),
        )


@dataclass(frozen=True)
class NodeRewardingDetails:
    cost_params: NodeCostParams
    operator: Decimal
    delegates: Decimal
    total_unit_reward: Decimal
    unit_delegation: Decimal
    last_rewarded_epoch: int
    unique_delegations: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeRewardingDetails:
        return cls(
            cost_params=NodeCostParams.from_dict(_mapping(data, "cost_params")),
            operator=Decimal.from_json(data.get("operator")),
            delegates=Decimal.from_json(data.get("delegates")),
            total_unit_reward=Decimal.from_json(data.get("total_unit_reward")),
            unit_delegation=Decimal.from_json(data.get("unit_delegation")),
            last_rewarded_epoch=_int(data, "last_rewarded_epoch"),
            unique_delegations=_int(data, "unique_delegations"),
        )


@dataclass(frozen=True)
class RoleMetadata:
    highest_id: int
    num_nodes: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoleMetadata:
        return cls(highest_id=_int(data, "highest_id"), num_nodes=_int(data, "num_nodes"))


@dataclass(frozen=True)
class RewardedSetMetadata:
    epoch_id: int
    fully_assigned: bool
    entry_gateway_metadata: RoleMetadata
    exit_gateway_metadata: RoleMetadata
    layer1_metadata: RoleMetadata
    layer2_metadata: RoleMetadata
    layer3_metadata: RoleMetadata
    standby_metadata: RoleMetadata

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RewardedSetMetadata:
        def meta(key: str) -> RoleMetadata:
            return RoleMetadata.from_dict(_mapping(data, key))

        return cls(
            epoch_id=_int(data, "epoch_id"),
            fully_assigned=bool(data.get("fully_assigned", False)),
            entry_gateway_metadata=meta("entry_gateway_metadata"),
            exit_gateway_metadata=meta("exit_gateway_metadata"),
            layer1_metadata=meta("layer1_metadata"),
            layer2_metadata=meta("layer2_metadata"),
            layer3_metadata=meta("layer3_metadata"),
            standby_metadata=meta("standby_metadata"),
        )


@dataclass(frozen=True)
class Node:
    host: str
    identity_key: str
    custom_http_port: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        return cls(
            host=data.get("host") or "",
            identity_key=data.get("identity_key") or "",
            custom_http_port=_optional_int(data, "custom_http_port"),
        )


@dataclass(frozen=True)
class BondedNode:
    node_id: int
    owner: str
    original_pledge: Coin
    bonding_height: int
    is_unbonding: bool
    node: Node

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BondedNode:
        return cls(
            node_id=_int(data, "node_id"),
            owner=data.get("owner") or "",
            original_pledge=Coin.from_dict(_mapping(data, "original_pledge")),
            bonding_height=_int(data, "bonding_height"),
            is_unbonding=bool(data.get("is_unbonding", False)),
            node=Node.from_dict(_mapping(data, "node")),
        )


@dataclass(frozen=True)
class NodeConfigUpdate:
    """A change to a node's announced host or HTTP port."""

    host: str = ""
    custom_http_port: int | None = None
    restore_default_http_port: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object sent to the contract; unset fields are left out."""
        result: dict[str, Any] = {}
        if self.host:
            result["host"] = self.host
        if self.custom_http_port:
            result["custom_http_port"] = self.custom_http_port
        result["restore_default_http_port"] = self.restore_default_http_port
        return result


@dataclass(frozen=True)
class PendingNodeChanges:
    pledge_change: int | None = None
    cost_params_change: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingNodeChanges:
        return cls(
            pledge_change=_optional_int(data, "pledge_change"),
            cost_params_change=_optional_int(data, "cost_params_change"),
        )


@dataclass(frozen=True)
class DetailedNode:
    bond_information: BondedNode
    rewarding_details: NodeRewardingDetails
    pending_changes: PendingNodeChanges

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DetailedNode:
        return cls(
            bond_information=BondedNode.from_dict(_mapping(data, "bond_information")),
            rewarding_details=NodeRewardingDetails.from_dict(_mapping(data, "rewarding_details")),
            pending_changes=PendingNodeChanges.from_dict(_mapping(data, "pending_changes")),
        )


@dataclass(frozen=True)
class UnbondedNode:
    identity_key: str
    node_id: int
    operator: str
    unbonding_height: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnbondedNode:
        return cls(
            identity_key=data.get("identity_key") or "",
            node_id=_int(data, "node_id"),
            operator=data.get("owner") or "",
            unbonding_height=_int(data, "unbonding_height"),
        )


@dataclass(frozen=True)
class DetailedByOperator:
    operator: str
    details: DetailedNode | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DetailedByOperator:
        details = data.get("details")
        return cls(
            operator=data.get("address") or "",
            details=None if details is None else DetailedNode.from_dict(details),
        )


@dataclass(frozen=True)
class NodeStakeSaturation:
    node_id: int
    current_saturation: Decimal
    uncapped_saturation: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeStakeSaturation:
        return cls(
            node_id=_int(data, "node_id"),
            current_saturation=Decimal.from_json(data.get("current_saturation")),
            uncapped_saturation=Decimal.from_json(data.get("uncapped_saturation")),
        )


@dataclass(frozen=True)
class PagedUnbondedNodes:
    nodes: list[UnbondedNode] = field(default_factory=list)
    start_next_after: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedUnbondedNodes:
        return cls(
            nodes=[UnbondedNode.from_dict(item) for item in data.get("nodes") or []],
            start_next_after=_optional_int(data, "start_next_after"),
        )


@dataclass(frozen=True)
class PagedBondedNodes:
    nodes: list[BondedNode] = field(default_factory=list)
    start_next_after: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedBondedNodes:
        return cls(
            nodes=[BondedNode.from_dict(item) for item in data.get("nodes") or []],
            start_next_after=_optional_int(data, "start_next_after"),
        )


@dataclass(frozen=True)
class PagedDetailedNodes:
    nodes: list[DetailedNode] = field(default_factory=list)
    start_next_after: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedDetailedNodes:
        return cls(
            nodes=[DetailedNode.from_dict(item) for item in data.get("nodes") or []],
            start_next_after=_optional_int(data, "start_next_after"),
        )


@dataclass(frozen=True)
class EpochAssignment:
    epoch_id: int
    nodes: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EpochAssignment:
        return cls(
            epoch_id=_int(data, "epoch_id"),
            nodes=[int(node_id) for node_id in data.get("nodes") or []],
        )


@dataclass(frozen=True)
class EpochAssignmentMetadata:
    metadata: RewardedSetMetadata

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EpochAssignmentMetadata:
        return cls(metadata=RewardedSetMetadata.from_dict(_mapping(data, "metadata")))