"""Pending epoch and interval events from the mixnet contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from nymkit.mixnet.cosmwasm import Coin
from nymkit.mixnet.nodes import NodeCostParams
from nymkit.mixnet.rewards import ActiveSetUpdate, IntervalRewardingParamsUpdate

IntervalEventID = int
EpochEventID = int


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return data.get(key) or {}


def _coin(data: Mapping[str, Any], key: str) -> Coin:
    return Coin.from_dict(_mapping(data, key))


@dataclass(frozen=True)
class Delegate:
    owner: str
    node_id: int
    amount: Coin
    proxy: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Delegate:
        return cls(
            owner=data.get("owner") or "",
            node_id=_int(data, "node_id"),
            amount=_coin(data, "amount"),
            proxy=data.get("proxy") or "",
        )


@dataclass(frozen=True)
class Undelegate:
    owner: str
    node_id: int
    proxy: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Undelegate:
        return cls(
            owner=data.get("owner") or "",
            node_id=_int(data, "node_id"),
            proxy=data.get("proxy") or "",
        )


@dataclass(frozen=True)
class NodeIncreasePledge:
    node_id: int
    increase_by: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeIncreasePledge:
        return cls(node_id=_int(data, "node_id"), increase_by=_coin(data, "amount"))


@dataclass(frozen=True)
class MixnodePledgeMore:
    mix_id: int
    amount: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MixnodePledgeMore:
        return cls(mix_id=_int(data, "mix_id"), amount=_coin(data, "amount"))


@dataclass(frozen=True)
class NodeDecreasePledge:
    node_id: int
    decrease_by: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeDecreasePledge:
        return cls(node_id=_int(data, "node_id"), decrease_by=_coin(data, "decrease_by"))


@dataclass(frozen=True)
class MixnodeDecreasePledge:
    mix_id: int
    decrease_by: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MixnodeDecreasePledge:
        return cls(mix_id=_int(data, "mix_id"), decrease_by=_coin(data, "decrease_by"))


@dataclass(frozen=True)
class UnbondMixnode:
    mix_id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnbondMixnode:
        return cls(mix_id=_int(data, "mix_id"))


@dataclass(frozen=True)
class UnbondNode:
    node_id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnbondNode:
        return cls(node_id=_int(data, "node_id"))


@dataclass(frozen=True)
class UpdateActiveSet:
    update: ActiveSetUpdate

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateActiveSet:
        return cls(update=ActiveSetUpdate.from_dict(_mapping(data, "update")))


def _variant(data: Mapping[str, Any], key: str, kind: Any) -> Any:
    value = data.get(key)
    return None if value is None else kind.from_dict(value)


@dataclass(frozen=True)
class PendingEpochEventKind:
    """The change an epoch event carries; exactly one field is normally set."""

    delegate: Delegate | None = None
    undelegate: Undelegate | None = None
    node_increase_pledge: NodeIncreasePledge | None = None
    mixnode_pledge_more: MixnodePledgeMore | None = None
    node_decrease_pledge: NodeDecreasePledge | None = None
    mixnode_decrease_pledge: MixnodeDecreasePledge | None = None
    unbond_mixnode: UnbondMixnode | None = None
    unbond_node: UnbondNode | None = None
    update_active_set: UpdateActiveSet | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingEpochEventKind:
        return cls(
            delegate=_variant(data, "delegate", Delegate),
            undelegate=_variant(data, "undelegate", Undelegate),
            node_increase_pledge=_variant(data, "nym_node_pledge_more", NodeIncreasePledge),
            mixnode_pledge_more=_variant(data, "mixnode_pledge_more", MixnodePledgeMore),
            node_decrease_pledge=_variant(data, "nym_node_decrease_pledge", NodeDecreasePledge),
            mixnode_decrease_pledge=_variant(data, "mixnode_decrease_pledge", MixnodeDecreasePledge),
            unbond_mixnode=_variant(data, "unbond_mixnode", UnbondMixnode),
            unbond_node=_variant(data, "unbond_nym_node", UnbondNode),
            update_active_set=_variant(data, "update_active_set", UpdateActiveSet),
        )


@dataclass(frozen=True)
class PendingEpochEventData:
    created_at: int
    kind: PendingEpochEventKind

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingEpochEventData:
        return cls(
            created_at=_int(data, "created_at"),
            kind=PendingEpochEventKind.from_dict(_mapping(data, "kind")),
        )


@dataclass(frozen=True)
class PendingEpochEvent:
    event_id: EpochEventID
    event: PendingEpochEventData

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingEpochEvent:
        event_id = data.get("event_id", data.get("id"))
        return cls(
            event_id=int(event_id or 0),
            event=PendingEpochEventData.from_dict(_mapping(data, "event")),
        )


@dataclass(frozen=True)
class ChangeMixCostParams:
    mix_id: int
    new_costs: NodeCostParams

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChangeMixCostParams:
        return cls(
            mix_id=_int(data, "mix_id"),
            new_costs=NodeCostParams.from_dict(_mapping(data, "new_costs")),
        )


@dataclass(frozen=True)
class ChangeNodeCostParams:
    node_id: int
    new_costs: NodeCostParams

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChangeNodeCostParams:
        return cls(
            node_id=_int(data, "node_id"),
            new_costs=NodeCostParams.from_dict(_mapping(data, "new_costs")),
        )


@dataclass(frozen=True)
class UpdateRewardingParams:
    update: IntervalRewardingParamsUpdate

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateRewardingParams:
        return cls(update=IntervalRewardingParamsUpdate.from_dict(_mapping(data, "update")))


@dataclass(frozen=True)
class UpdateIntervalConfig:
    epochs_in_interval: int
    epoch_duration_secs: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdateIntervalConfig:
        return cls(
            epochs_in_interval=_int(data, "epochs_in_interval"),
            epoch_duration_secs=_int(data, "epoch_duration_secs"),
        )


@dataclass(frozen=True)
class PendingIntervalEventKind:
    """The change an interval event carries; exactly one field is normally set."""

    change_mix_cost_params: ChangeMixCostParams | None = None
    change_node_cost_params: ChangeNodeCostParams | None = None
    update_rewarding_params: UpdateRewardingParams | None = None
    update_interval_config: UpdateIntervalConfig | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingIntervalEventKind:
        return cls(
            change_mix_cost_params=_variant(data, "change_mix_cost_params", ChangeMixCostParams),
            change_node_cost_params=_variant(
                data, "change_nym_node_cost_params", ChangeNodeCostParams
            ),
            update_rewarding_params=_variant(data, "update_rewarding_params", UpdateRewardingParams),
            update_interval_config=_variant(data, "update_interval_config", UpdateIntervalConfig),
        )


@dataclass(frozen=True)
class PendingIntervalEventData:
    created_at: int
    kind: PendingIntervalEventKind

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingIntervalEventData:
        return cls(
            created_at=_int(data, "created_at"),
            kind=PendingIntervalEventKind.from_dict(_mapping(data, "kind")),
        )


@dataclass(frozen=True)
class PendingIntervalEvent:
    event_id: IntervalEventID
    event: PendingIntervalEventData

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingIntervalEvent:
        event_id = data.get("event_id", data.get("id"))
        return cls(
            event_id=int(event_id or 0),
            event=PendingIntervalEventData.from_dict(_mapping(data, "event")),
        )


@dataclass(frozen=True)
class PendingEpochEvents:
    seconds_until_executable: int
    events: list[PendingEpochEvent] = field(default_factory=list)
    start_next_after: EpochEventID = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingEpochEvents:
        return cls(
            seconds_until_executable=_int(data, "seconds_until_executable"),
            events=[PendingEpochEvent.from_dict(item) for item in data.get("events") or []],
            start_next_after=_int(data, "start_next_after"),
        )


@dataclass(frozen=True)
class PendingIntervalEvents:
    seconds_until_executable: int
    events: list[PendingIntervalEvent] = field(default_factory=list)
    start_next_after: IntervalEventID = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingIntervalEvents:
        return cls(
            seconds_until_executable=_int(data, "seconds_until_executable"),
            events=[PendingIntervalEvent.from_dict(item) for item in data.get("events") or []],
            start_next_after=_int(data, "start_next_after"),
        )


@dataclass(frozen=True)
class NumberOfPendingEvents:
    epoch_events: int
    interval_events: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NumberOfPendingEvents:
        return cls(
            epoch_events=_int(data, "epoch_events"),
            interval_events=_int(data, "interval_events"),
        )