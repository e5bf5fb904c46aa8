"""Rewarding parameters and reward estimates from the mixnet contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from nymkit.mixnet.cosmwasm import Coin, Decimal, Percent

Performance = Percent
WorkFactor = Decimal


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return data.get(key) or {}


@dataclass(frozen=True)
class IntervalRewardingParams:
    reward_pool: Decimal
    staking_supply: Decimal
    staking_supply_scale_factor: Percent
    epoch_reward_budget: Decimal
    stake_saturation_point: Decimal
    sybil_resistance: Percent
    active_set_work_factor: Decimal
    interval_pool_emission: Percent

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntervalRewardingParams:
        return cls(
            reward_pool=Decimal.from_json(data.get("reward_pool")),
            staking_supply=Decimal.from_json(data.get("staking_supply")),
            staking_supply_scale_factor=Percent.from_json(data.get("staking_supply_scale_factor")),
            epoch_reward_budget=Decimal.from_json(data.get("epoch_reward_budget")),
            stake_saturation_point=Decimal.from_json(data.get("stake_saturation_point")),
            sybil_resistance=Percent.from_json(data.get("sybil_resistance")),
            active_set_work_factor=Decimal.from_json(data.get("active_set_work_factor")),
            interval_pool_emission=Percent.from_json(data.get("interval_pool_emission")),
        )


@dataclass(frozen=True)
class RewardedSetParams:
    entry_gateways: int
    exit_gateways: int
    mixnodes: int
    standby: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RewardedSetParams:
        return cls(
            entry_gateways=_int(data, "entry_gateways"),
            exit_gateways=_int(data, "exit_gateways"),
            mixnodes=_int(data, "mixnodes"),
            standby=_int(data, "standby"),
        )


@dataclass(frozen=True)
class RewardingParams:
    interval: IntervalRewardingParams
    rewarded_set: RewardedSetParams

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RewardingParams:
        return cls(
            interval=IntervalRewardingParams.from_dict(_mapping(data, "interval")),
            rewarded_set=RewardedSetParams.from_dict(_mapping(data, "rewarded_set")),
        )


@dataclass(frozen=True)
class NodeRewardingParameters:
    """A node's performance and work factor (omega) in the current epoch."""

    performance: Percent
    work_factor: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeRewardingParameters:
        return cls(
            performance=Percent.from_json(data.get("performance")),
            work_factor=Decimal.from_json(data.get("work_factor")),
        )


@dataclass(frozen=True)
class IntervalRewardingParamsUpdate:
    reward_pool: Decimal
    staking_supply: Decimal
    staking_supply_scale_factor: Percent
    sybil_resistance_percent: Percent
    active_set_work_factor: Decimal
    interval_pool_emission: Percent
    rewarded_set_params: RewardedSetParams

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntervalRewardingParamsUpdate:
        return cls(
            reward_pool=Decimal.from_json(data.get("reward_pool")),
            staking_supply=Decimal.from_json(data.get("staking_supply")),
            staking_supply_scale_factor=Percent.from_json(data.get("staking_supply_scale_factor")),
            sybil_resistance_percent=Percent.from_json(data.get("sybil_resistance_percent")),
            active_set_work_factor=Decimal.from_json(data.get("active_set_work_factor")),
            interval_pool_emission=Percent.from_json(data.get("interval_pool_emission")),
            rewarded_set_params=RewardedSetParams.from_dict(_mapping(data, "rewarded_set_params")),
        )


@dataclass(frozen=True)
class ActiveSetUpdate:
    entry_gateways: int
    exit_gateways: int
    mixnodes: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActiveSetUpdate:
        return cls(
            entry_gateways=_int(data, "entry_gateways"),
            exit_gateways=_int(data, "exit_gateways"),
            mixnodes=_int(data, "mixnodes"),
        )


@dataclass(frozen=True)
class PendingReward:
    amount_staked: Coin
    amount_earned: Coin
    amount_earned_detailed: Decimal
    node_still_fully_bonded: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PendingReward:
        return cls(
            amount_staked=Coin.from_dict(_mapping(data, "amount_staked")),
            amount_earned=Coin.from_dict(_mapping(data, "amount_earned")),
            amount_earned_detailed=Decimal.from_json(data.get("amount_earned_detailed")),
            node_still_fully_bonded=bool(data.get("node_still_fully_bonded", False)),
        )


@dataclass(frozen=True)
class RewardDistribution:
    operator: Decimal
    delegates: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RewardDistribution:
        return cls(
            operator=Decimal.from_json(data.get("operator")),
            delegates=Decimal.from_json(data.get("delegates")),
        )


@dataclass(frozen=True)
class EstimatedCurrentEpochReward:
    original_stake: Coin
    current_stake_value: Coin
    current_stake_value_detailed_amount: Decimal
    estimation: Coin
    detailed_estimation_amount: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EstimatedCurrentEpochReward:
        return cls(
            original_stake=Coin.from_dict(_mapping(data, "original_stake")),
            current_stake_value=Coin.from_dict(_mapping(data, "current_stake_value")),
            current_stake_value_detailed_amount=Decimal.from_json(
                data.get("current_stake_value_detailed_amount")
            ),
            estimation=Coin.from_dict(_mapping(data, "estimation")),
            detailed_estimation_amount=Decimal.from_json(data.get("detailed_estimation_amount")),
        )