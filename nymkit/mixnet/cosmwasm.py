"""CosmWasm value types, mixnet constants and mixnet event names."""

from __future__ import annotations

import decimal
import enum
import math
from dataclasses import dataclass
from typing import Any, Mapping

from nymkit.uint128 import Uint128

Addr = str
NodeID = int
EpochID = int
BlockHeight = int
IdentityKey = str

_MAX_UINT64 = (1 << 64) - 1

TOKEN_SUPPLY = Uint128(1_000_000_000_000_000)
DEFAULT_INTERVAL_OPERATING_COST_AMOUNT = Uint128(40_000_000)
DEFAULT_PROFIT_MARGIN_PERCENT = 20
UNIT_DELEGATION_BASE = 1_000_000_000 * 1_000_000_000_000_000_000

NYM_NODE_BOND_DEFAULT_RETRIEVAL_LIMIT = 50
NYM_NODE_BOND_MAX_RETRIEVAL_LIMIT = 100

NYM_NODE_DETAILS_DEFAULT_RETRIEVAL_LIMIT = 50
NYM_NODE_DETAILS_MAX_RETRIEVAL_LIMIT = 75

UNBONDED_NYM_NODES_DEFAULT_RETRIEVAL_LIMIT = 100
UNBONDED_NYM_NODES_MAX_RETRIEVAL_LIMIT = 200

DELEGATION_PAGE_DEFAULT_RETRIEVAL_LIMIT = 100
DELEGATION_PAGE_MAX_RETRIEVAL_LIMIT = 500

EPOCH_EVENTS_DEFAULT_RETRIEVAL_LIMIT = 50
EPOCH_EVENTS_MAX_RETRIEVAL_LIMIT = 100

INTERVAL_EVENTS_DEFAULT_RETRIEVAL_LIMIT = 50
INTERVAL_EVENTS_MAX_RETRIEVAL_LIMIT = 100


def _parse_decimal(value: Any) -> decimal.Decimal:
    if value is None:
        return decimal.Decimal(0)
    if isinstance(value, bool):
        raise TypeError("a boolean is not a decimal value")
    if isinstance(value, int):
        return decimal.Decimal(value)
    if isinstance(value, float):
        text = repr(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        raise TypeError(f"cannot read a decimal from {type(value).__name__}")
    try:
        result = decimal.Decimal(text)
    except decimal.InvalidOperation:
        raise ValueError(f"invalid decimal {value!r}") from None
    if result.is_nan():
        raise ValueError(f"invalid decimal {value!r}")
    return result


def _uint128(value: Any) -> Uint128:
    if value is None:
        return Uint128(0)
    if isinstance(value, Uint128):
        return value
    if isinstance(value, str):
        return Uint128.parse(value)
    return Uint128(value)


@dataclass(frozen=True)
class Decimal:
    """A contract decimal; its text form is the value truncated to a 64-bit unsigned integer."""

    value: decimal.Decimal = decimal.Decimal(0)

    @classmethod
    def from_json(cls, value: Any) -> Decimal:
        """Read a decimal from its JSON form (usually a string); null reads as zero."""
        return cls(_parse_decimal(value))

    def __str__(self) -> str:
        if self.value.is_infinite():
            whole = _MAX_UINT64 if self.value > 0 else 0
        else:
            whole = min(max(int(self.value), 0), _MAX_UINT64)
        return str(whole)

    def __float__(self) -> float:
        return float(self.value)

    def is_zero(self) -> bool:
        return float(self.value) == 0


@dataclass(frozen=True)
class Percent:
    """A contract percentage; its text form is the shortest float64 rendering."""

    value: decimal.Decimal = decimal.Decimal(0)

    @classmethod
    def from_json(cls, value: Any) -> Percent:
        """Read a percentage from its JSON form (usually a string); null reads as zero."""
        return cls(_parse_decimal(value))

    def __str__(self) -> str:
        number = float(self.value)
        if math.isinf(number):
            return "+Inf" if number > 0 else "-Inf"
        return format(decimal.Decimal(repr(number)).normalize(), "f")

    def __float__(self) -> float:
        return float(self.value)

    def is_zero(self) -> bool:
        return float(self.value) == 0


@dataclass(frozen=True)
class Coin:
    """An amount of a denomination."""

    denom: str = ""
    amount: Uint128 = Uint128(0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Coin:
        return cls(denom=data.get("denom") or "", amount=_uint128(data.get("amount")))

    def is_zero(self) -> bool:
        return self.amount.is_zero()


@dataclass(frozen=True)
class ProfitMarginRange:
    """An inclusive range of allowed profit margins."""

    minimum: Percent
    maximum: Percent

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProfitMarginRange:
        return cls(
            minimum=Percent.from_json(data.get("minimum")),
            maximum=Percent.from_json(data.get("maximum")),
        )

    def __str__(self) -> str:
        return f"[{self.minimum}..={self.maximum}]"


@dataclass(frozen=True)
class OperatingCostRange:
    """An inclusive range of allowed interval operating costs."""

    minimum: Uint128
    maximum: Uint128

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OperatingCostRange:
        return cls(
            minimum=_uint128(data.get("minimum")),
            maximum=_uint128(data.get("maximum")),
        )

    def __str__(self) -> str:
        return f"[{self.minimum}..={self.maximum}]"


EVENT_VERSION_PREFIX = "v2_"


class MixnetEventType(str, enum.Enum):
    """Event types emitted by the mixnet contract."""

    MIXNODE_BONDING = EVENT_VERSION_PREFIX + "mixnode_bonding"
    NYM_NODE_BONDING = EVENT_VERSION_PREFIX + "nymnode_bonding"
    NYM_NODE_UNBONDING = EVENT_VERSION_PREFIX + "nymnode_unbonding"
    PENDING_NYM_NODE_UNBONDING = EVENT_VERSION_PREFIX + "pending_nymnode_unbonding"
    GATEWAY_MIGRATION = EVENT_VERSION_PREFIX + "gateway_migration"
    MIXNODE_MIGRATION = EVENT_VERSION_PREFIX + "mixnode_migration"
    PENDING_PLEDGE_INCREASE = EVENT_VERSION_PREFIX + "pending_pledge_increase"
    PLEDGE_INCREASE = EVENT_VERSION_PREFIX + "pledge_increase"
    PENDING_PLEDGE_DECREASE = EVENT_VERSION_PREFIX + "pending_pledge_decrease"
    PLEDGE_DECREASE = EVENT_VERSION_PREFIX + "pledge_decrease"
    GATEWAY_BONDING = EVENT_VERSION_PREFIX + "gateway_bonding"
    GATEWAY_UNBONDING = EVENT_VERSION_PREFIX + "gateway_unbonding"
    PENDING_MIXNODE_UNBONDING = EVENT_VERSION_PREFIX + "pending_mixnode_unbonding"
    MIXNODE_UNBONDING = EVENT_VERSION_PREFIX + "mixnode_config_update"
    MIXNODE_CONFIG_UPDATE = EVENT_VERSION_PREFIX + "mixnode_unbonding"
    PENDING_COST_PARAMS_UPDATE = EVENT_VERSION_PREFIX + "pending_cost_params_update"
    COST_PARAMS_UPDATE = EVENT_VERSION_PREFIX + "cost_params_update"
    NODE_REWARDING = EVENT_VERSION_PREFIX + "node_rewarding"
    WITHDRAW_DELEGATOR_REWARD = EVENT_VERSION_PREFIX + "withdraw_delegator_reward"
    WITHDRAW_OPERATOR_REWARD = EVENT_VERSION_PREFIX + "withdraw_operator_reward"
    PENDING_ACTIVE_SET_UPDATE = EVENT_VERSION_PREFIX + "pending_active_set_update"
    ACTIVE_SET_UPDATE = EVENT_VERSION_PREFIX + "active_set_update"
    PENDING_INTERVAL_REWARDING_PARAMS_UPDATE = (
        EVENT_VERSION_PREFIX + "pending_interval_rewarding_params_update"
    )
    INTERVAL_REWARDING_PARAMS_UPDATE = EVENT_VERSION_PREFIX + "interval_rewarding_params_update"
    PENDING_DELEGATION = EVENT_VERSION_PREFIX + "pending_delegation"
    PENDING_UNDELEGATION = EVENT_VERSION_PREFIX + "pending_undelegation"
    DELEGATION = EVENT_VERSION_PREFIX + "delegation"
    DELEGATION_ON_UNBONDING = EVENT_VERSION_PREFIX + "undelegation"
    UNDELEGATION = EVENT_VERSION_PREFIX + "settings_update"
    CONTRACT_SETTINGS_UPDATE = EVENT_VERSION_PREFIX + "nym_node_semver_update"
    NYM_NODE_SEMVER_UPDATE = EVENT_VERSION_PREFIX + "rewarding_validator_address_update"
    REWARDING_VALIDATOR_UPDATE = EVENT_VERSION_PREFIX + "beginning_epoch_transition"
    BEGIN_EPOCH_TRANSITION = EVENT_VERSION_PREFIX + "advance_epoch"
    ADVANCE_EPOCH = EVENT_VERSION_PREFIX + "role_assignment"
    ROLE_ASSIGNMENT = EVENT_VERSION_PREFIX + "execute_pending_epoch_events"
    EXECUTE_PENDING_EPOCH_EVENTS = EVENT_VERSION_PREFIX + "execute_pending_interval_events"
    EXECUTE_PENDING_INTERVAL_EVENTS = EVENT_VERSION_PREFIX + "reconcile_pending_events"
    RECONCILE_PENDING_EVENTS = EVENT_VERSION_PREFIX + "pending_interval_config_update"
    PENDING_INTERVAL_CONFIG_UPDATE = EVENT_VERSION_PREFIX + "interval_config_update"
    INTERVAL_CONFIG_UPDATE = EVENT_VERSION_PREFIX + "delegation_on_unbonding_node"
    GATEWAY_CONFIG_UPDATE = EVENT_VERSION_PREFIX + "gateway_config_update"