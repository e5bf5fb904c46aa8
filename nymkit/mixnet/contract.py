"""Mixnet contract state, epochs, intervals and node version history."""

from __future__ import annotations

import datetime as dt
import enum
import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from nymkit.mixnet.cosmwasm import Coin, Decimal, OperatingCostRange, ProfitMarginRange
from nymkit.mixnet.nodes import Role

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return data.get(key) or {}


def parse_offset_datetime(text: str) -> dt.datetime:
    """Parse an RFC 3339 timestamp, keeping its UTC offset."""
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp {text!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, offset = match.group(7), match.group(8)
    micro = int((fraction + "000000")[:6]) if fraction else 0
    if offset == "Z":
        tz = dt.timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if minutes >= 60:
            raise ValueError(f"invalid UTC offset in {text!r}")
        tz = dt.timezone(sign * dt.timedelta(hours=hours, minutes=minutes))
    return dt.datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)


def format_offset_datetime(value: dt.datetime) -> str:
    """Format a timestamp as RFC 3339 to the second; naive values count as UTC."""
    offset = value.utcoffset() or dt.timedelta(0)
    base = value.strftime("%Y-%m-%dT%H:%M:%S")
    if not offset:
        return base + "Z"
    sign = "-" if offset < dt.timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{base}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class ContractAdmin:
    admin: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractAdmin:
        return cls(admin=data.get("admin") or "")


@dataclass(frozen=True)
class ContractVersion:
    contract_name: str = ""
    build_timestamp: str = ""
    build_version: str = ""
    commit_sha: str = ""
    commit_timestamp: str = ""
    commit_branch: str = ""
    rustc_version: str = ""
    cargo_debug: str = ""
    cargo_opt_level: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractVersion:
        names = (
            "contract_name",
            "build_timestamp",
            "build_version",
            "commit_sha",
            "commit_timestamp",
            "commit_branch",
            "rustc_version",
            "cargo_debug",
            "cargo_opt_level",
        )
        return cls(**{name: data.get(name) or "" for name in names})


@dataclass(frozen=True)
class ContractCW2Version:
    contract: str
    version: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractCW2Version:
        return cls(contract=data.get("contract") or "", version=data.get("version") or "")


@dataclass(frozen=True)
class VersionWeights:
    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionWeights:
        return cls(
            major=_int(data, "major"),
            minor=_int(data, "minor"),
            patch=_int(data, "patch"),
            prerelease=_int(data, "prerelease"),
        )


@dataclass(frozen=True)
class ContractStateParams:
    minimum_delegation: Coin
    minimum_pledge: Coin
    profit_margin: ProfitMarginRange
    interval_operating_cost: OperatingCostRange
    version_weights: VersionWeights
    penalty: Decimal
    penalty_scaling: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractStateParams:
        delegation = _mapping(data, "delegation_params")
        operators = _mapping(data, "operators_params")
        config = _mapping(data, "config_score_params")
        formula = _mapping(config, "version_score_formula_params")
        return cls(
            minimum_delegation=Coin.from_dict(_mapping(delegation, "minimum_delegation")),
            minimum_pledge=Coin.from_dict(_mapping(operators, "minimum_pledge")),
            profit_margin=ProfitMarginRange.from_dict(_mapping(operators, "profit_margin")),
            interval_operating_cost=OperatingCostRange.from_dict(
                _mapping(operators, "interval_operating_cost")
            ),
            version_weights=VersionWeights.from_dict(_mapping(config, "version_weights")),
            penalty=Decimal.from_json(formula.get("penalty")),
            penalty_scaling=Decimal.from_json(formula.get("penalty_scaling")),
        )


@dataclass(frozen=True)
class ContractState:
    owner: str
    rewarding_validator_address: str
    vesting_contract_address: str
    rewarding_denom: str
    params: ContractStateParams

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractState:
        return cls(
            owner=data.get("owner") or "",
            rewarding_validator_address=data.get("rewarding_validator_address") or "",
            vesting_contract_address=data.get("vesting_contract_address") or "",
            rewarding_denom=data.get("rewarding_denom") or "",
            params=ContractStateParams.from_dict(_mapping(data, "params")),
        )


@dataclass(frozen=True)
class RewardingEpochState:
    last_rewarded: int
    final_node_id: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RewardingEpochState:
        return cls(
            last_rewarded=_int(data, "last_rewarded"),
            final_node_id=_int(data, "final_node_id"),
        )


def _role(value: Any) -> Role | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"role must be an integer code, got {value!r}")
    try:
        return Role.from_code(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class RoleAssignmentEpochState:
    next: Role | None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoleAssignmentEpochState:
        return cls(next=_role(data.get("next")))


class EpochStateKind(enum.Enum):
    IN_PROGRESS = "in_progress"
    REWARDING = "rewarding"
    RECONCILING_EVENTS = "reconciling_events"
    ROLE_ASSIGNMENT = "role_assignment"


@dataclass(frozen=True)
class EpochState:
    """The stage an epoch is in; rewarding and role assignment carry details."""

    kind: EpochStateKind
    rewarding: RewardingEpochState | None = None
    role_assignment: RoleAssignmentEpochState | None = None

    @classmethod
    def parse(cls, text: str) -> EpochState:
        """Read a state from its text form: a bare name or a JSON object."""
        if not text:
            raise ValueError("empty EpochState")
        if text[0] != "{":
            return cls._from_name(text)
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise ValueError("unknown EpochState")
        return cls._from_object(raw)

    @classmethod
    def from_json(cls, value: Any) -> EpochState:
        """Read a state from a decoded JSON value, a string or an object."""
        if isinstance(value, str):
            return cls._from_name(value)
        if isinstance(value, Mapping):
            return cls._from_object(value)
        raise ValueError(f"unknown EpochState: {value!r}")

    @classmethod
    def _from_name(cls, name: str) -> EpochState:
        if name == EpochStateKind.IN_PROGRESS.value:
            return cls(EpochStateKind.IN_PROGRESS)
        if name == EpochStateKind.RECONCILING_EVENTS.value:
            return cls(EpochStateKind.RECONCILING_EVENTS)
        raise ValueError(f"unknown EpochState: {name}")

    @classmethod
    def _from_object(cls, raw: Mapping[str, Any]) -> EpochState:
        if "rewarding" in raw:
            return cls(
                EpochStateKind.REWARDING,
                rewarding=RewardingEpochState.from_dict(raw["rewarding"] or {}),
            )
        if "role_assignment" in raw:
            return cls(
                EpochStateKind.ROLE_ASSIGNMENT,
                role_assignment=RoleAssignmentEpochState.from_dict(raw["role_assignment"] or {}),
            )
        raise ValueError("unknown EpochState")

    def is_in_progress(self) -> bool:
        return self.kind is EpochStateKind.IN_PROGRESS

    def is_rewarding(self) -> bool:
        return self.kind is EpochStateKind.REWARDING

    def is_reconciling_events(self) -> bool:
        return self.kind is EpochStateKind.RECONCILING_EVENTS

    def is_role_assignment(self) -> bool:
        return self.kind is EpochStateKind.ROLE_ASSIGNMENT

    def __str__(self) -> str:
        if self.rewarding is not None and self.is_rewarding():
            body: Any = {
                "last_rewarded": self.rewarding.last_rewarded,
                "final_node_id": self.rewarding.final_node_id,
            }
            return json.dumps({self.kind.value: body})
        if self.role_assignment is not None and self.is_role_assignment():
            role = self.role_assignment.next
            return json.dumps({self.kind.value: {"next": None if role is None else role.value}})
        if self.is_in_progress() or self.is_reconciling_events():
            return json.dumps(self.kind.value)
        return "<nil>"


@dataclass(frozen=True)
class EpochStatus:
    being_advanced_by: str
    state: EpochState

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EpochStatus:
        return cls(
            being_advanced_by=data.get("being_advanced_by") or "",
            state=EpochState.from_json(data.get("state")),
        )


@dataclass(frozen=True)
class EpochLength:
    secs: int = 0
    nanos: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EpochLength:
        return cls(secs=_int(data, "secs"), nanos=_int(data, "nanos"))

    @property
    def duration(self) -> dt.timedelta:
        return dt.timedelta(seconds=self.secs, microseconds=self.nanos // 1000)


@dataclass(frozen=True)
class Interval:
    id: int
    epochs_in_interval: int
    current_epoch_start: dt.datetime | None
    epoch_length: EpochLength
    current_epoch_id: int
    total_elapsed_epochs: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Interval:
        start = data.get("current_epoch_start")
        return cls(
            id=_int(data, "id"),
            epochs_in_interval=_int(data, "epochs_in_interval"),
            current_epoch_start=None if start is None else parse_offset_datetime(start),
            epoch_length=EpochLength.from_dict(_mapping(data, "epoch_length")),
            current_epoch_id=_int(data, "current_epoch_id"),
            total_elapsed_epochs=_int(data, "total_elapsed_epochs"),
        )


@dataclass(frozen=True)
class IntervalStatus:
    interval: Interval
    current_blocktime: int
    is_current_interval_over: bool
    is_current_epoch_over: bool

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntervalStatus:
        return cls(
            interval=Interval.from_dict(_mapping(data, "interval")),
            current_blocktime=_int(data, "current_blocktime"),
            is_current_interval_over=bool(data.get("is_current_interval_over", False)),
            is_current_epoch_over=bool(data.get("is_current_epoch_over", False)),
        )


@dataclass(frozen=True)
class NodeVersionInfo:
    semver: str
    introduced_at_height: int
    difference_since_genesis: VersionWeights

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeVersionInfo:
        return cls(
            semver=data.get("semver") or "",
            introduced_at_height=_int(data, "introduced_at_height"),
            difference_since_genesis=VersionWeights.from_dict(
                _mapping(data, "difference_since_genesis")
            ),
        )


@dataclass(frozen=True)
class NodeVersion:
    id: int
    info: NodeVersionInfo

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NodeVersion:
        return cls(
            id=_int(data, "id"),
            info=NodeVersionInfo.from_dict(_mapping(data, "version_information")),
        )


@dataclass(frozen=True)
class PagedNodeVersionHistory:
    history: list[NodeVersion] = field(default_factory=list)
    start_next_after: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PagedNodeVersionHistory:
        start = data.get("start_next_after")
        return cls(
            history=[NodeVersion.from_dict(item) for item in data.get("history") or []],
            start_next_after=None if start is None else int(start),
        )