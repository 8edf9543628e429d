"""Rewards that can be attached to leaderboards, read from server JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, List, Mapping, Optional, TypeVar

__all__ = [
    "RewardEntityKind",
    "AssetRewardDetails",
    "AssetReward",
    "CurrencyRewardDetails",
    "CurrencyReward",
    "ProgressionResetRewardDetails",
    "ProgressionResetReward",
    "ProgressionPointRewardDetails",
    "ProgressionPointsReward",
    "RewardArgs",
    "RewardPredicate",
    "GroupRewardMetadata",
    "GroupRewardAssociation",
    "GroupReward",
    "LeaderboardReward",
]

T = TypeVar("T")


class RewardEntityKind(IntEnum):
    """Which kind of reward a leaderboard reward (or group association) holds."""

    ASSET = 0
    CURRENCY = 1
    PROGRESSION_POINTS = 2
    PROGRESSION_RESET = 3
    GROUP = 4


def _fields(data: Optional[Mapping[str, Any]]) -> dict:
    """Return the mapping with lower-cased keys, so lookups ignore key case."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return {str(key).lower(): value for key, value in data.items()}


def _str(fields: dict, key: str) -> str:
    value = fields.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    raise TypeError(f"field {key!r} must be a string, got {type(value).__name__}")


def _int(fields: dict, key: str) -> int:
    value = fields.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a number, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                return int(float(value))
            except ValueError:
                raise ValueError(f"field {key!r} is not numeric: {value!r}") from None
    raise TypeError(f"field {key!r} must be a number, got {type(value).__name__}")


def _list(fields: dict, key: str, parse: Callable[[Any], T]) -> List[T]:
    value = fields.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field {key!r} must be a list, got {type(value).__name__}")
    return [parse(item) for item in value]


def _str_list(fields: dict, key: str) -> List[str]:
    return _list(fields, key, lambda item: _str({"v": item}, "v"))


def _kind(fields: dict, key: str) -> RewardEntityKind:
    value = fields.get(key)
    if value is None:
        return RewardEntityKind.ASSET
    if isinstance(value, bool):
        raise TypeError(f"field {key!r} must name a reward kind, got bool")
    if isinstance(value, int):
        try:
            return RewardEntityKind(value)
        except ValueError:
            raise ValueError(f"unknown reward kind: {value!r}") from None
    if isinstance(value, str):
        try:
            return RewardEntityKind[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown reward kind: {value!r}") from None
    raise TypeError(f"field {key!r} must name a reward kind, got {type(value).__name__}")


@dataclass
class AssetRewardDetails:
    """Display details of an asset reward."""

    name: str = ""
    thumbnail: str = ""
    variation_name: str = ""
    rental_option_name: str = ""
    variation_id: str = ""
    rental_option_id: str = ""
    legacy_id: int = 0
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AssetRewardDetails":
        f = _fields(data)
        return cls(
            name=_str(f, "name"),
            thumbnail=_str(f, "thumbnail"),
            variation_name=_str(f, "variation_name"),
            rental_option_name=_str(f, "rental_option_name"),
            variation_id=_str(f, "variation_id"),
            rental_option_id=_str(f, "rental_option_id"),
            legacy_id=_int(f, "legacy_id"),
            id=_str(f, "id"),
        )


@dataclass
class AssetReward:
    """An asset handed out as a reward."""

    created_at: str = ""
    updated_at: str = ""
    details: AssetRewardDetails = field(default_factory=AssetRewardDetails)
    asset_variation_id: str = ""
    asset_rental_option_id: str = ""
    asset_id: int = 0
    reward_id: str = ""
    asset_ulid: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AssetReward":
        f = _fields(data)
        return cls(
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
            details=AssetRewardDetails.from_dict(f.get("details")),
            asset_variation_id=_str(f, "asset_variation_id"),
            asset_rental_option_id=_str(f, "asset_rental_option_id"),
            asset_id=_int(f, "asset_id"),
            reward_id=_str(f, "reward_id"),
            asset_ulid=_str(f, "asset_ulid"),
        )


@dataclass
class CurrencyRewardDetails:
    """Display details of a currency reward."""

    name: str = ""
    code: str = ""
    amount: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CurrencyRewardDetails":
        f = _fields(data)
        return cls(
            name=_str(f, "name"),
            code=_str(f, "code"),
            amount=_str(f, "amount"),
            id=_str(f, "id"),
        )


@dataclass
class CurrencyReward:
    """An amount of currency handed out as a reward."""

    created_at: str = ""
    updated_at: str = ""
    amount: str = ""
    details: CurrencyRewardDetails = field(default_factory=CurrencyRewardDetails)
    reward_id: str = ""
    currency_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CurrencyReward":
        f = _fields(data)
        return cls(
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
            amount=_str(f, "amount"),
            details=CurrencyRewardDetails.from_dict(f.get("details")),
            reward_id=_str(f, "reward_id"),
            currency_id=_str(f, "currency_id"),
        )


@dataclass
class ProgressionResetRewardDetails:
    """Display details of a progression reset reward."""

    key: str = ""
    name: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProgressionResetRewardDetails":
        f = _fields(data)
        return cls(key=_str(f, "key"), name=_str(f, "name"), id=_str(f, "id"))


@dataclass
class ProgressionResetReward:
    """A reset of a progression handed out as a reward."""

    created_at: str = ""
    updated_at: str = ""
    progression_id: str = ""
    details: ProgressionResetRewardDetails = field(default_factory=ProgressionResetRewardDetails)
    reward_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProgressionResetReward":
        f = _fields(data)
        return cls(
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
            progression_id=_str(f, "progression_id"),
            details=ProgressionResetRewardDetails.from_dict(f.get("details")),
            reward_id=_str(f, "reward_id"),
        )


@dataclass
class ProgressionPointRewardDetails:
    """Display details of a progression points reward."""

    key: str = ""
    name: str = ""
    amount: int = 0
    id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProgressionPointRewardDetails":
        f = _fields(data)
        return cls(
            key=_str(f, "key"),
            name=_str(f, "name"),
            amount=_int(f, "amount"),
            id=_str(f, "id"),
        )


@dataclass
class ProgressionPointsReward:
    """Progression points handed out as a reward."""

    created_at: str = ""
    updated_at: str = ""
    details: ProgressionPointRewardDetails = field(default_factory=ProgressionPointRewardDetails)
    amount: int = 0
    progression_id: str = ""
    reward_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProgressionPointsReward":
        f = _fields(data)
        return cls(
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
            details=ProgressionPointRewardDetails.from_dict(f.get("details")),
            amount=_int(f, "amount"),
            progression_id=_str(f, "progression_id"),
            reward_id=_str(f, "reward_id"),
        )


@dataclass
class RewardArgs:
    """Arguments of a reward predicate: a rank range and how it is applied."""

    max: int = 0
    min: int = 0
    method: str = ""
    direction: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RewardArgs":
        f = _fields(data)
        return cls(
            max=_int(f, "max"),
            min=_int(f, "min"),
            method=_str(f, "method"),
            direction=_str(f, "direction"),
        )


@dataclass
class RewardPredicate:
    """A condition deciding which leaderboard members receive a reward."""

    id: str = ""
    type: str = ""
    args: RewardArgs = field(default_factory=RewardArgs)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RewardPredicate":
        f = _fields(data)
        return cls(id=_str(f, "id"), type=_str(f, "type"), args=RewardArgs.from_dict(f.get("args")))


@dataclass
class GroupRewardMetadata:
    """A key/value pair attached to a group reward."""

    key: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GroupRewardMetadata":
        f = _fields(data)
        return cls(key=_str(f, "key"), value=_str(f, "value"))


@dataclass
class GroupRewardAssociation:
    """One reward inside a group; ``kind`` says which of the fields holds it."""

    kind: RewardEntityKind = RewardEntityKind.ASSET
    currency: CurrencyReward = field(default_factory=CurrencyReward)
    progression_reset: ProgressionResetReward = field(default_factory=ProgressionResetReward)
    progression_points: ProgressionPointsReward = field(default_factory=ProgressionPointsReward)
    asset: AssetReward = field(default_factory=AssetReward)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GroupRewardAssociation":
        f = _fields(data)
        return cls(
            kind=_kind(f, "kind"),
            currency=CurrencyReward.from_dict(f.get("currency")),
            progression_reset=ProgressionResetReward.from_dict(f.get("progression_reset")),
            progression_points=ProgressionPointsReward.from_dict(f.get("progression_points")),
            asset=AssetReward.from_dict(f.get("asset")),
        )


@dataclass
class GroupReward:
    """A named bundle of rewards handed out together."""

    created_at: str = ""
    name: str = ""
    description: str = ""
    metadata: List[GroupRewardMetadata] = field(default_factory=list)
    associations: List[GroupRewardAssociation] = field(default_factory=list)
    reward_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GroupReward":
        f = _fields(data)
        return cls(
            created_at=_str(f, "created_at"),
            name=_str(f, "name"),
            description=_str(f, "description"),
            metadata=_list(f, "metadata", GroupRewardMetadata.from_dict),
            associations=_list(f, "associations", GroupRewardAssociation.from_dict),
            reward_id=_str(f, "reward_id"),
        )


@dataclass
class LeaderboardReward:
    """A reward tied to a leaderboard; ``reward_kind`` says which field holds it."""

    reward_kind: RewardEntityKind = RewardEntityKind.ASSET
    predicates: List[RewardPredicate] = field(default_factory=list)
    currency: CurrencyReward = field(default_factory=CurrencyReward)
    progression_reset: ProgressionResetReward = field(default_factory=ProgressionResetReward)
    progression_points: ProgressionPointsReward = field(default_factory=ProgressionPointsReward)
    asset: AssetReward = field(default_factory=AssetReward)
    group: GroupReward = field(default_factory=GroupReward)
    reward_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardReward":
        f = _fields(data)
        return cls(
            reward_kind=_kind(f, "reward_kind"),
            predicates=_list(f, "predicates", RewardPredicate.from_dict),
            currency=CurrencyReward.from_dict(f.get("currency")),
            progression_reset=ProgressionResetReward.from_dict(f.get("progression_reset")),
            progression_points=ProgressionPointsReward.from_dict(f.get("progression_points")),
            asset=AssetReward.from_dict(f.get("asset")),
            group=GroupReward.from_dict(f.get("group")),
            reward_id=_str(f, "reward_id"),
        )