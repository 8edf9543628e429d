"""Leaderboards: their data, the requests that change them and the pages they return."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from lootserver.leaderboard_rewards import LeaderboardReward, _fields, _int, _list, _str, _str_list

__all__ = [
    "LeaderboardType",
    "LeaderboardDirection",
    "LeaderboardPlayer",
    "LeaderboardEntry",
    "LeaderboardEntryWithLeaderboardData",
    "LeaderboardSchedule",
    "Leaderboard",
    "LeaderboardDetails",
    "SubmitScoreRequest",
    "LeaderboardBaseRequest",
    "CreateLeaderboardRequest",
    "UpdateLeaderboardRequest",
    "CreateScheduleRequest",
    "SubmitScoreResult",
    "MemberRanksPage",
    "ScoresPage",
]

E = TypeVar("E", bound=IntEnum)


class LeaderboardType(IntEnum):
    """Player leaderboards carry player details; generic ones take any member id."""

    PLAYER = 0
    GENERIC = 1

    @property
    def wire_name(self) -> str:
        return self.name.lower()


class LeaderboardDirection(IntEnum):
    """Sort order: ascending puts the lowest score first, descending the highest."""

    ASCENDING = 0
    DESCENDING = 1

    @property
    def wire_name(self) -> str:
        return self.name.lower()


def _enum(fields: dict, key: str, enum_type: Type[E], default: E) -> E:
    value = fields.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise TypeError(f"field {key!r} must name a {enum_type.__name__}, got bool")
    if isinstance(value, int):
        try:
            return enum_type(value)
        except ValueError:
            raise ValueError(f"unknown {enum_type.__name__} value: {value!r}") from None
    if isinstance(value, str):
        try:
            return enum_type[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown {enum_type.__name__} value: {value!r}") from None
    raise TypeError(f"field {key!r} must name a {enum_type.__name__}, got {type(value).__name__}")


def _bool(fields: dict, key: str) -> bool:
    value = fields.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        raise ValueError(f"field {key!r} is not a boolean: {value!r}")
    if isinstance(value, int):
        return value != 0
    raise TypeError(f"field {key!r} must be a boolean, got {type(value).__name__}")


def _pagination(fields: dict, key: str) -> Dict[str, Any]:
    value = fields.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"field {key!r} must be a JSON object, got {type(value).__name__}")
    return dict(value)


@dataclass
class LeaderboardPlayer:
    """Player details attached to an entry on a player leaderboard."""

    id: int = 0
    public_uid: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardPlayer":
        f = _fields(data)
        return cls(id=_int(f, "id"), public_uid=_str(f, "public_uid"), name=_str(f, "name"))


@dataclass
class LeaderboardEntry:
    """One member's rank, score and metadata on a leaderboard."""

    member_id: str = ""
    rank: int = 0
    score: int = 0
    player: LeaderboardPlayer = field(default_factory=LeaderboardPlayer)
    metadata: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardEntry":
        f = _fields(data)
        return cls(
            member_id=_str(f, "member_id"),
            rank=_int(f, "rank"),
            score=_int(f, "score"),
            player=LeaderboardPlayer.from_dict(f.get("player")),
            metadata=_str(f, "metadata"),
        )


@dataclass
class LeaderboardEntryWithLeaderboardData:
    """A member's entry together with the leaderboard it belongs to."""

    leaderboard_id: int = 0
    leaderboard_key: str = ""
    ulid: str = ""
    rank: LeaderboardEntry = field(default_factory=LeaderboardEntry)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardEntryWithLeaderboardData":
        f = _fields(data)
        return cls(
            leaderboard_id=_int(f, "leaderboard_id"),
            leaderboard_key=_str(f, "leaderboard_key"),
            ulid=_str(f, "ulid"),
            rank=LeaderboardEntry.from_dict(f.get("rank")),
        )


@dataclass
class LeaderboardSchedule:
    """The cron schedule on which a leaderboard is reset and archived."""

    cron_expression: str = ""
    next_run: str = ""
    last_run: str = ""
    schedule: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardSchedule":
        f = _fields(data)
        return cls(
            cron_expression=_str(f, "cron_expression"),
            next_run=_str(f, "next_run"),
            last_run=_str(f, "last_run"),
            schedule=_str_list(f, "schedule"),
        )


@dataclass
class LeaderboardDetails:
    """The settings of a leaderboard, as returned when one is created or updated."""

    id: int = 0
    game_id: int = 0
    key: str = ""
    name: str = ""
    type: LeaderboardType = LeaderboardType.PLAYER
    direction_method: LeaderboardDirection = LeaderboardDirection.ASCENDING
    enable_game_api_writes: bool = False
    overwrite_score_on_submit: bool = False
    has_metadata: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaderboardDetails":
        f = _fields(data)
        return cls(
            id=_int(f, "id"),
            game_id=_int(f, "game_id"),
            key=_str(f, "key"),
            name=_str(f, "name"),
            type=_enum(f, "type", LeaderboardType, LeaderboardType.PLAYER),
            direction_method=_enum(
                f, "direction_method", LeaderboardDirection, LeaderboardDirection.ASCENDING
            ),
            enable_game_api_writes=_bool(f, "enable_game_api_writes"),
            overwrite_score_on_submit=_bool(f, "overwrite_score_on_submit"),
            has_metadata=_bool(f, "has_metadata"),
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
        )


@dataclass
class Leaderboard:
    """A full leaderboard, including its schedule and rewards."""

    id: int = 0
    game_id: int = 0
    key: str = ""
    ulid: str = ""
    name: str = ""
    type: LeaderboardType = LeaderboardType.PLAYER
    direction_method: LeaderboardDirection = LeaderboardDirection.ASCENDING
    enable_game_api_writes: bool = False
    overwrite_score_on_submit: bool = False
    has_metadata: bool = False
    created_at: str = ""
    updated_at: str = ""
    schedule: LeaderboardSchedule = field(default_factory=LeaderboardSchedule)
    rewards: List[LeaderboardReward] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Leaderboard":
        f = _fields(data)
        return cls(
            id=_int(f, "id"),
            game_id=_int(f, "game_id"),
            key=_str(f, "key"),
            ulid=_str(f, "ulid"),
            name=_str(f, "name"),
            type=_enum(f, "type", LeaderboardType, LeaderboardType.PLAYER),
            direction_method=_enum(
                f, "direction_method", LeaderboardDirection, LeaderboardDirection.ASCENDING
            ),
            enable_game_api_writes=_bool(f, "enable_game_api_writes"),
            overwrite_score_on_submit=_bool(f, "overwrite_score_on_submit"),
            has_metadata=_bool(f, "has_metadata"),
            created_at=_str(f, "created_at"),
            updated_at=_str(f, "updated_at"),
            schedule=LeaderboardSchedule.from_dict(f.get("schedule")),
            rewards=_list(f, "rewards", LeaderboardReward.from_dict),
        )


@dataclass
class SubmitScoreRequest:
    """A score to submit for a member; metadata is ignored where unsupported."""

    member_id: str = ""
    score: int = 0
    metadata: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"member_id": self.member_id, "score": self.score, "metadata": self.metadata}


@dataclass
class LeaderboardBaseRequest:
    """Settings shared by leaderboard creation and update requests."""

    key: str = ""
    name: str = ""
    direction_method: LeaderboardDirection = LeaderboardDirection.ASCENDING
    enable_game_api_writes: bool = False
    overwrite_score_on_submit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "direction_method": LeaderboardDirection(self.direction_method).wire_name,
            "enable_game_api_writes": self.enable_game_api_writes,
            "overwrite_score_on_submit": self.overwrite_score_on_submit,
        }


@dataclass
class CreateLeaderboardRequest(LeaderboardBaseRequest):
    """Settings for a new leaderboard, including its type and metadata support."""

    type: LeaderboardType = LeaderboardType.PLAYER
    has_metadata: bool = False

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["type"] = LeaderboardType(self.type).wire_name
        body["has_metadata"] = self.has_metadata
        return body


@dataclass
class UpdateLeaderboardRequest(LeaderboardBaseRequest):
    """New settings for an existing leaderboard; ``key`` may rename it."""


@dataclass
class CreateScheduleRequest:
    """A cron expression (standard or @hourly/@daily/@weekly/@monthly/@yearly)."""

    cron_expression: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"cron_expression": self.cron_expression}


@dataclass
class SubmitScoreResult:
    """The entry a member holds after a score submission."""

    member_id: str = ""
    rank: int = 0
    score: int = 0
    metadata: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SubmitScoreResult":
        f = _fields(data)
        return cls(
            member_id=_str(f, "member_id"),
            rank=_int(f, "rank"),
            score=_int(f, "score"),
            metadata=_str(f, "metadata"),
        )


@dataclass
class MemberRanksPage:
    """A member's entries across leaderboards, with the pagination data as sent."""

    pagination: Dict[str, Any] = field(default_factory=dict)
    leaderboards: List[LeaderboardEntryWithLeaderboardData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "MemberRanksPage":
        f = _fields(data)
        return cls(
            pagination=_pagination(f, "pagination"),
            leaderboards=_list(f, "leaderboards", LeaderboardEntryWithLeaderboardData.from_dict),
        )


@dataclass
class ScoresPage:
    """A page of entries from one leaderboard, with the pagination data as sent."""

    pagination: Dict[str, Any] = field(default_factory=dict)
    items: List[LeaderboardEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ScoresPage":
        f = _fields(data)
        return cls(
            pagination=_pagination(f, "pagination"),
            items=_list(f, "items", LeaderboardEntry.from_dict),
        )