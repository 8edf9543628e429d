"""Player characters: the characters themselves, their inventories and loadouts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from lootserver.leaderboard import _bool
from lootserver.leaderboard_rewards import _fields, _int, _list, _str

__all__ = [
    "PlayerCharacter",
    "RentalData",
    "CharacterInventoryItem",
    "CharacterLoadoutItem",
    "EquipByInstanceRequest",
    "EquipByVariationRequest",
    "EquipByRentalOptionRequest",
    "PlayerCharactersResult",
    "CharacterInventoryResult",
    "CharacterLoadoutResult",
]

_INTEGER = re.compile(r"[+-]?\d+")


def _optional_int(text: str) -> Optional[int]:
    """Read an optional numeric field; None when it is absent or not a whole number."""
    stripped = text.strip()
    if not _INTEGER.fullmatch(stripped):
        return None
    return int(stripped)


def _asset(fields: dict, key: str) -> Dict[str, Any]:
    value = fields.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"field {key!r} must be a JSON object, got {type(value).__name__}")
    return dict(value)


@dataclass
class PlayerCharacter:
    """One of a player's characters."""

    id: int = 0
    ulid: str = ""
    default: bool = False
    name: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PlayerCharacter":
        f = _fields(data)
        return cls(
            id=_int(f, "id"),
            ulid=_str(f, "ulid"),
            default=_bool(f, "default"),
            name=_str(f, "name"),
            type=_str(f, "type"),
        )


@dataclass
class RentalData:
    """Rental state of an item; the optional fields are kept as sent, empty when absent."""

    is_rental: bool = False
    time_left: str = ""
    duration: str = ""
    is_active: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "RentalData":
        f = _fields(data)
        return cls(
            is_rental=_bool(f, "is_rental"),
            time_left=_str(f, "time_left"),
            duration=_str(f, "duration"),
            is_active=_str(f, "is_active"),
        )

    def time_left_seconds(self) -> Optional[int]:
        """Seconds left before the rental expires, or None when not given."""
        return _optional_int(self.time_left)

    def duration_seconds(self) -> Optional[int]:
        """Total rental duration in seconds, or None when not given."""
        return _optional_int(self.duration)

    def active(self) -> Optional[bool]:
        """Whether the rental is active, or None when the server did not say."""
        lowered = self.is_active.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        return None


@dataclass
class CharacterInventoryItem:
    """An asset instance in a character's inventory; ``asset`` is the asset as sent."""

    instance_id: int = 0
    variation_id: str = ""
    rental_option_id: str = ""
    acquisition_source: str = ""
    asset: Dict[str, Any] = field(default_factory=dict)
    rental: RentalData = field(default_factory=RentalData)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CharacterInventoryItem":
        f = _fields(data)
        return cls(
            instance_id=_int(f, "instance_id"),
            variation_id=_str(f, "variation_id"),
            rental_option_id=_str(f, "rental_option_id"),
            acquisition_source=_str(f, "acquisition_source"),
            asset=_asset(f, "asset"),
            rental=RentalData.from_dict(f.get("rental")),
        )


@dataclass
class CharacterLoadoutItem:
    """An asset instance equipped on a character; ``asset`` is the asset as sent."""

    variation_id: str = ""
    instance_id: int = 0
    mounted_at: str = ""
    asset: Dict[str, Any] = field(default_factory=dict)
    rental: RentalData = field(default_factory=RentalData)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CharacterLoadoutItem":
        f = _fields(data)
        return cls(
            variation_id=_str(f, "variation_id"),
            instance_id=_int(f, "instance_id"),
            mounted_at=_str(f, "mounted_at"),
            asset=_asset(f, "asset"),
            rental=RentalData.from_dict(f.get("rental")),
        )


@dataclass
class EquipByInstanceRequest:
    """Equip an asset instance the player already owns."""

    instance_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"instance_id": self.instance_id}


@dataclass
class EquipByVariationRequest:
    """Equip an asset by its id and a variation id."""

    asset_id: int = 0
    asset_variation_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"asset_id": self.asset_id, "asset_variation_id": self.asset_variation_id}


@dataclass
class EquipByRentalOptionRequest:
    """Equip an asset by its id and a rental option id."""

    asset_id: int = 0
    rental_option_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"asset_id": self.asset_id, "rental_option_id": self.rental_option_id}


@dataclass
class PlayerCharactersResult:
    """A player's characters."""

    items: List[PlayerCharacter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PlayerCharactersResult":
        f = _fields(data)
        return cls(items=_list(f, "items", PlayerCharacter.from_dict))


@dataclass
class CharacterInventoryResult:
    """A page of a character's inventory and the inventory's total size."""

    total: int = 0
    items: List[CharacterInventoryItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CharacterInventoryResult":
        f = _fields(data)
        return cls(
            total=_int(f, "total"),
            items=_list(f, "items", CharacterInventoryItem.from_dict),
        )


@dataclass
class CharacterLoadoutResult:
    """A character's full loadout, as returned by get, equip and unequip."""

    items: List[CharacterLoadoutItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CharacterLoadoutResult":
        f = _fields(data)
        return cls(items=_list(f, "items", CharacterLoadoutItem.from_dict))