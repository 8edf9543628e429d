import pytest

from lootserver.leaderboard_rewards import (
    AssetReward,
    AssetRewardDetails,
    CurrencyReward,
    CurrencyRewardDetails,
    GroupReward,
    GroupRewardAssociation,
    GroupRewardMetadata,
    LeaderboardReward,
    ProgressionPointRewardDetails,
    ProgressionPointsReward,
    ProgressionResetReward,
    ProgressionResetRewardDetails,
    RewardArgs,
    RewardEntityKind,
    RewardPredicate,
)


def test_reward_kind_wire_numbers_map_in_order():
    kinds = [LeaderboardReward.from_dict({"reward_kind": n}).reward_kind for n in range(5)]
    assert kinds == [
        RewardEntityKind.ASSET,
        RewardEntityKind.CURRENCY,
        RewardEntityKind.PROGRESSION_POINTS,
        RewardEntityKind.PROGRESSION_RESET,
        RewardEntityKind.GROUP,
    ]
    assert GroupRewardAssociation.from_dict({"kind": 3}).kind is RewardEntityKind.PROGRESSION_RESET


@pytest.mark.parametrize(
    "wire, expected",
    [
        ("asset", RewardEntityKind.ASSET),
        ("currency", RewardEntityKind.CURRENCY),
        ("progression_points", RewardEntityKind.PROGRESSION_POINTS),
        ("Progression_Reset", RewardEntityKind.PROGRESSION_RESET),
        ("group", RewardEntityKind.GROUP),
        (4, RewardEntityKind.GROUP),
    ],
)
def test_reward_kind_parsing(wire, expected):
    assert LeaderboardReward.from_dict({"reward_kind": wire}).reward_kind is expected
    assert GroupRewardAssociation.from_dict({"kind": wire}).kind is expected


def test_unknown_reward_kind_raises():
    with pytest.raises(ValueError):
        LeaderboardReward.from_dict({"reward_kind": "badge"})
    with pytest.raises(ValueError):
        GroupRewardAssociation.from_dict({"kind": 9})


def test_empty_input_gives_defaults():
    reward = LeaderboardReward.from_dict({})
    assert reward == LeaderboardReward()
    assert reward.reward_kind is RewardEntityKind.ASSET
    assert reward.predicates == []
    assert reward.group.associations == []
    assert LeaderboardReward.from_dict(None) == LeaderboardReward()


def test_asset_reward_fields():
    data = {
        "created_at": "2024-01-01",
        "updated_at": "2024-01-02",
        "details": {
            "name": "Sword",
            "thumbnail": "thumb.png",
            "variation_name": "Red",
            "rental_option_name": "Week",
            "variation_id": "v1",
            "rental_option_id": "r1",
            "legacy_id": 12,
            "id": "d1",
        },
        "asset_variation_id": "v1",
        "asset_rental_option_id": "r1",
        "asset_id": 77,
        "reward_id": "rw1",
        "asset_ulid": "ulid1",
    }
    reward = AssetReward.from_dict(data)
    assert reward.details == AssetRewardDetails(
        name="Sword",
        thumbnail="thumb.png",
        variation_name="Red",
        rental_option_name="Week",
        variation_id="v1",
        rental_option_id="r1",
        legacy_id=12,
        id="d1",
    )
    assert reward.asset_id == 77
    assert reward.asset_ulid == "ulid1"
    assert reward.created_at == "2024-01-01"


def test_keys_are_case_insensitive():
    details = CurrencyRewardDetails.from_dict({"Name": "Gold", "CODE": "gld", "Amount": "10", "Id": "c"})
    assert details == CurrencyRewardDetails(name="Gold", code="gld", amount="10", id="c")


def test_currency_reward_numeric_amount_becomes_string():
    reward = CurrencyReward.from_dict({"amount": 250, "currency_id": "cur", "details": {"amount": 250}})
    assert reward.amount == "250"
    assert reward.details.amount == "250"
    assert reward.currency_id == "cur"


def test_progression_rewards():
    reset = ProgressionResetReward.from_dict(
        {"progression_id": "p1", "reward_id": "r", "details": {"key": "xp", "name": "XP", "id": "i"}}
    )
    assert reset.details == ProgressionResetRewardDetails(key="xp", name="XP", id="i")
    assert reset.progression_id == "p1"

    points = ProgressionPointsReward.from_dict(
        {"amount": 5, "progression_id": "p2", "details": {"key": "xp", "name": "XP", "amount": 5, "id": "i"}}
    )
    assert points.amount == 5
    assert points.details == ProgressionPointRewardDetails(key="xp", name="XP", amount=5, id="i")


def test_numeric_string_is_accepted_for_int_fields():
    assert RewardArgs.from_dict({"max": "10", "min": "1"}) == RewardArgs(max=10, min=1)


def test_non_numeric_int_field_raises():
    with pytest.raises(ValueError):
        RewardArgs.from_dict({"max": "many"})


def test_bool_in_int_field_raises():
    with pytest.raises(TypeError):
        AssetReward.from_dict({"asset_id": True})


def test_predicates_and_args():
    predicate = RewardPredicate.from_dict(
        {"id": "pr", "type": "between", "args": {"max": 3, "min": 1, "method": "by_rank", "direction": "asc"}}
    )
    assert predicate.type == "between"
    assert predicate.args == RewardArgs(max=3, min=1, method="by_rank", direction="asc")


def test_group_reward_with_associations():
    data = {
        "created_at": "now",
        "name": "Bundle",
        "description": "Top prize",
        "metadata": [{"key": "tier", "value": "gold"}],
        "associations": [
            {"kind": "currency", "currency": {"amount": "100", "currency_id": "c1"}},
            {"kind": "asset", "asset": {"asset_id": 3}},
        ],
        "reward_id": "g1",
    }
    group = GroupReward.from_dict(data)
    assert group.metadata == [GroupRewardMetadata(key="tier", value="gold")]
    assert [a.kind for a in group.associations] == [RewardEntityKind.CURRENCY, RewardEntityKind.ASSET]
    assert group.associations[0].currency.currency_id == "c1"
    assert group.associations[1].asset.asset_id == 3
    assert group.reward_id == "g1"


def test_leaderboard_reward_full():
    data = {
        "reward_kind": "group",
        "predicates": [{"id": "p", "type": "between", "args": {"min": 1, "max": 1}}],
        "group": {"name": "Winner", "associations": [{"kind": "progression_points", "progression_points": {"amount": 9}}]},
        "reward_id": "lr1",
    }
    reward = LeaderboardReward.from_dict(data)
    assert reward.reward_kind is RewardEntityKind.GROUP
    assert len(reward.predicates) == 1
    assert reward.predicates[0].args.min == 1
    assert reward.group.name == "Winner"
    assert reward.group.associations[0].progression_points.amount == 9
    assert reward.asset == AssetReward()
    assert reward.reward_id == "lr1"


def test_list_field_must_be_a_list():
    with pytest.raises(TypeError):
        LeaderboardReward.from_dict({"predicates": {"id": "p"}})


def test_non_mapping_input_raises():
    with pytest.raises(TypeError):
        AssetReward.from_dict(["not", "an", "object"])
    with pytest.raises(TypeError):
        LeaderboardReward.from_dict({"asset": "oops"})


def test_nested_object_in_string_field_raises():
    with pytest.raises(TypeError):
        GroupRewardMetadata.from_dict({"key": {"nested": 1}})