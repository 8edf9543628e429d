# lootserver

A small toolkit for talking to a game backend's server API from Python. It uses
only the standard library.

## What is in it

- **`lootserver.logger`**: `ServerLogger` passes each message to a sink only
  when its `LogLevel` is allowed by the `LoggerSettings`.
  - `limit_level` is a `LogLevelLimit` and defaults to `DISPLAY`.
    `NO_LOGGING` turns output off. `ALL_AS_NORMAL` lets every message
    through at `DISPLAY` level.
  - Outside a development build (`development=False`), nothing is logged
    unless `log_outside_of_editor` is set.
  - `ServerLogger.log(message, verbosity)` returns whether the message was
    emitted. `effective_level(verbosity)` tells you which level a message
    would be emitted at.
  - The default sink writes to the standard `logging` logger named
    `lootserver`. You can pass any callable `sink(level, message)` instead.
- **`lootserver.http_client`**: `HttpClient` sends an `HttpRequest` and
  returns a `ServerResponse`. If the request has an `on_complete` callback,
  the response is passed to it as well.
  - `send_request` sends a JSON request. `upload_file` and `upload_raw_file`
    send a multipart/form-data upload with extra form fields.
  - Every request carries the `User-Agent`, `User-Instance-Identifier` and
    `SDK-Version` headers. JSON requests also carry `Content-Type`, `Accepts`
    and `LL-Version`. The request's `custom_headers` are applied last.
  - A status of 200–206 counts as success. On failure, `ErrorData` is read
    from the JSON error body, and a `retry-after` header fills in
    `retry_after_seconds`.
  - If a file cannot be read, you get a failed response that says so.
  - By default requests go out through `urllib`. You can pass a `transport`
    callable `transport(method, url, headers, body)` that returns
    `(status_code, text, response_headers)`. A transport that raises
    `OSError` produces a failed response.
  - The module also exposes the helpers `response_is_valid`,
    `parse_response`, `build_multipart_body`, `format_failed_request_log` and
    `format_successful_request_log`.
- **`lootserver.leaderboard`** holds the leaderboard models.
  - Models read from server JSON with `from_dict`: `Leaderboard`,
    `LeaderboardDetails`, `LeaderboardSchedule`, `LeaderboardEntry`,
    `LeaderboardPlayer`, `LeaderboardEntryWithLeaderboardData`,
    `SubmitScoreResult`, `ScoresPage` and `MemberRanksPage`. The two pages keep
    `pagination` as the raw dictionary.
  - Request bodies written with `to_dict`: `SubmitScoreRequest`,
    `CreateLeaderboardRequest`, `UpdateLeaderboardRequest` and
    `CreateScheduleRequest`.
  - The enums `LeaderboardType` and `LeaderboardDirection` are written out in
    lower case (`"player"`, `"descending"`).
- **`lootserver.leaderboard_rewards`**: `LeaderboardReward` and its parts are
  read with `from_dict`. The parts are asset, currency, progression-points,
  progression-reset and group rewards, plus `RewardPredicate`. The reward
  kind is a `RewardEntityKind`.
- **`lootserver.character`** holds the character models.
  - Read with `from_dict`: `PlayerCharacter`, `CharacterInventoryItem`,
    `CharacterLoadoutItem` and the result types `PlayerCharactersResult`,
    `CharacterInventoryResult` and `CharacterLoadoutResult`. An item's
    `asset` is kept as the raw dictionary.
  - Written with `to_dict`: `EquipByInstanceRequest`,
    `EquipByVariationRequest` and `EquipByRentalOptionRequest`.
  - `RentalData.time_left_seconds()`, `duration_seconds()` and `active()`
    read the optional string fields. They return `None` when a field is
    missing or unreadable.

Parsing matches field names case-insensitively. A missing field takes its
default, and a field of the wrong type raises `TypeError` or `ValueError`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import json

from lootserver.http_client import HttpClient, HttpRequest
from lootserver.leaderboard import SubmitScoreRequest, SubmitScoreResult


def transport(method, url, headers, body):
    return 200, json.dumps({"member_id": "player-1", "rank": 1, "score": 1200}), {}


client = HttpClient(sdk_version="1.0.0", api_version="2021-03-01", transport=transport)
request = HttpRequest(
    endpoint="https://api.example.com/leaderboards/weekly/submit",
    method="POST",
    data=json.dumps(SubmitScoreRequest(member_id="player-1", score=1200).to_dict()),
)
response = client.send_request(request)
if response.success:
    result = SubmitScoreResult.from_dict(json.loads(response.full_text))
    print(result.rank)
else:
    print(response.status_code, response.error)
```

## What it does not do

The package has no ready-made calls for individual API operations, and it does
not start or keep sessions. You choose each endpoint URL, add any
authentication headers through `custom_headers`, and turn a response's
`full_text` into a model yourself, as in the example. Requests are sent
synchronously, and a failed request is not retried. There is no command-line
tool.