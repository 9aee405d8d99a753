"""
HTTP tests for number prediction.
"""

import random

import pytest

from conftest import random_draws
from lottery_app.utils.rate_limit import RateLimiter


def _predict(client, payload, **headers):
    return client.post("/api/predict", json=payload, headers=headers)


def test_predict_without_history_is_degraded(client, lottery_ids):
    resp = _predict(client, {"lotteryId": lottery_ids["mega-sena"], "count": 6, "preferences": {"useHot": True}})

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    numbers = data["numbers"]
    assert len(numbers) == 6
    assert numbers == sorted(set(numbers))
    assert all(1 <= n <= 60 for n in numbers)
    assert data["specialNumbers"] == []
    assert data["degraded"] is True
    assert data["repeated"] is False


def test_predict_builds_missing_frequency_table(client, lottery_ids, add_draws):
    lotofacil = lottery_ids["lotofacil"]
    add_draws(lotofacil, random_draws(random.Random(8), 25, 15, 50))

    resp = _predict(
        client,
        {"lotteryId": lotofacil, "count": 15, "preferences": {"useHot": True, "useMixed": True}},
    )

    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert len(data["numbers"]) == 15
    assert data["degraded"] is False

    cells = client.get(f"/api/lotteries/{lotofacil}/frequencies").get_json()["data"]
    assert sum(c["frequency"] for c in cells) == 50 * 15


def test_preferences_default_to_off(client, lottery_ids):
    resp = _predict(client, {"lotteryId": lottery_ids["quina"], "count": 5})

    assert resp.status_code == 200
    assert len(resp.get_json()["data"]["numbers"]) == 5


def test_special_numbers(client, lottery_ids):
    data = _predict(client, {"lotteryId": lottery_ids["mais-milionaria"], "count": 6}).get_json()["data"]

    specials = data["specialNumbers"]
    assert len(specials) == 2
    assert specials == sorted(set(specials))
    assert all(1 <= n <= 6 for n in specials)


def test_unknown_lottery(client):
    resp = _predict(client, {"lotteryId": 9999, "count": 6})

    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "invalid_game"


@pytest.mark.parametrize("count", [5, 16])
def test_count_outside_bet_range(client, lottery_ids, count):
    resp = _predict(client, {"lotteryId": lottery_ids["mega-sena"], "count": count})

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "invalid_count"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"lotteryId": 1},
        {"lotteryId": 1, "count": 0},
        {"lotteryId": 1, "count": "six"},
        {"lotteryId": 1, "count": 6, "preferences": {"useHot": "maybe"}},
    ],
)
def test_malformed_request(client, payload):
    resp = _predict(client, payload)

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "validation_error"


def test_rate_limit_per_client(app, client, lottery_ids):
    app.extensions["predict_rate_limiter"] = RateLimiter(limit=2, window_seconds=60)
    payload = {"lotteryId": lottery_ids["mega-sena"], "count": 6}

    assert _predict(client, payload, **{"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert _predict(client, payload, **{"X-Forwarded-For": "10.0.0.1"}).status_code == 200

    blocked = _predict(client, payload, **{"X-Forwarded-For": "10.0.0.1"})
    assert blocked.status_code == 429
    assert blocked.get_json()["error"]["code"] == "rate_limited"

    assert _predict(client, payload, **{"X-Forwarded-For": "10.0.0.2"}).status_code == 200
