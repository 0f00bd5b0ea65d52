"""HTTP surface: status codes and payloads through Flask's test client."""

import pytest

from conftest import INITIAL_GAS_LIMIT, INITIAL_VERSE_PRICE, ORACLE, OWNER, STRANGER


def _request_verse(client, headers_for, reference="John/3/16", payment=INITIAL_VERSE_PRICE, caller=STRANGER):
    return client.post(
        "/api/verses/",
        json={"reference": reference, "payment": payment},
        headers=headers_for(caller),
    )


def test_health_reports_database_connected(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["database"] == "connected"


def test_read_queries_need_no_token(client):
    assert client.get("/api/admin/owner").get_json() == {"owner": OWNER}
    assert client.get("/api/admin/price").get_json() == {"amount": INITIAL_VERSE_PRICE}
    assert client.get("/api/admin/gas-limit").get_json() == {"amount": INITIAL_GAS_LIMIT}
    assert client.get("/api/admin/treasury").get_json() == {"balance": 0}


def test_request_requires_a_token(client):
    response = client.post("/api/verses/", json={"reference": "John/3/16", "payment": INITIAL_VERSE_PRICE})

    assert response.status_code == 401


def test_request_rejects_a_token_signed_with_another_secret(client):
    from utils.auth import generate_token

    token = generate_token(STRANGER, "some-other-secret-0123456789abcdefghij")
    response = client.post(
        "/api/verses/",
        json={"reference": "John/3/16", "payment": INITIAL_VERSE_PRICE},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


def test_request_validates_the_body(client, headers_for):
    response = client.post("/api/verses/", json={"reference": "John/3/16", "payment": -1}, headers=headers_for(STRANGER))

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid request body"


def test_reference_longer_than_255_is_400(client, headers_for):
    response = _request_verse(client, headers_for, reference="J" * 256)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid request body"


def test_whitespace_reference_is_400(client, headers_for):
    response = _request_verse(client, headers_for, reference="   ")

    assert response.status_code == 400
    assert response.get_json()["error"] == "EmptyReference"


def test_payment_above_uint256_is_400(client, headers_for):
    response = _request_verse(client, headers_for, payment=2 ** 256)

    assert response.status_code == 400


@pytest.mark.parametrize("amount", [-1, 2 ** 256])
def test_price_and_gas_limit_out_of_range_are_400(client, headers_for, amount):
    price = client.put("/api/admin/price", json={"amount": amount}, headers=headers_for(OWNER))
    gas = client.put("/api/admin/gas-limit", json={"amount": amount}, headers=headers_for(OWNER))

    assert price.status_code == 400
    assert gas.status_code == 400
    assert client.get("/api/admin/price").get_json() == {"amount": INITIAL_VERSE_PRICE}
    assert client.get("/api/admin/gas-limit").get_json() == {"amount": INITIAL_GAS_LIMIT}


def test_largest_price_round_trips(client, headers_for):
    response = client.put("/api/admin/price", json={"amount": 2 ** 256 - 1}, headers=headers_for(OWNER))

    assert response.status_code == 200
    assert client.get("/api/admin/price").get_json() == {"amount": 2 ** 256 - 1}


def test_treasury_past_64_bits_over_http(client, headers_for):
    client.put("/api/admin/price", json={"amount": 0}, headers=headers_for(OWNER))

    first = _request_verse(client, headers_for, reference="John/3/16", payment=2 ** 63 - 1)
    second = _request_verse(client, headers_for, reference="Genesis/1/1", payment=1)

    assert first.status_code == 202
    assert second.status_code == 202
    assert client.get("/api/admin/treasury").get_json() == {"balance": 2 ** 63}
    withdrawn = client.post("/api/admin/withdraw", headers=headers_for(OWNER))
    assert withdrawn.get_json()["amount"] == 2 ** 63


def test_empty_reference_is_400(client, headers_for):
    response = _request_verse(client, headers_for, reference="")

    assert response.status_code == 400
    assert response.get_json()["error"] == "EmptyReference"


def test_underpayment_is_402(client, headers_for):
    response = _request_verse(client, headers_for, payment=INITIAL_VERSE_PRICE - 1)

    assert response.status_code == 402
    assert response.get_json()["error"] == "InsufficientPayment"


def test_full_lookup_flow(client, headers_for, dispatcher):
    response = _request_verse(client, headers_for)

    assert response.status_code == 202
    body = response.get_json()
    assert body["status"] == "pending"
    query_id = body["query_id"]
    assert query_id in dispatcher.dispatched

    assert client.get("/api/verses/status/John/3/16").get_json()["status"] == "pending"
    assert client.get("/api/verses/John/3/16").status_code == 404

    callback = client.post(
        "/api/oracle/callback",
        json={"query_id": query_id, "result": "John---3---16---Some text"},
        headers=headers_for(ORACLE),
    )
    assert callback.status_code == 200
    assert callback.get_json() == {
        "query_id": query_id,
        "status": "resolved",
        "book": "John",
        "chapter": "3",
        "verse": "16",
        "text": "Some text",
    }

    verse = client.get("/api/verses/John/3/16")
    assert verse.status_code == 200
    assert verse.get_json()["text"] == "Some text"
    assert client.get("/api/verses/status/John/3/16").get_json()["status"] == "resolved"
    assert client.get("/api/admin/treasury").get_json() == {"balance": INITIAL_VERSE_PRICE}


def test_callback_from_non_oracle_is_403(client, headers_for):
    query_id = _request_verse(client, headers_for).get_json()["query_id"]

    response = client.post(
        "/api/oracle/callback",
        json={"query_id": query_id, "result": "John---3---16---Some text"},
        headers=headers_for(STRANGER),
    )

    assert response.status_code == 403
    assert response.get_json()["error"] == "Unauthorized"


def test_callback_for_unknown_query_is_404(client, headers_for):
    response = client.post(
        "/api/oracle/callback",
        json={"query_id": "0xunknown", "result": "John---3---16---Some text"},
        headers=headers_for(ORACLE),
    )

    assert response.status_code == 404
    assert response.get_json()["error"] == "UnknownQuery"


def test_malformed_callback_is_422_and_keeps_the_query(client, headers_for):
    query_id = _request_verse(client, headers_for).get_json()["query_id"]

    response = client.post(
        "/api/oracle/callback",
        json={"query_id": query_id, "result": "John---3---16---"},
        headers=headers_for(ORACLE),
    )

    assert response.status_code == 422
    assert response.get_json()["error"] == "MalformedResponse"
    assert client.get("/api/verses/status/John/3/16").get_json()["status"] == "pending"


def test_parse_preview(client):
    ok = client.post("/api/verses/parse", json={"result": "John---3---16---Some text"})
    empty = client.post("/api/verses/parse", json={"result": ""})

    assert ok.status_code == 200
    assert ok.get_json() == {"book": "John", "chapter": "3", "verse": "16", "text": "Some text"}
    assert empty.status_code == 422
    assert empty.get_json()["error"] == "EmptyResponse"


def test_owner_sets_price_and_gas_limit(client, headers_for):
    price = client.put("/api/admin/price", json={"amount": 1500000}, headers=headers_for(OWNER))
    gas = client.put("/api/admin/gas-limit", json={"amount": INITIAL_GAS_LIMIT + 1}, headers=headers_for(OWNER))

    assert price.status_code == 200
    assert gas.status_code == 200
    assert client.get("/api/admin/price").get_json() == {"amount": 1500000}
    assert client.get("/api/admin/gas-limit").get_json() == {"amount": INITIAL_GAS_LIMIT + 1}


def test_non_owner_admin_calls_are_403(client, headers_for):
    headers = headers_for(STRANGER)

    assert client.put("/api/admin/price", json={"amount": 150000}, headers=headers).status_code == 403
    assert client.put("/api/admin/gas-limit", json={"amount": 1}, headers=headers).status_code == 403
    assert client.post("/api/admin/withdraw", headers=headers).status_code == 403
    assert client.get("/api/admin/pending", headers=headers).status_code == 403

    assert client.get("/api/admin/price").get_json() == {"amount": INITIAL_VERSE_PRICE}
    assert client.get("/api/admin/gas-limit").get_json() == {"amount": INITIAL_GAS_LIMIT}


def test_owner_withdraws(client, headers_for):
    _request_verse(client, headers_for)

    first = client.post("/api/admin/withdraw", headers=headers_for(OWNER))
    second = client.post("/api/admin/withdraw", headers=headers_for(OWNER))

    assert first.get_json() == {"amount": INITIAL_VERSE_PRICE, "recipient": OWNER}
    assert second.status_code == 200
    assert second.get_json() == {"amount": 0, "recipient": OWNER}
    assert client.get("/api/admin/treasury").get_json() == {"balance": 0}


def test_owner_lists_pending_queries(client, headers_for):
    query_id = _request_verse(client, headers_for).get_json()["query_id"]

    response = client.get("/api/admin/pending", headers=headers_for(OWNER))

    assert response.status_code == 200
    assert [p["query_id"] for p in response.get_json()] == [query_id]


def test_pending_list_failure_is_500(client, headers_for, service, monkeypatch):
    def broken(caller):
        raise RuntimeError("database went away")

    monkeypatch.setattr(service, "list_pending", broken)

    response = client.get("/api/admin/pending", headers=headers_for(OWNER))

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to list pending queries"}
