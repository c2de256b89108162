import pytest


LONG_CALL = {"kind": "call", "strike": 100.0, "premium": 2.0, "direction": "long"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_meta_catalog(client):
    r = client.get("/api/v1/meta/payoff")
    assert r.status_code == 200
    data = r.json()
    assert [f["key"] for f in data["position_fields"]] == ["kind", "strike", "premium", "direction"]
    assert data["sweep"] == {"price_min": 0, "price_max": 150, "step": 1, "break_even_epsilon": 1.0}
    assert data["chart"]["x_axis_title"] == "Price of underlying at expiry"


def test_seed_endpoint(client):
    r = client.get("/api/v1/payoff/seed")
    assert r.status_code == 200
    data = r.json()
    assert len(data["quotes"]) == 4
    assert data["positions"][0]["kind"] == "call"
    assert data["positions"][0]["premium"] == pytest.approx(11.045)
    assert data["positions"][2]["direction"] == "short"


def test_quotes_endpoint(client):
    r = client.post(
        "/api/v1/payoff/quotes",
        json={"quotes": [{"strike_price": 50, "type": "PUT", "bid": 1.0, "ask": 1.5, "long_short": "long"}]},
    )
    assert r.status_code == 200
    assert r.json()["positions"] == [{"kind": "put", "strike": 50.0, "premium": 1.25, "direction": "long"}]


def test_analyze_records_a_run_and_serves_a_report(client):
    seed = client.get("/api/v1/payoff/seed").json()["positions"]

    r = client.post("/api/v1/payoff/analyze", json={"positions": seed})
    assert r.status_code == 200, r.text
    body = r.json()
    analysis = body["analysis"]
    assert len(analysis["curve"]["points"]) == 151
    assert analysis["metrics"]["status"] == "ok"
    assert analysis["metrics"]["break_even_points"] == [114]
    assert analysis["display"]["break_even_points"] == "114"
    assert analysis["chart"]["labels"] == list(range(151))

    run_id = body["run_id"]
    runs = client.get("/api/v1/runs").json()
    assert any(x["run_id"] == run_id for x in runs["items"])

    detail = client.get(f"/api/v1/runs/{run_id}")
    assert detail.status_code == 200
    assert detail.json()["run_type"] == "payoff.analyze"
    assert len(detail.json()["input"]["positions"]) == 4

    pdf = client.get(f"/api/v1/runs/{run_id}/report.pdf")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"].startswith("application/pdf")
    assert pdf.content[:4] == b"%PDF"


def test_analyze_empty_portfolio_is_undefined(client):
    r = client.post("/api/v1/payoff/analyze", json={"positions": []})
    assert r.status_code == 200
    analysis = r.json()["analysis"]
    assert analysis["metrics"] == {"status": "undefined", "max_profit": None, "max_loss": None, "break_even_points": []}
    assert analysis["display"] == {"max_profit": "-", "max_loss": "-", "break_even_points": ""}


def test_analyze_custom_sweep(client):
    r = client.post(
        "/api/v1/payoff/analyze",
        json={"positions": [LONG_CALL], "sweep": {"price_min": 90, "price_max": 110, "step": 2}},
    )
    assert r.status_code == 200
    labels = r.json()["analysis"]["chart"]["labels"]
    assert labels[0] == 90
    assert labels[-1] == 110
    assert len(labels) == 11


def test_analyze_degenerate_sweep_is_422(client):
    r = client.post(
        "/api/v1/payoff/analyze",
        json={"positions": [LONG_CALL], "sweep": {"price_min": 100, "price_max": 50}},
    )
    assert r.status_code == 422
    assert "price_max" in r.json()["detail"]


def test_analyze_oversized_sweep_is_422(client):
    r = client.post(
        "/api/v1/payoff/analyze",
        json={"positions": [LONG_CALL], "sweep": {"price_max": 200000}},
    )
    assert r.status_code == 422

    r = client.post(
        "/api/v1/payoff/analyze",
        json={"positions": [LONG_CALL], "sweep": {"price_min": 0, "price_max": 5000, "step": 1}},
    )
    assert r.status_code == 422
    assert client.get("/api/v1/runs").json()["items"] == []


def test_analyze_rejects_non_positive_strike(client):
    bad = dict(LONG_CALL, strike=0)
    r = client.post("/api/v1/payoff/analyze", json={"positions": [bad]})
    assert r.status_code == 422


def test_edit_endpoint_applies_and_rejects(client):
    ok = client.post(
        "/api/v1/payoff/edit",
        json={"positions": [LONG_CALL], "index": 0, "field": "premium", "value": "3"},
    )
    assert ok.status_code == 200
    data = ok.json()
    assert data["result"]["status"] == "ok"
    assert data["positions"][0]["premium"] == 3.0
    assert data["analysis"]["metrics"]["max_loss"] == -3.0

    bad = client.post(
        "/api/v1/payoff/edit",
        json={"positions": [LONG_CALL], "index": 0, "field": "strike", "value": "abc"},
    )
    assert bad.status_code == 200
    data = bad.json()
    assert data["result"]["status"] == "error"
    assert data["positions"] == [LONG_CALL]
    assert data["analysis"]["display"]["break_even_points"] == "102"


def test_remove_endpoint(client):
    put = {"kind": "put", "strike": 100.0, "premium": 2.0, "direction": "short"}
    r = client.post("/api/v1/payoff/remove", json={"positions": [LONG_CALL, put], "index": 1})
    assert r.status_code == 200
    data = r.json()
    assert data["result"]["status"] == "ok"
    assert data["positions"] == [LONG_CALL]
    assert data["analysis"]["metrics"]["max_profit"] == 48.0


def test_runs_scoped_by_user_header(client):
    client.post("/api/v1/payoff/analyze", json={"positions": [LONG_CALL]}, headers={"X-User-Id": "alice"})
    client.post("/api/v1/payoff/analyze", json={"positions": [LONG_CALL]}, headers={"X-User-Id": "bob"})

    alice = client.get("/api/v1/runs", headers={"X-User-Id": "alice"}).json()["items"]
    everyone = client.get("/api/v1/runs").json()["items"]
    assert len(alice) == 1
    assert len(everyone) == 2


def test_unknown_run_is_404(client):
    assert client.get("/api/v1/runs/nope").status_code == 404
    assert client.get("/api/v1/runs/nope/report.pdf").status_code == 404
