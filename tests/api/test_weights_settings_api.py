import pytest


@pytest.fixture
def round_id(person, add_category, start_round):
    add_category(person["tracker_type_id"], "Workout")
    return start_round(person).json()["id"]


class TestWeights:
    def test_one_weight_per_week(self, client, round_id):
        first = client.post("/weights", json={"roundId": round_id, "date": "2026-01-06", "weight": 180.4})
        assert first.status_code == 200
        assert first.json()["weekIndex"] == 0

        replaced = client.post("/weights", json={"roundId": round_id, "date": "2026-01-11", "weight": 179.8})
        assert replaced.json()["id"] == first.json()["id"]
        assert replaced.json()["weight"] == 179.8
        assert replaced.json()["date"] == "2026-01-11"

        week_two = client.post("/weights", json={"roundId": round_id, "date": "2026-01-12", "weight": 179})
        assert week_two.json()["weekIndex"] == 1

        weights = client.get(f"/rounds/{round_id}").json()["weightEntries"]
        assert sorted(w["weekIndex"] for w in weights) == [0, 1]

    @pytest.mark.parametrize("weight", [0, -3])
    def test_weight_must_be_positive(self, client, round_id, weight):
        res = client.post("/weights", json={"roundId": round_id, "date": "2026-01-06", "weight": weight})
        assert res.status_code == 400

    def test_date_outside_round(self, client, round_id):
        res = client.post("/weights", json={"roundId": round_id, "date": "2026-02-02", "weight": 180})
        assert res.status_code == 400
        assert res.json() == {"error": "Date is outside this round"}

    def test_unknown_round(self, client):
        res = client.post("/weights", json={"roundId": 999, "date": "2026-01-06", "weight": 180})
        assert res.status_code == 404


class TestSettings:
    def test_defaults_created_on_first_read(self, client):
        res = client.get("/settings")
        assert res.status_code == 200
        assert res.json() == {
            "roundLengthWeeks": 8,
            "weekStartsOn": 0,
            "timezone": "America/New_York",
            "weightUnit": "LBS",
        }

    @pytest.mark.parametrize("raw,expected", [("kg", "KG"), ("lb", "LBS"), ("LBS", "LBS")])
    def test_weight_unit_normalized(self, client, raw, expected):
        res = client.patch("/settings", json={"weightUnit": raw})
        assert res.status_code == 200
        assert res.json()["weightUnit"] == expected
        assert client.get("/settings").json()["weightUnit"] == expected

    @pytest.mark.parametrize("payload", [
        {"weightUnit": "stone"},
        {"roundLengthWeeks": 6},
        {"weekStartsOn": 7},
        {"timezone": "Mars/Olympus_Mons"},
        {},
    ])
    def test_invalid_updates(self, client, payload):
        res = client.patch("/settings", json=payload)
        assert res.status_code == 400
        assert "error" in res.json()

    def test_timezone_update(self, client):
        res = client.patch("/settings", json={"timezone": "Europe/Berlin", "weekStartsOn": 1})
        assert res.json()["timezone"] == "Europe/Berlin"
        assert res.json()["weekStartsOn"] == 1


class TestProbes:
    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"
        assert res.headers["cache-control"] == "no-store"

    def test_ready(self, client):
        res = client.get("/ready")
        assert res.status_code == 200
        assert res.json()["status"] == "ready"
        assert res.json()["database"] == "ok"

    def test_unknown_route_uses_error_body(self, client):
        res = client.get("/does-not-exist")
        assert res.status_code == 404
        assert "error" in res.json()
