import pytest


@pytest.fixture
def wheel(person, add_category, start_round):
    """A 4-week round with a plain category and a treat/sick category"""
    plain = add_category(person["tracker_type_id"], "Workout").json()
    extended = add_category(person["tracker_type_id"], "Diet", allowTreat=True, allowSick=True).json()
    round_id = start_round(person).json()["id"]
    return {"round_id": round_id, "plain": plain["id"], "extended": extended["id"]}


def _statuses(client, round_id):
    return {(e["categoryId"], e["date"]): e["status"] for e in client.get(f"/rounds/{round_id}").json()["entries"]}


class TestCycle:
    def test_plain_category_cycle(self, wheel, cycle):
        seen = [cycle(wheel["round_id"], wheel["plain"], "2026-01-05")["status"] for _ in range(4)]
        assert seen == ["HALF", "DONE", "OFF", "EMPTY"]

    def test_extended_category_cycle(self, wheel, cycle):
        seen = [cycle(wheel["round_id"], wheel["extended"], "2026-01-05")["status"] for _ in range(6)]
        assert seen == ["HALF", "DONE", "OFF", "TREAT", "SICK", "EMPTY"]

    def test_one_entry_per_cell(self, client, wheel, cycle):
        first = cycle(wheel["round_id"], wheel["plain"], "2026-01-05")
        second = cycle(wheel["round_id"], wheel["plain"], "2026-01-05")
        assert first["id"] == second["id"]
        assert len(client.get(f"/rounds/{wheel['round_id']}").json()["entries"]) == 1

    def test_disallowed_status_resets_on_next_click(self, client, wheel, cycle):
        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": wheel["extended"],
            "date": "2026-01-05",
            "mode": "set",
            "status": "TREAT",
        })
        assert res.json()["status"] == "TREAT"

        client.patch(f"/categories/{wheel['extended']}", json={"allowTreat": False})
        assert cycle(wheel["round_id"], wheel["extended"], "2026-01-05")["status"] == "EMPTY"


class TestSet:
    def test_set_allowed_status(self, client, wheel):
        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": wheel["extended"],
            "date": "2026-01-10",
            "mode": "set",
            "status": "SICK",
        })
        assert res.status_code == 200
        assert res.json()["status"] == "SICK"
        assert res.json()["date"] == "2026-01-10"

    def test_set_disallowed_status_leaves_entry_unchanged(self, client, wheel, cycle):
        cycle(wheel["round_id"], wheel["plain"], "2026-01-05")

        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": wheel["plain"],
            "date": "2026-01-05",
            "mode": "set",
            "status": "TREAT",
        })
        assert res.status_code == 400
        assert "error" in res.json()
        assert _statuses(client, wheel["round_id"]) == {(wheel["plain"], "2026-01-05"): "HALF"}

    def test_set_without_status(self, client, wheel):
        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": wheel["plain"],
            "date": "2026-01-05",
            "mode": "set",
        })
        assert res.status_code == 400


class TestBounds:
    @pytest.mark.parametrize("day", ["2026-01-04", "2026-02-02"])
    def test_date_outside_round(self, client, wheel, day):
        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": wheel["plain"],
            "date": day,
        })
        assert res.status_code == 400
        assert res.json() == {"error": "Date is outside this round"}

    def test_last_day_is_inside(self, wheel, cycle):
        assert cycle(wheel["round_id"], wheel["plain"], "2026-02-01")["status"] == "HALF"

    def test_category_not_in_round(self, client, person, add_category, wheel):
        late = add_category(person["tracker_type_id"], "Sleep").json()
        res = client.post("/entries", json={
            "roundId": wheel["round_id"],
            "categoryId": late["id"],
            "date": "2026-01-05",
        })
        assert res.status_code == 404

    def test_unknown_round(self, client, wheel):
        res = client.post("/entries", json={
            "roundId": 999,
            "categoryId": wheel["plain"],
            "date": "2026-01-05",
        })
        assert res.status_code == 404
        assert res.json() == {"error": "Round not found"}
