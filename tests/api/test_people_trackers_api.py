class TestPeople:
    def test_create_person_gets_default_tracker(self, client):
        res = client.post("/people", json={"name": "  Jordan "})
        assert res.status_code == 201
        person = res.json()
        assert person["name"] == "Jordan"

        trackers = client.get("/trackers", params={"personId": person["id"]}).json()
        assert [t["name"] for t in trackers] == ["Default"]
        assert trackers[0]["trackerType"]["name"] == "Default"
        assert trackers[0]["roundsCount"] == 0

    def test_default_tracker_type_is_shared(self, client):
        first = client.post("/people", json={"name": "A"}).json()
        second = client.post("/people", json={"name": "B"}).json()

        type_ids = {
            client.get("/trackers", params={"personId": p["id"]}).json()[0]["trackerTypeId"]
            for p in (first, second)
        }
        assert len(type_ids) == 1
        assert len(client.get("/tracker-types").json()) == 1

    def test_blank_name_rejected(self, client):
        res = client.post("/people", json={"name": "   "})
        assert res.status_code == 400
        assert "error" in res.json()

    def test_list_and_rename(self, client, person):
        res = client.patch(f"/people/{person['id']}", json={"name": "Alexis"})
        assert res.status_code == 200
        assert [p["name"] for p in client.get("/people").json()] == ["Alexis"]

    def test_unknown_person(self, client):
        res = client.get("/people/999")
        assert res.status_code == 404
        assert res.json() == {"error": "Person not found"}

    def test_delete_cascades(self, client, person, add_category, start_round):
        add_category(person["tracker_type_id"], "Workout")
        round_id = start_round(person).json()["id"]

        assert client.delete(f"/people/{person['id']}").json() == {"ok": True}
        assert client.get(f"/people/{person['id']}").status_code == 404
        assert client.get(f"/rounds/{round_id}").status_code == 404
        assert client.get("/trackers", params={"personId": person["id"]}).json() == []


class TestTrackerTypes:
    def test_create_and_duplicate(self, client):
        res = client.post("/tracker-types", json={"name": "Fitness"})
        assert res.status_code == 201
        assert res.json()["active"] is True

        dup = client.post("/tracker-types", json={"name": "Fitness"})
        assert dup.status_code == 409

    def test_recreate_inactive_type_reactivates(self, client):
        created = client.post("/tracker-types", json={"name": "Fitness"}).json()
        assert client.delete(f"/tracker-types/{created['id']}").json() == {"ok": True}
        assert client.get("/tracker-types").json() == []

        res = client.post("/tracker-types", json={"name": "Fitness"})
        assert res.status_code == 200
        assert res.json()["id"] == created["id"]
        assert res.json()["active"] is True

    def test_deactivate_also_deactivates_categories(self, client, add_category):
        created = client.post("/tracker-types", json={"name": "Fitness"}).json()
        add_category(created["id"], "Workout")

        client.delete(f"/tracker-types/{created['id']}")

        categories = client.get("/categories", params={"trackerTypeId": created["id"], "includeInactive": "true"}).json()
        assert [c["active"] for c in categories] == [False]
        assert client.get("/tracker-types", params={"includeInactive": "true"}).json()[0]["active"] is False

    def test_deactivate_trackers_flag(self, client, person):
        fitness = client.post("/tracker-types", json={"name": "Fitness"}).json()
        tracker = client.post("/trackers", json={"personId": person["id"], "trackerTypeId": fitness["id"]}).json()

        client.request("DELETE", f"/tracker-types/{fitness['id']}", json={"deactivateTrackers": True})

        trackers = client.get("/trackers", params={"personId": person["id"], "includeInactive": "true"}).json()
        by_id = {t["id"]: t for t in trackers}
        assert by_id[tracker["id"]]["active"] is False
        assert by_id[person["tracker_id"]]["active"] is True

    def test_rename(self, client):
        fitness = client.post("/tracker-types", json={"name": "Fitness"}).json()
        client.post("/tracker-types", json={"name": "Health"})

        assert client.patch(f"/tracker-types/{fitness['id']}", json={"name": "Gym"}).json()["name"] == "Gym"
        assert client.patch(f"/tracker-types/{fitness['id']}", json={"name": "Health"}).status_code == 409

    def test_stats(self, client, person, add_category, start_round):
        add_category(person["tracker_type_id"], "Workout")
        add_category(person["tracker_type_id"], "Water")
        start_round(person)

        stats = client.get("/tracker-types", params={"includeStats": "true"}).json()
        assert len(stats) == 1
        assert stats[0]["categoriesCount"] == 2
        assert stats[0]["trackersCount"] == 1
        assert stats[0]["roundsCount"] == 1


class TestTrackers:
    def test_person_id_required(self, client):
        res = client.get("/trackers")
        assert res.status_code == 400
        assert res.json() == {"error": "personId is required"}

    def test_default_names_count_up(self, client, person):
        fitness = client.post("/tracker-types", json={"name": "Fitness"}).json()
        payload = {"personId": person["id"], "trackerTypeId": fitness["id"]}

        first = client.post("/trackers", json=payload)
        second = client.post("/trackers", json=payload)
        named = client.post("/trackers", json={**payload, "name": "Marathon prep"})

        assert first.status_code == 201
        assert first.json()["name"] == "Fitness"
        assert second.json()["name"] == "Fitness 2"
        assert named.json()["name"] == "Marathon prep"

    def test_unknown_person_or_type(self, client, person):
        assert client.post("/trackers", json={"personId": 999, "trackerTypeId": person["tracker_type_id"]}).status_code == 404
        assert client.post("/trackers", json={"personId": person["id"], "trackerTypeId": 999}).status_code == 404

    def test_cannot_remove_last_tracker(self, client, person):
        res = client.delete(f"/trackers/{person['tracker_id']}")
        assert res.status_code == 400
        assert res.json() == {"error": "Cannot remove the last active tracker for a person."}

    def test_tracker_without_rounds_is_hard_deleted(self, client, person):
        extra = client.post("/trackers", json={"personId": person["id"], "trackerTypeId": person["tracker_type_id"]}).json()

        assert client.delete(f"/trackers/{extra['id']}").json() == {"ok": True}
        ids = [t["id"] for t in client.get("/trackers", params={"personId": person["id"], "includeInactive": "true"}).json()]
        assert ids == [person["tracker_id"]]

    def test_tracker_with_rounds_is_soft_deleted(self, client, person, add_category, start_round):
        add_category(person["tracker_type_id"], "Workout")
        start_round(person)
        client.post("/trackers", json={"personId": person["id"], "trackerTypeId": person["tracker_type_id"]})

        assert client.delete(f"/trackers/{person['tracker_id']}").status_code == 200

        active = client.get("/trackers", params={"personId": person["id"]}).json()
        assert person["tracker_id"] not in [t["id"] for t in active]

        everything = client.get("/trackers", params={"personId": person["id"], "includeInactive": "true"}).json()
        kept = next(t for t in everything if t["id"] == person["tracker_id"])
        assert kept["active"] is False
        assert kept["roundsCount"] == 1
        assert kept["latestRoundCreatedAt"] is not None
