from conftest import login, register


class TestCreateChat:
    def test_create_individual_chat(self, client, alice, bob):
        response = client.post("/api/chats", json={"participants": [alice["id"], bob["id"]]}, headers=alice["headers"])
        assert response.status_code == 201
        chat = response.json()
        assert chat["type"] == "individual"
        assert chat["createdBy"] == alice["id"]
        assert chat["name"] is None

    def test_individual_chat_is_deduplicated_in_either_order(self, client, alice, bob):
        first = client.post("/api/chats", json={"participants": [alice["id"], bob["id"]]}, headers=alice["headers"])
        second = client.post(
            "/api/chats", json={"participants": [bob["id"], alice["id"]], "type": "individual"}, headers=bob["headers"]
        )
        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert len(client.get("/api/chats", headers=alice["headers"]).json()) == 1

    def test_group_chats_never_deduplicate(self, client, alice, bob):
        body = {"participants": [alice["id"], bob["id"]], "type": "group", "name": "team"}
        first = client.post("/api/chats", json=body, headers=alice["headers"])
        second = client.post("/api/chats", json=body, headers=alice["headers"])
        assert first.status_code == second.status_code == 201
        assert first.json()["id"] != second.json()["id"]
        assert first.json()["name"] == "team"

    def test_individual_chat_with_group_of_same_pair_is_not_reused(self, client, alice, bob):
        group = client.post(
            "/api/chats", json={"participants": [alice["id"], bob["id"]], "type": "group"}, headers=alice["headers"]
        )
        individual = client.post("/api/chats", json={"participants": [alice["id"], bob["id"]]}, headers=alice["headers"])
        assert individual.status_code == 201
        assert individual.json()["id"] != group.json()["id"]

    def test_dedup_requires_exact_participant_set(self, client, alice, bob):
        carol = register(client, "carol")
        three = client.post(
            "/api/chats",
            json={"participants": [alice["id"], bob["id"], carol["id"]]},
            headers=alice["headers"],
        )
        pair = client.post("/api/chats", json={"participants": [alice["id"], bob["id"]]}, headers=alice["headers"])
        assert pair.status_code == 201
        assert pair.json()["id"] != three.json()["id"]

    def test_creator_not_added_implicitly(self, client, alice, bob):
        carol = register(client, "carol")
        client.post("/api/chats", json={"participants": [bob["id"], carol["id"]]}, headers=alice["headers"])
        assert client.get("/api/chats", headers=alice["headers"]).json() == []
        assert len(client.get("/api/chats", headers=bob["headers"]).json()) == 1

    def test_duplicate_participants_collapse(self, client, alice, bob, store):
        chat = client.post(
            "/api/chats",
            json={"participants": [alice["id"], bob["id"], bob["id"]], "type": "group"},
            headers=alice["headers"],
        ).json()
        assert store.get_participants(chat["id"]) == {alice["id"], bob["id"]}
        assert len(client.get("/api/chats", headers=bob["headers"]).json()) == 1

    def test_invalid_participants(self, client, alice):
        for body in ({}, {"participants": []}, {"participants": "bob"}, {"participants": [""]}, {"participants": [1]}):
            response = client.post("/api/chats", json=body, headers=alice["headers"])
            assert response.status_code == 400, body
            assert response.json()["detail"] == "Participants array is required"

    def test_unknown_participant_is_rejected(self, client, alice):
        response = client.post("/api/chats", json={"participants": [alice["id"], "ghost"]}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown participant"
        assert client.get("/api/chats", headers=alice["headers"]).json() == []

    def test_unknown_chat_type(self, client, alice, bob):
        response = client.post(
            "/api/chats", json={"participants": [alice["id"], bob["id"]], "type": "channel"}, headers=alice["headers"]
        )
        assert response.status_code == 400


class TestListChats:
    def test_lists_only_own_chats(self, client, alice, bob):
        carol = register(client, "carol")
        client.post("/api/chats", json={"participants": [alice["id"], bob["id"]]}, headers=alice["headers"])
        client.post("/api/chats", json={"participants": [bob["id"], carol["id"]]}, headers=bob["headers"])
        assert len(client.get("/api/chats", headers=alice["headers"]).json()) == 1
        assert len(client.get("/api/chats", headers=bob["headers"]).json()) == 2
        assert len(client.get("/api/chats", headers=login(client, "carol")).json()) == 1


class TestIdentityMode:
    def test_user_id_taken_from_request(self, client, monkeypatch):
        alice = register(client, "alice")
        bob = register(client, "bob")
        monkeypatch.setenv("AUTH_MODE", "identity")
        created = client.post("/api/chats", json={"participants": [alice["id"], bob["id"]], "createdBy": alice["id"]})
        assert created.status_code == 201
        assert created.json()["createdBy"] == alice["id"]
        chats = client.get("/api/chats", params={"userId": bob["id"]})
        assert [c["id"] for c in chats.json()] == [created.json()["id"]]

    def test_missing_user_id(self, client, monkeypatch):
        monkeypatch.setenv("AUTH_MODE", "identity")
        response = client.get("/api/chats")
        assert response.status_code == 400
        assert response.json()["detail"] == "userId is required"
