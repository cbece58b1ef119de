import uuid

from fastapi.testclient import TestClient

from lingua.auth.jwt import create_user_token


class TestCreateCard:
    """POST /cards/"""

    def test_create_card_success(self, client: TestClient, auth_headers):
        response = client.post(
            "/cards/",
            json={
                "front_text": "the dog",
                "back_text": "Hund",
                "language": "DE",
                "german_article": "der",
                "word_data": {"type": "noun", "gender": "der", "plural": "Hunde"},
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["language"] == "de"
        assert data["word_data"]["plural"] == "Hunde"
        assert data["review_count"] == 0
        assert data["exercise_scores"] == []
        assert data["mastery_level"] == "New"

    def test_create_card_blank_text(self, client: TestClient, auth_headers):
        response = client.post(
            "/cards/",
            json={"front_text": "  ", "back_text": "Haus", "language": "de"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_create_card_invalid_word_data(self, client: TestClient, auth_headers):
        response = client.post(
            "/cards/",
            json={
                "front_text": "to go",
                "back_text": "gehen",
                "language": "de",
                "word_data": {"type": "verb", "colour": "blue"},
            },
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_create_card_without_token(self, client: TestClient):
        response = client.post("/cards/", json={"front_text": "a", "back_text": "b", "language": "de"})
        assert response.status_code in (401, 403)

    def test_create_card_invalid_token(self, client: TestClient):
        response = client.post(
            "/cards/",
            json={"front_text": "a", "back_text": "b", "language": "de"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401


class TestListCards:
    """GET /cards/ and GET /cards/due"""

    def test_list_only_own_cards(self, client: TestClient, auth_headers, create_card):
        create_card(back_text="Haus")
        create_card(back_text="Hund")
        other = {"Authorization": f"Bearer {create_user_token(uuid.uuid4())}"}
        client.post("/cards/", json={"front_text": "x", "back_text": "y", "language": "de"}, headers=other)

        response = client.get("/cards/", headers=auth_headers)

        assert response.status_code == 200
        assert [c["back_text"] for c in response.json()] == ["Haus", "Hund"]

    def test_list_filters_language_and_archived(self, client: TestClient, auth_headers, create_card):
        create_card(back_text="Haus")
        create_card(back_text="casa", language="es")
        archived = create_card(back_text="Baum")
        client.patch(f"/cards/{archived['id']}", json={"is_archived": True}, headers=auth_headers)

        german = client.get("/cards/", params={"language": "de"}, headers=auth_headers).json()
        everything = client.get("/cards/", params={"include_archived": True}, headers=auth_headers).json()

        assert [c["back_text"] for c in german] == ["Haus"]
        assert len(everything) == 3

    def test_new_cards_are_due(self, client: TestClient, auth_headers, create_card):
        create_card(back_text="Haus")
        create_card(back_text="casa", language="es")

        response = client.get("/cards/due", params={"language": "de"}, headers=auth_headers)

        assert response.status_code == 200
        assert [c["back_text"] for c in response.json()] == ["Haus"]


class TestSingleCard:
    """GET / PATCH / DELETE /cards/{card_id}"""

    def test_get_card(self, client: TestClient, auth_headers, create_card):
        card = create_card()

        response = client.get(f"/cards/{card['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == card["id"]

    def test_get_foreign_card_is_not_found(self, client: TestClient, create_card):
        card = create_card()
        other = {"Authorization": f"Bearer {create_user_token(uuid.uuid4())}"}

        response = client.get(f"/cards/{card['id']}", headers=other)

        assert response.status_code == 404

    def test_update_card(self, client: TestClient, auth_headers, create_card):
        card = create_card()

        response = client.patch(
            f"/cards/{card['id']}",
            json={"back_text": "das Haus", "difficulty": 3, "tags": ["home"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["back_text"] == "das Haus"
        assert data["difficulty"] == 3
        assert data["tags"] == ["home"]
        assert data["front_text"] == card["front_text"]

    def test_update_card_difficulty_out_of_range(self, client: TestClient, auth_headers, create_card):
        card = create_card()

        response = client.patch(f"/cards/{card['id']}", json={"difficulty": 9}, headers=auth_headers)

        assert response.status_code == 422

    def test_delete_card(self, client: TestClient, auth_headers, create_card):
        card = create_card()

        response = client.delete(f"/cards/{card['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get(f"/cards/{card['id']}", headers=auth_headers).status_code == 404

    def test_stats_for_fresh_card(self, client: TestClient, auth_headers, create_card):
        card = create_card()

        response = client.get(f"/cards/{card['id']}/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_attempts"] == 0
        assert data["weak_types"] == []
        assert data["scores"] == []
