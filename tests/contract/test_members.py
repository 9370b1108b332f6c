from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient


def test_list_members_returns_members_ordered_by_name(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.get(f"/v1/messes/{seeded_mess.mess_id}/members")

    assert response.status_code == 200
    names = [item["name"] for item in response.json()["members"]]
    assert names == ["Alice", "Bob", "Carol"]


def test_create_member_returns_201(client: TestClient, seeded_mess: Any) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/members",
        json={"name": "  Dave ", "room_number": "4B"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Dave"
    assert body["room_number"] == "4B"
    assert body["is_active"] is True


def test_create_member_with_blank_name_returns_400(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/members", json={"name": "   "}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_deactivate_member_keeps_member_listed_but_inactive(
    client: TestClient, seeded_mess: Any
) -> None:
    mess_id = seeded_mess.mess_id

    response = client.post(
        f"/v1/messes/{mess_id}/members/{seeded_mess.carol_id}/deactivate"
    )
    active = client.get(f"/v1/messes/{mess_id}/members", params={"active_only": True})
    everyone = client.get(f"/v1/messes/{mess_id}/members")

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert [item["name"] for item in active.json()["members"]] == ["Alice", "Bob"]
    assert len(everyone.json()["members"]) == 3


def test_unknown_mess_returns_404(client: TestClient) -> None:
    response = client.get("/v1/messes/missing/members")

    assert response.status_code == 404
    assert response.json()["code"] == "MESS_NOT_FOUND"


def test_deactivate_unknown_member_returns_404(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/members/ghost/deactivate"
    )

    assert response.status_code == 404
    assert response.json()["code"] == "MEMBER_NOT_FOUND"
