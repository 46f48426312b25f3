from meetup.services.lifecycle import (
    move_meet_up_to_done,
    move_meet_up_to_scheduled,
    move_meet_up_to_voting,
)
from meetup.services.voting import build_ballot

PAPER_FORM = {
    "title": "Pattern matching",
    "description": "Structural pattern matching in anger.",
    "speaker": "Grace",
    "email": "grace@example.com",
}


def test_current_meet_up_is_public(client, meet_up):
    payload = client.get("/api/meet-ups/current").get_json()

    assert payload["meet_up"]["id"] == meet_up.id
    assert "attendees" not in payload


def test_no_current_meet_up(client):
    assert client.get("/api/meet-ups/current").get_json() == {"ok": True, "meet_up": None}


def test_call_for_papers_requires_login(client, meet_up):
    assert client.get("/api/call-for-papers").status_code == 401


def test_member_submits_papers_until_the_limit(auth_client, meet_up):
    for title in ("One", "Two"):
        response = auth_client.post("/api/call-for-papers", data={**PAPER_FORM, "title": title})
        assert response.status_code == 201

    response = auth_client.post("/api/call-for-papers", data={**PAPER_FORM, "title": "Three"})
    assert response.status_code == 422
    assert response.get_json()["error"] == (
        "More than 2 papers per user per meet up are not allowed"
    )

    payload = auth_client.get("/api/call-for-papers").get_json()
    assert [paper["title"] for paper in payload["papers"]] == ["One", "Two"]
    assert payload["limit_reached"] is True


def test_paper_with_missing_fields_is_rejected(auth_client, meet_up):
    response = auth_client.post("/api/call-for-papers", json={"title": "Only a title"})

    assert response.status_code == 400
    assert "description" in response.get_json()["error"]


def test_paper_detail(client, gateway, meet_up, member, paper_factory):
    paper = gateway.store_paper_with_meet_up(paper_factory(member.id), meet_up.id, 2)

    assert client.get(f"/api/papers/{paper.id}").get_json()["paper"]["title"] == paper.title
    assert client.get("/api/papers/999").status_code == 404


def test_member_ranks_papers(auth_client, gateway, meet_up, member, other_member, paper_factory):
    first = gateway.store_paper_with_meet_up(paper_factory(member.id, "First"), meet_up.id, 2)
    second = gateway.store_paper_with_meet_up(
        paper_factory(other_member.id, "Second"), meet_up.id, 2
    )
    move_meet_up_to_voting(gateway, meet_up.id)

    seeded = auth_client.get("/api/voting").get_json()
    assert [paper["id"] for paper in seeded["papers"]] == [first.id, second.id]

    response = auth_client.post("/api/voting", json={"paper_ids": [second.id, first.id]})
    assert response.status_code == 200
    assert [paper["id"] for paper in response.get_json()["papers"]] == [second.id, first.id]

    response = auth_client.post("/api/voting", data={"paper_id": [str(first.id)]})
    assert [paper["id"] for paper in response.get_json()["papers"]] == [first.id, second.id]


def test_bad_ballots_are_rejected(auth_client, gateway, meet_up, member, paper_factory):
    paper = gateway.store_paper_with_meet_up(paper_factory(member.id), meet_up.id, 2)
    move_meet_up_to_voting(gateway, meet_up.id)

    assert auth_client.post("/api/voting", json={"paper_ids": []}).status_code == 400
    assert auth_client.post("/api/voting", json={"paper_ids": ["x"]}).status_code == 400
    response = auth_client.post("/api/voting", json={"paper_ids": [paper.id, paper.id]})
    assert response.status_code == 400
    assert auth_client.post("/api/voting", json={"paper_ids": [999]}).status_code == 404


def test_paper_ids_must_be_a_list_of_integers(
    auth_client, gateway, meet_up, member, other_member, paper_factory
):
    first = gateway.store_paper_with_meet_up(paper_factory(member.id, "First"), meet_up.id, 2)
    gateway.store_paper_with_meet_up(paper_factory(other_member.id, "Second"), meet_up.id, 2)
    move_meet_up_to_voting(gateway, meet_up.id)

    for paper_ids in (f"{first.id}", {"0": first.id}, [float(first.id)], [True]):
        response = auth_client.post("/api/voting", json={"paper_ids": paper_ids})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Paper ids must be integers."

    assert gateway.get_votes_for_user(meet_up.id, member.id) == []


def test_voting_before_it_opens_is_a_conflict(auth_client, meet_up):
    assert auth_client.get("/api/voting").status_code == 409


def test_scheduled_meet_up_takes_registrations(
    auth_client, gateway, meet_up, member, paper_factory
):
    paper = gateway.store_paper_with_meet_up(paper_factory(member.id), meet_up.id, 2)
    move_meet_up_to_voting(gateway, meet_up.id)
    auth_client.post("/api/voting", json={"paper_ids": [paper.id]})
    move_meet_up_to_scheduled(gateway, gateway, meet_up.id)

    response = auth_client.post("/api/meet-up-goers")
    assert response.get_json()["created"] is True
    response = auth_client.post("/api/meet-up-goers")
    assert response.get_json()["created"] is False
    assert response.get_json()["attendees"] == 1

    payload = auth_client.get("/api/meet-ups/current").get_json()
    assert payload["meet_up"]["paper"]["id"] == paper.id
    assert payload["attendees"] == 1


def test_registration_before_scheduling_is_a_conflict(auth_client, meet_up):
    assert auth_client.post("/api/meet-up-goers").status_code == 409


def test_past_meet_ups(client, gateway, meet_up, member, paper_factory):
    paper = gateway.store_paper_with_meet_up(paper_factory(member.id), meet_up.id, 2)
    move_meet_up_to_voting(gateway, meet_up.id)
    gateway.record_votes(build_ballot(member.id, meet_up.id, [paper.id]))
    move_meet_up_to_scheduled(gateway, gateway, meet_up.id)
    move_meet_up_to_done(gateway, meet_up.id, "https://videos.example.com/7")

    payload = client.get("/api/meet-ups/past").get_json()
    assert payload["meet_ups"] == [
        {"id": meet_up.id, "title": paper.title, "date": "2026-11-05T18:00:00"}
    ]

    detail = client.get(f"/api/meet-ups/{meet_up.id}").get_json()["meet_up"]
    assert detail["state"] == "Done"
    assert detail["link"] == "https://videos.example.com/7"
    assert client.get("/api/meet-ups/999").status_code == 404
