from flask import current_app
from flask_login import current_user, login_required

from meetup.domain import MeetUpState, Paper, paper_to_dict
from meetup.routes.helpers import bad_request, get_gateway, request_data
from meetup.services.attendance import count_meet_up_goers, register_meet_up_goer
from meetup.services.ballots import show_ballot, store_ballot
from meetup.services.call_for_papers import (
    get_paper,
    show_call_for_papers,
    submit_paper,
)
from meetup.services.lifecycle import (
    get_future_meet_up,
    get_meet_up,
    list_past_meet_ups,
    require_future_meet_up,
)

PAPER_FIELDS = ("title", "description", "speaker", "email")


def register_public_routes(app):
    @app.route("/api/meet-ups/current")
    def current_meet_up():
        gateway = get_gateway()
        meet_up = get_future_meet_up(gateway)
        if meet_up is None:
            return {"ok": True, "meet_up": None}

        payload = {"ok": True, "meet_up": meet_up.to_dict()}
        if meet_up.state == MeetUpState.SCHEDULED:
            payload["attendees"] = count_meet_up_goers(gateway, meet_up.id)
        return payload

    @app.route("/api/meet-ups/past")
    def past_meet_ups():
        meet_ups = list_past_meet_ups(get_gateway())
        return {"ok": True, "meet_ups": [meet_up.to_dict() for meet_up in meet_ups]}

    @app.route("/api/meet-ups/<int:meet_up_id>")
    def meet_up_detail(meet_up_id):
        return {"ok": True, "meet_up": get_meet_up(get_gateway(), meet_up_id).to_dict()}

    @app.route("/api/papers/<int:paper_id>")
    def paper_detail(paper_id):
        return {"ok": True, "paper": paper_to_dict(get_paper(get_gateway(), paper_id))}

    @app.route("/api/call-for-papers")
    @login_required
    def call_for_papers():
        gateway = get_gateway()
        meet_up, papers, limit_reached = show_call_for_papers(
            gateway, gateway, current_user.id, current_app.config["MAX_PAPERS_PER_USER"]
        )
        return {
            "ok": True,
            "meet_up": meet_up.to_dict(),
            "papers": [paper_to_dict(paper) for paper in papers],
            "limit_reached": limit_reached,
        }

    @app.route("/api/call-for-papers", methods=["POST"])
    @login_required
    def submit_call_for_papers():
        data = request_data()
        fields = {name: (data.get(name) or "").strip() for name in PAPER_FIELDS}
        missing = [name for name, value in fields.items() if not value]
        if missing:
            return bad_request(f"Missing fields: {', '.join(missing)}.")

        gateway = get_gateway()
        meet_up = require_future_meet_up(gateway)
        paper = submit_paper(
            gateway,
            gateway,
            Paper(id=None, user_id=current_user.id, **fields),
            meet_up.id,
            current_app.config["MAX_PAPERS_PER_USER"],
        )
        return {"ok": True, "paper": paper_to_dict(paper)}, 201

    @app.route("/api/voting")
    @login_required
    def voting():
        gateway = get_gateway()
        meet_up = require_future_meet_up(gateway)
        papers = show_ballot(gateway, gateway, gateway, meet_up.id, current_user.id)
        return {
            "ok": True,
            "meet_up": meet_up.to_dict(),
            "papers": [paper_to_dict(paper) for paper in papers],
        }

    @app.route("/api/voting", methods=["POST"])
    @login_required
    def store_vote():
        data = request_data()
        if hasattr(data, "getlist"):
            raw_ids = data.getlist("paper_id")
        else:
            raw_ids = data.get("paper_ids") or []
            if not isinstance(raw_ids, list) or any(
                isinstance(paper_id, (bool, float)) for paper_id in raw_ids
            ):
                return bad_request("Paper ids must be integers.")
        try:
            paper_ids = [int(paper_id) for paper_id in raw_ids]
        except (TypeError, ValueError):
            return bad_request("Paper ids must be integers.")
        if not paper_ids:
            return bad_request("Rank at least one paper.")

        gateway = get_gateway()
        meet_up = require_future_meet_up(gateway)
        try:
            store_ballot(
                gateway, gateway, gateway, meet_up.id, current_user.id, paper_ids
            )
        except ValueError as error:
            return bad_request(str(error))

        papers = show_ballot(gateway, gateway, gateway, meet_up.id, current_user.id)
        return {"ok": True, "papers": [paper_to_dict(paper) for paper in papers]}

    @app.route("/api/meet-up-goers", methods=["POST"])
    @login_required
    def register_goer():
        gateway = get_gateway()
        meet_up = require_future_meet_up(gateway)
        created = register_meet_up_goer(gateway, gateway, meet_up.id, current_user.id)
        return {
            "ok": True,
            "registered": True,
            "created": created,
            "attendees": count_meet_up_goers(gateway, meet_up.id),
        }
