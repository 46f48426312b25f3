from datetime import datetime
from functools import wraps

from flask import abort, current_app
from flask_login import current_user, login_required

from meetup.domain import make_location
from meetup.routes.helpers import bad_request, get_gateway, request_data
from meetup.services.admin import show_admin_page
from meetup.services.lifecycle import (
    create_meet_up,
    move_meet_up_to_done,
    move_meet_up_to_scheduled,
    move_meet_up_to_voting,
)


def admin_required(view):
    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            abort(403)
        return view(*args, **kwargs)

    return wrapped


def register_admin_routes(app):
    @app.route("/admin/meet-up")
    @admin_required
    def admin_page():
        gateway = get_gateway()
        meet_up, n_papers = show_admin_page(gateway, gateway)
        return {
            "ok": True,
            "meet_up": meet_up.to_dict() if meet_up else None,
            "papers": n_papers,
        }

    @app.route("/admin/meet-ups", methods=["POST"])
    @admin_required
    def admin_create_meet_up():
        data = request_data()
        try:
            location = make_location(
                (data.get("location_type") or "").strip(),
                address=data.get("location_address"),
                video_conference_link=data.get("location_video_conference_link"),
                calendar_link=data.get("location_calendar_link"),
            )
            date = datetime.fromisoformat((data.get("date") or "").strip())
        except ValueError as error:
            return bad_request(str(error))

        meet_up = create_meet_up(get_gateway(), location, date)
        current_app.logger.info("Admin %s created meet up %s", current_user.id, meet_up.id)
        return {"ok": True, "meet_up": meet_up.to_dict()}, 201

    @app.route("/admin/meet-ups/<int:meet_up_id>/voting", methods=["POST"])
    @admin_required
    def admin_go_for_voting(meet_up_id):
        meet_up = move_meet_up_to_voting(get_gateway(), meet_up_id)
        return {"ok": True, "meet_up": meet_up.to_dict()}

    @app.route("/admin/meet-ups/<int:meet_up_id>/schedule", methods=["POST"])
    @admin_required
    def admin_schedule(meet_up_id):
        gateway = get_gateway()
        meet_up = move_meet_up_to_scheduled(gateway, gateway, meet_up_id)
        return {"ok": True, "meet_up": meet_up.to_dict()}

    @app.route("/admin/meet-ups/<int:meet_up_id>/finish", methods=["POST"])
    @admin_required
    def admin_finish(meet_up_id):
        try:
            move_meet_up_to_done(get_gateway(), meet_up_id, request_data().get("link"))
        except ValueError as error:
            return bad_request(str(error))
        return {"ok": True}
