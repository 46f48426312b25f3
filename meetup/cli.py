from datetime import datetime

import click
from flask import current_app

from meetup.domain import make_location
from meetup.errors import MeetUpError
from meetup.extensions import db
from meetup.models import User
from meetup.services.lifecycle import (
    create_meet_up,
    move_meet_up_to_done,
    move_meet_up_to_scheduled,
    move_meet_up_to_voting,
    require_future_meet_up,
)


def register_commands(app):
    @app.cli.command("create-member")
    @click.argument("nickname")
    @click.argument("email")
    @click.option("--admin", is_flag=True, help="Allow the member to run the meet up.")
    def create_member(nickname, email, admin):
        user = User(nickname=nickname, email=email.strip().lower(), is_admin=admin)
        db.session.add(user)
        db.session.commit()
        click.echo(f"Member {user.id} created.")

    @app.cli.command("create-meet-up")
    @click.argument("date", type=click.DateTime(formats=["%Y-%m-%dT%H:%M", "%Y-%m-%d"]))
    @click.option("--address", help="Address of an on-site meet up.")
    @click.option("--video-link", help="Video conference link of an online meet up.")
    @click.option("--calendar-link", help="Calendar link of an online meet up.")
    def create_meet_up_command(date, address, video_link, calendar_link):
        if address and (video_link or calendar_link):
            raise click.BadParameter(
                "Give either --address or the online links, not both."
            )
        try:
            location = make_location(
                "OnSite" if address else "Online",
                address=address,
                video_conference_link=video_link,
                calendar_link=calendar_link,
            )
        except ValueError as error:
            raise click.BadParameter(str(error)) from error
        meet_up = create_meet_up(_gateway(), location, date)
        click.echo(f"Meet up {meet_up.id} created for {date:%Y-%m-%d %H:%M}.")

    @app.cli.command("advance-meet-up")
    @click.argument("step", type=click.Choice(["voting", "schedule", "finish"]))
    @click.option("--link", help="Recording link, required to finish.")
    def advance_meet_up(step, link):
        gateway = _gateway()
        try:
            meet_up = require_future_meet_up(gateway)
            if step == "voting":
                move_meet_up_to_voting(gateway, meet_up.id)
            elif step == "schedule":
                meet_up = move_meet_up_to_scheduled(gateway, gateway, meet_up.id)
                click.echo(f"Winning paper: {meet_up.paper.title}")
            else:
                move_meet_up_to_done(gateway, meet_up.id, link)
        except (MeetUpError, ValueError) as error:
            raise click.ClickException(str(error)) from error
        click.echo(f"Meet up {meet_up.id}: {step} done.")


def _gateway():
    return current_app.extensions["meetup_gateway"]
