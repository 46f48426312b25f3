from meetup.extensions import db


class MeetUp(db.Model):
    __tablename__ = "meet_ups"

    id = db.Column(db.Integer, primary_key=True)
    state = db.Column(db.Integer, nullable=False, default=0, index=True)
    location_type = db.Column(db.String(20), nullable=False, default="OnSite")
    location_address = db.Column(db.String(255), nullable=True)
    video_conference_link = db.Column(db.String(500), nullable=True)
    calendar_link = db.Column(db.String(500), nullable=True)
    date = db.Column(db.DateTime, nullable=False)
    # Winning paper. Not a foreign key: papers already point back at meet_ups.
    paper_id = db.Column(db.Integer, nullable=True)
    link = db.Column(db.String(500), nullable=True)
    # 1 while the meet-up is live, NULL once archived. The unique index allows
    # a single live meet-up since NULLs never collide.
    active_slot = db.Column(db.Integer, nullable=True, unique=True, default=1)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    papers = db.relationship("Paper", backref="meet_up", lazy=True)
