from meetup.extensions import db


class MeetUpGoer(db.Model):
    __tablename__ = "meet_up_goers"
    __table_args__ = (
        db.UniqueConstraint("user_id", "meet_up_id", name="uq_meet_up_goers_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    meet_up_id = db.Column(db.Integer, db.ForeignKey("meet_ups.id"), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False)
