from meetup.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint(
            "user_id", "paper_id", "meet_up_id", name="uq_votes_user_paper_meet_up"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    paper_id = db.Column(db.Integer, db.ForeignKey("papers.id"), nullable=False)
    meet_up_id = db.Column(
        db.Integer, db.ForeignKey("meet_ups.id"), nullable=False, index=True
    )
    # Double precision, same as the weights built in memory.
    vote = db.Column(db.Float(precision=53), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)
