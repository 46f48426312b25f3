import logging
from contextlib import contextmanager

from sqlalchemy import func, select, update
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from meetup import models
from meetup.clock import utc_now
from meetup.domain import (
    MeetUp,
    MeetUpState,
    MeetUpSummary,
    Online,
    OnSite,
    Paper,
    Vote,
)
from meetup.errors import (
    InvalidStateError,
    NotFoundError,
    QuotaExceededError,
    UnknownError,
)
from meetup.extensions import db
from meetup.gateways import (
    MeetUpGateway,
    MeetUpGoersGateway,
    PaperGateway,
    VoteGateway,
)

logger = logging.getLogger(__name__)

VOTE_KEY = ("user_id", "paper_id", "meet_up_id")


class SqlAlchemyGateway(MeetUpGateway, PaperGateway, VoteGateway, MeetUpGoersGateway):
    """Every gateway backed by the Flask-SQLAlchemy session.

    Each write runs in its own transaction: committed on success, rolled back
    on every other exit path.
    """

    def __init__(self, session=None, clock=utc_now):
        self.session = session if session is not None else db.session
        self.clock = clock

    @contextmanager
    def _transaction(self, action):
        session = self.session
        try:
            yield session
            session.commit()
        except SQLAlchemyError as err:
            session.rollback()
            logger.error("SQLAlchemy error while %s: %s", action, err)
            raise UnknownError(f"SQLAlchemy error: {err}") from err
        except Exception:
            session.rollback()
            raise

    @contextmanager
    def _reading(self, action):
        try:
            yield self.session
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("SQLAlchemy error while %s: %s", action, err)
            raise UnknownError(f"SQLAlchemy error: {err}") from err

    # Meet-ups

    def get_future_meet_up(self):
        with self._reading("fetching future meet up") as session:
            row = session.scalar(
                select(models.MeetUp)
                .where(models.MeetUp.state != int(MeetUpState.DONE))
                .order_by(models.MeetUp.id.desc())
                .limit(1)
                .execution_options(populate_existing=True)
            )
            return _meet_up_from_row(session, row) if row is not None else None

    def new_meet_up(self, location, date):
        now = self.clock()
        row = models.MeetUp(
            state=int(MeetUpState.CALL_FOR_PAPERS),
            date=date,
            active_slot=1,
            created_at=now,
            updated_at=now,
            **_location_columns(location),
        )
        with self._transaction("creating meet up") as session:
            session.add(row)
            session.flush()
            meet_up = _meet_up_from_row(session, row)
        logger.info("Meet up %s created for %s", meet_up.id, date)
        return meet_up

    def get_meet_up(self, meet_up_id):
        with self._reading("fetching meet up") as session:
            row = self._load_meet_up(session, meet_up_id)
            if row is None:
                raise NotFoundError("Meet up", meet_up_id)
            return _meet_up_from_row(session, row)

    def transition(self, meet_up_id, expected_state, new_state, paper_id=None, link=None):
        table = models.MeetUp.__table__
        values = {"state": int(new_state), "updated_at": self.clock()}
        if paper_id is not None:
            values["paper_id"] = paper_id
        if link is not None:
            values["link"] = link
        if new_state == MeetUpState.DONE:
            values["active_slot"] = None

        with self._transaction(f"moving meet up to {new_state.label}") as session:
            rows_affected = session.execute(
                update(table)
                .where(table.c.id == meet_up_id, table.c.state == int(expected_state))
                .values(**values)
            ).rowcount
            if rows_affected:
                meet_up = _meet_up_from_row(
                    session, self._load_meet_up(session, meet_up_id)
                )

        if not rows_affected:
            # Read back in a new transaction so the state is not an old snapshot.
            current = self.get_meet_up(meet_up_id).state
            logger.warning(
                "Meet up %s was %s, expected %s; not moved to %s",
                meet_up_id,
                current.label,
                expected_state.label,
                new_state.label,
            )
            raise InvalidStateError(current)

        logger.info(
            "Meet up %s moved from %s to %s",
            meet_up_id,
            expected_state.label,
            new_state.label,
        )
        return meet_up

    def list_past_meet_ups(self):
        with self._reading("listing past meet ups") as session:
            rows = session.execute(
                self._past_meet_ups_query().order_by(models.MeetUp.date.desc())
            ).all()
            return [MeetUpSummary(id=row.id, title=row.title, date=row.date) for row in rows]

    def get_past_meet_up_summary(self, meet_up_id):
        with self._reading("fetching past meet up") as session:
            row = session.execute(
                self._past_meet_ups_query().where(models.MeetUp.id == meet_up_id)
            ).first()
            if row is None:
                raise NotFoundError("Past meet up", meet_up_id)
            return MeetUpSummary(id=row.id, title=row.title, date=row.date)

    @staticmethod
    def _past_meet_ups_query():
        return (
            select(models.MeetUp.id, models.Paper.title, models.MeetUp.date)
            .join(models.Paper, models.Paper.id == models.MeetUp.paper_id)
            .where(models.MeetUp.state == int(MeetUpState.DONE))
        )

    @staticmethod
    def _load_meet_up(session, meet_up_id):
        return session.scalar(
            select(models.MeetUp)
            .where(models.MeetUp.id == meet_up_id)
            .execution_options(populate_existing=True)
        )

    # Papers

    def store_paper_with_meet_up(self, paper, meet_up_id, limit):
        row = models.Paper(
            meet_up_id=meet_up_id,
            user_id=paper.user_id,
            title=paper.title,
            description=paper.description,
            speaker=paper.speaker,
            email=paper.email,
            created_at=self.clock(),
        )
        with self._transaction("storing paper") as session:
            session.add(row)
            session.flush()
            n_papers_for_user = session.scalar(
                select(func.count(models.Paper.id)).where(
                    models.Paper.meet_up_id == meet_up_id,
                    models.Paper.user_id == paper.user_id,
                )
            )
            if n_papers_for_user > limit:
                logger.warning(
                    "User %s tried to submit paper number %s to meet up %s (limit %s)",
                    paper.user_id,
                    n_papers_for_user,
                    meet_up_id,
                    limit,
                )
                raise QuotaExceededError(limit)
            stored = _paper_from_row(row)

        logger.info("Paper %s submitted to meet up %s", stored.id, meet_up_id)
        return stored

    def get_paper(self, paper_id):
        with self._reading("fetching paper") as session:
            row = session.get(models.Paper, paper_id)
            if row is None:
                raise NotFoundError("Paper", paper_id)
            return _paper_from_row(row)

    def get_papers_from_meet_up(self, meet_up_id):
        with self._reading("fetching papers") as session:
            rows = session.scalars(
                select(models.Paper)
                .where(models.Paper.meet_up_id == meet_up_id)
                .order_by(models.Paper.id)
            ).all()
            return [_paper_from_row(row) for row in rows]

    def get_papers_from_user_and_meet_up(self, user_id, meet_up_id):
        with self._reading("fetching papers") as session:
            rows = session.scalars(
                select(models.Paper)
                .where(
                    models.Paper.meet_up_id == meet_up_id,
                    models.Paper.user_id == user_id,
                )
                .order_by(models.Paper.id)
            ).all()
            return [_paper_from_row(row) for row in rows]

    # Votes

    def record_votes(self, votes):
        with self._transaction("storing votes") as session:
            dialect = session.get_bind().dialect.name
            for vote in votes:
                now = self.clock()
                session.execute(
                    _upsert_vote(
                        dialect,
                        {
                            "user_id": vote.user_id,
                            "paper_id": vote.paper_id,
                            "meet_up_id": vote.meet_up_id,
                            "vote": vote.vote,
                            "created_at": now,
                            "updated_at": now,
                        },
                    )
                )

    def get_votes_for_user(self, meet_up_id, user_id):
        with self._reading("fetching votes") as session:
            rows = session.scalars(
                select(models.Vote)
                .where(
                    models.Vote.meet_up_id == meet_up_id,
                    models.Vote.user_id == user_id,
                )
                .order_by(models.Vote.vote.desc(), models.Vote.paper_id)
                .execution_options(populate_existing=True)
            ).all()
            return [_vote_from_row(row) for row in rows]

    def get_votes_for_meet_up(self, meet_up_id):
        with self._reading("fetching votes") as session:
            rows = session.scalars(
                select(models.Vote)
                .where(models.Vote.meet_up_id == meet_up_id)
                .execution_options(populate_existing=True)
            ).all()
            return [_vote_from_row(row) for row in rows]

    # Meet-up goers

    def register_user_to_meet_up(self, user_id, meet_up_id):
        if self.is_user_registered_to_meet_up(user_id, meet_up_id):
            return False
        session = self.session
        try:
            session.add(
                models.MeetUpGoer(
                    user_id=user_id, meet_up_id=meet_up_id, created_at=self.clock()
                )
            )
            session.commit()
        except IntegrityError:
            # Lost a race against the same user registering twice.
            session.rollback()
            return False
        except SQLAlchemyError as err:
            session.rollback()
            logger.error("SQLAlchemy error while registering meet up goer: %s", err)
            raise UnknownError(f"SQLAlchemy error: {err}") from err
        logger.info("User %s registered to meet up %s", user_id, meet_up_id)
        return True

    def is_user_registered_to_meet_up(self, user_id, meet_up_id):
        with self._reading("checking meet up goer") as session:
            count = session.scalar(
                select(func.count(models.MeetUpGoer.id)).where(
                    models.MeetUpGoer.user_id == user_id,
                    models.MeetUpGoer.meet_up_id == meet_up_id,
                )
            )
            return count > 0

    def get_number_attendees_from_meet_up(self, meet_up_id):
        with self._reading("counting meet up goers") as session:
            return session.scalar(
                select(func.count(models.MeetUpGoer.id)).where(
                    models.MeetUpGoer.meet_up_id == meet_up_id
                )
            )


def _upsert_vote(dialect, values):
    table = models.Vote.__table__
    if dialect == "sqlite":
        stmt = sqlite_insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=list(VOTE_KEY),
            set_={"vote": stmt.excluded.vote, "updated_at": stmt.excluded.updated_at},
        )
    if dialect == "postgresql":
        stmt = postgresql_insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=list(VOTE_KEY),
            set_={"vote": stmt.excluded.vote, "updated_at": stmt.excluded.updated_at},
        )
    if dialect in ("mysql", "mariadb"):
        stmt = mysql_insert(table).values(**values)
        return stmt.on_duplicate_key_update(
            vote=stmt.inserted.vote, updated_at=stmt.inserted.updated_at
        )
    raise UnknownError(f"Vote upsert is not supported on {dialect}")


def _location_columns(location):
    if isinstance(location, Online):
        return {
            "location_type": "Online",
            "location_address": None,
            "video_conference_link": location.video_conference_link,
            "calendar_link": location.calendar_link,
        }
    return {
        "location_type": "OnSite",
        "location_address": location.address,
        "video_conference_link": None,
        "calendar_link": None,
    }


def _location_from_row(row):
    if row.location_type == "Online":
        return Online(
            video_conference_link=row.video_conference_link,
            calendar_link=row.calendar_link,
        )
    return OnSite(address=row.location_address or "")


def _paper_from_row(row):
    return Paper(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        speaker=row.speaker,
        email=row.email,
    )


def _vote_from_row(row):
    return Vote(
        user_id=row.user_id,
        paper_id=row.paper_id,
        meet_up_id=row.meet_up_id,
        vote=row.vote,
    )


def _meet_up_from_row(session, row):
    state = MeetUpState(row.state)
    paper = None
    if state >= MeetUpState.SCHEDULED and row.paper_id is not None:
        paper = _paper_from_row(session.get(models.Paper, row.paper_id))
    return MeetUp(
        id=row.id,
        state=state,
        location=_location_from_row(row),
        date=row.date,
        paper=paper,
        link=row.link if state == MeetUpState.DONE else None,
    )
