from datetime import datetime
from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from meetup import create_app
from meetup.clock import FrozenClock
from meetup.domain import OnSite, Paper
from meetup.extensions import db
from meetup.models import User

NOW = datetime(2026, 10, 1, 18, 30)


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {
                "connect_args": {"timeout": 30, "check_same_thread": False}
            },
            "MAX_PAPERS_PER_USER": 2,
        },
        clock=FrozenClock(NOW),
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def gateway(app):
    return app.extensions["meetup_gateway"]


def make_user(db_session, nickname, is_admin=False):
    user = User(nickname=nickname, email=f"{nickname}@example.com", is_admin=is_admin)
    db_session.add(user)
    db_session.commit()
    return user


def make_paper(user_id, title="Generators in practice"):
    return Paper(
        id=None,
        user_id=user_id,
        title=title,
        description=f"A talk about {title.lower()}.",
        speaker="Ada",
        email="ada@example.com",
    )


@pytest.fixture()
def member(db_session):
    return make_user(db_session, "member1")


@pytest.fixture()
def other_member(db_session):
    return make_user(db_session, "member2")


@pytest.fixture()
def admin_user(db_session):
    return make_user(db_session, "admin1", is_admin=True)


@pytest.fixture()
def meet_up(gateway):
    return gateway.new_meet_up(OnSite(address="Kalvebod Brygge 1"), datetime(2026, 11, 5, 18, 0))


def login(client, user):
    with client.session_transaction() as session:
        session["_user_id"] = str(user.id)
        session["_fresh"] = True
    return client


@pytest.fixture()
def auth_client(client, member):
    return login(client, member)


@pytest.fixture()
def admin_client(client, admin_user):
    return login(client, admin_user)


@pytest.fixture()
def user_factory(db_session):
    def factory(nickname, is_admin=False):
        return make_user(db_session, nickname, is_admin=is_admin)

    return factory


@pytest.fixture()
def paper_factory():
    return make_paper
