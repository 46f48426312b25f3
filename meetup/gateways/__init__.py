"""Gateway interfaces consumed by the use cases.

Use cases depend only on these abstractions, never on a concrete store.
Implementations raise the exceptions of ``meetup.errors``.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from meetup.domain import Location, MeetUp, MeetUpState, MeetUpSummary, Paper, Vote


class MeetUpGateway(ABC):
    @abstractmethod
    def get_future_meet_up(self) -> Optional[MeetUp]:
        """Return the single non-archived meet-up, if any."""

    @abstractmethod
    def new_meet_up(self, location: Location, date: datetime) -> MeetUp:
        """Persist a fresh meet-up in CallForPapers.

        Raises UnknownError when a live meet-up already exists.
        """

    @abstractmethod
    def get_meet_up(self, meet_up_id: int) -> MeetUp:
        """Raises NotFoundError."""

    @abstractmethod
    def transition(
        self,
        meet_up_id: int,
        expected_state: MeetUpState,
        new_state: MeetUpState,
        paper_id: Optional[int] = None,
        link: Optional[str] = None,
    ) -> MeetUp:
        """Compare-and-set the state of a meet-up.

        The write only applies when the persisted state equals
        ``expected_state``. Payload fields are written atomically with the
        state. Raises NotFoundError when the meet-up does not exist and
        InvalidStateError when no row was affected.
        """

    @abstractmethod
    def list_past_meet_ups(self) -> List[MeetUpSummary]:
        """Archived meet-ups, most recent date first."""

    @abstractmethod
    def get_past_meet_up_summary(self, meet_up_id: int) -> MeetUpSummary:
        """Raises NotFoundError unless the meet-up is archived."""


class PaperGateway(ABC):
    @abstractmethod
    def store_paper_with_meet_up(
        self, paper: Paper, meet_up_id: int, limit: int
    ) -> Paper:
        """Insert then count in one transaction.

        Rolls back and raises QuotaExceededError when the user owns more than
        ``limit`` papers for the meet-up after the insert.
        """

    @abstractmethod
    def get_paper(self, paper_id: int) -> Paper:
        """Raises NotFoundError."""

    @abstractmethod
    def get_papers_from_meet_up(self, meet_up_id: int) -> List[Paper]:
        """Papers in submission order."""

    @abstractmethod
    def get_papers_from_user_and_meet_up(
        self, user_id: int, meet_up_id: int
    ) -> List[Paper]:
        ...


class VoteGateway(ABC):
    @abstractmethod
    def record_votes(self, votes: List[Vote]) -> None:
        """Upsert on (user_id, paper_id, meet_up_id) in one transaction."""

    @abstractmethod
    def get_votes_for_user(self, meet_up_id: int, user_id: int) -> List[Vote]:
        """The voter's ballot, highest weight first."""

    @abstractmethod
    def get_votes_for_meet_up(self, meet_up_id: int) -> List[Vote]:
        ...


class MeetUpGoersGateway(ABC):
    @abstractmethod
    def register_user_to_meet_up(self, user_id: int, meet_up_id: int) -> bool:
        """Return False when the user was already registered."""

    @abstractmethod
    def is_user_registered_to_meet_up(self, user_id: int, meet_up_id: int) -> bool:
        ...

    @abstractmethod
    def get_number_attendees_from_meet_up(self, meet_up_id: int) -> int:
        ...
