"""Domain values handed across the gateway boundary.

Gateways return these plain values instead of ORM rows so the use cases never
depend on a session being open.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Optional, Union


class MeetUpState(IntEnum):
    CALL_FOR_PAPERS = 0
    VOTING = 1
    SCHEDULED = 2
    DONE = 3

    @property
    def label(self) -> str:
        return {
            MeetUpState.CALL_FOR_PAPERS: "CallForPapers",
            MeetUpState.VOTING: "Voting",
            MeetUpState.SCHEDULED: "Scheduled",
            MeetUpState.DONE: "Done",
        }[self]


@dataclass(frozen=True)
class OnSite:
    address: str


@dataclass(frozen=True)
class Online:
    video_conference_link: str
    calendar_link: str


Location = Union[OnSite, Online]


@dataclass(frozen=True)
class Paper:
    id: Optional[int]
    user_id: int
    title: str
    description: str
    speaker: str
    email: str


@dataclass(frozen=True)
class Vote:
    user_id: int
    paper_id: int
    meet_up_id: int
    vote: float


@dataclass(frozen=True)
class MeetUp:
    id: int
    state: MeetUpState
    location: Location
    date: datetime
    paper: Optional[Paper] = None
    link: Optional[str] = None

    def to_dict(self):
        if isinstance(self.location, OnSite):
            location = {"type": "OnSite", "address": self.location.address}
        else:
            location = {
                "type": "Online",
                "video_conference_link": self.location.video_conference_link,
                "calendar_link": self.location.calendar_link,
            }
        return {
            "id": self.id,
            "state": self.state.label,
            "location": location,
            "date": self.date.isoformat(),
            "paper": paper_to_dict(self.paper) if self.paper else None,
            "link": self.link,
        }


@dataclass(frozen=True)
class MeetUpSummary:
    id: int
    title: str
    date: datetime

    def to_dict(self):
        return {"id": self.id, "title": self.title, "date": self.date.isoformat()}


def paper_to_dict(paper):
    return {
        "id": paper.id,
        "user_id": paper.user_id,
        "title": paper.title,
        "description": paper.description,
        "speaker": paper.speaker,
        "email": paper.email,
    }


def make_location(
    location_type, address=None, video_conference_link=None, calendar_link=None
):
    if location_type == "OnSite":
        address = (address or "").strip()
        if not address:
            raise ValueError("An on-site meet up needs an address")
        return OnSite(address=address)
    if location_type == "Online":
        video_conference_link = (video_conference_link or "").strip()
        calendar_link = (calendar_link or "").strip()
        if not video_conference_link or not calendar_link:
            raise ValueError(
                "An online meet up needs a video conference link and a calendar link"
            )
        return Online(
            video_conference_link=video_conference_link, calendar_link=calendar_link
        )
    raise ValueError(f"Invalid location type {location_type}")
