from meetup.models.meet_up import MeetUp
from meetup.models.meet_up_goer import MeetUpGoer
from meetup.models.paper import Paper
from meetup.models.user import User
from meetup.models.vote import Vote

__all__ = [
    "User",
    "MeetUp",
    "Paper",
    "Vote",
    "MeetUpGoer",
]
