from meetup.domain import MeetUpState
from meetup.errors import InvalidStateError


def register_meet_up_goer(meet_up_gateway, goers_gateway, meet_up_id, user_id):
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    if meet_up.state != MeetUpState.SCHEDULED:
        raise InvalidStateError(meet_up.state)
    return goers_gateway.register_user_to_meet_up(user_id, meet_up.id)


def count_meet_up_goers(goers_gateway, meet_up_id):
    return goers_gateway.get_number_attendees_from_meet_up(meet_up_id)
