def show_admin_page(meet_up_gateway, paper_gateway):
    meet_up = meet_up_gateway.get_future_meet_up()
    if meet_up is None:
        return None, 0
    return meet_up, len(paper_gateway.get_papers_from_meet_up(meet_up.id))
