from flask import current_app, request


def get_gateway():
    return current_app.extensions["meetup_gateway"]


def request_data():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) and data else request.form


def bad_request(message):
    return {"ok": False, "error": message}, 400
