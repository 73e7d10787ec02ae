from flask import request


def json_body() -> dict:
    """Request JSON as a dict; missing or non-object bodies read as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
