"""One-shot status messages kept in the session until displayed."""

from typing import Dict, List

from starlette.requests import Request

SESSION_KEY = "messages"


def flash(request: Request, message: str, level: str = "error") -> None:
    """Queue a message for the next page the user sees."""
    messages = request.session.get(SESSION_KEY, [])
    messages.append({"level": level, "message": message})
    request.session[SESSION_KEY] = messages


def pop_messages(request: Request) -> List[Dict[str, str]]:
    """Return queued messages and clear them."""
    return request.session.pop(SESSION_KEY, [])
