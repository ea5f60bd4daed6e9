import logging
import re

from flask import Blueprint, current_app, request

from .storage import StoreUnavailable

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

ID_RE = re.compile(r"[+-]?[0-9]+")


def store():
    return current_app.extensions["store"]


def json_response(payload, status: int = 200):
    body = current_app.json.dumps(payload, indent=2, ensure_ascii=False)
    return current_app.response_class(body, status=status, content_type=JSON_CONTENT_TYPE)


def parse_id(raw):
    """Return the path id as an int, or None when it is not a decimal integer."""
    if raw is None or not ID_RE.fullmatch(raw):
        return None
    return int(raw)


def body_object():
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else None


def valid_message(message):
    return message is None or isinstance(message, str)


@api_bp.errorhandler(StoreUnavailable)
def handle_store_unavailable(e):
    logger.error("%s %s: %s", request.method, request.path, e)
    return "", 502


@api_bp.get("/todos")
def api_list_todos():
    return json_response([t.to_dict() for t in store().values()])


@api_bp.post("/todo")
def api_create_todo():
    data = body_object()
    if data is not None:
        # Body decoded as a Todo; an id given by the client is kept as is.
        todo_id = data.get("id")
        if todo_id is not None and (isinstance(todo_id, bool) or not isinstance(todo_id, int)):
            return "", 400
        message = data.get("message")
        if not valid_message(message):
            return "", 400
    else:
        todo_id = None
        message = request.values.get("msg")
    todo = store().create(message, todo_id=todo_id)
    logger.debug("Created todo %d", todo.id)
    return json_response(todo.to_dict(), 201)


@api_bp.get("/todo")
@api_bp.put("/todo")
def api_missing_id():
    return "", 400


@api_bp.get("/todo/<tid>")
def api_get_todo(tid):
    todo_id = parse_id(tid)
    if todo_id is None:
        return "", 404
    todo = store().get(todo_id)
    if todo is None:
        return "", 404
    return json_response(todo.to_dict())


@api_bp.put("/todo/<tid>")
def api_update_todo(tid):
    data = body_object()
    if data is not None:
        message = data.get("message")
        if not valid_message(message):
            return "", 400
    elif "message" in request.values:
        message = request.values["message"]
    else:
        return "", 400
    todo_id = parse_id(tid)
    if todo_id is None:
        return "", 404
    todo = store().update_message(todo_id, message)
    if todo is None:
        return "", 404
    logger.debug("Updated todo %d", todo.id)
    return json_response(todo.to_dict())


@api_bp.delete("/todos")
def api_delete_all():
    store().clear()
    return "", 204
