"""
Object names as the client sent them.

The object name is the request path with one leading slash removed, taken
from the raw (still percent-encoded) path so `my%20photo.jpg` and `a%2Fb`
stay distinct keys.
"""
from starlette.requests import Request


def object_name_from_path(path: str) -> str:
    return path[1:] if path.startswith("/") else path


def raw_object_name(request: Request) -> str:
    """Object name from the undecoded request path."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = request.url.path
    return object_name_from_path(path)
