"""HTTP-like message templates and the parsers for them."""

from __future__ import annotations

SERVER_PORT = 8080
GET_MAX_SIZE = 1024
POST_MAX_SIZE = 2048
ACCEPT_MAX_SIZE = 2048
RESPONSE_MAX_SIZE = 2048

POST_REQ = (
    "POST / HTTP/1.1\r\n"
    "Host: %s\r\n"
    "Token: %s\r\n"
    "Content-Type: application/json;charset=utf-8\r\n"
    "Content-Length: %d\r\n"
    "Accept: */*\r\n"
    "\r\n"
    "%s"
)

GET_REQ = (
    "GET / HTTP/1.1\r\n"
    "Host: %s\r\n"
    "Token: %s\r\n"
    "Accept: */*\r\n"
    "\r\n"
)

RESPONSE = (
    "HTTP/1.1 200 OK\r\n"
    "Content-Type: application/json;charset=utf-8\r\n"
    "Content-Length: %d\r\n"
    "Connection: close\r\n"
    "Server: GDOU SimpleWebServer(SWS)/1.0 (Unix) (Ubuntu/Linux)\r\n"
    "\r\n"
    "%s"
)

POST_CONTENT_LEN = POST_MAX_SIZE - len(POST_REQ)
# The GET payload limit is measured against the POST template as well.
GET_CONTENT_LEN = GET_MAX_SIZE - len(POST_REQ)
RESPONSE_CONTENT_LEN = RESPONSE_MAX_SIZE - len(RESPONSE)


class ProtocolError(ValueError):
    """Raised when a message cannot be built or parsed."""


def _clip(text: str, limit: int) -> str:
    """Cut text so that its encoded form fits a buffer of limit bytes."""
    encoded = text.encode("utf-8")
    if len(encoded) < limit:
        return text
    return encoded[: limit - 1].decode("utf-8", "ignore")


def get_header(message, header):
    """Return the value of the first occurrence of header in message."""
    start = message.find(header)
    if start < 0:
        raise ProtocolError(f"Header '{header}' not found")
    start += len(header) + 2
    end = message.find("\r\n", start)
    if end < 0:
        raise ProtocolError(
            f"Malformed msg, no end of line found when reading header '{header}'"
        )
    return message[start:end]


def get_load(message):
    """Return everything after the blank line that ends the headers."""
    start = message.find("\r\n\r\n")
    if start < 0:
        raise ProtocolError("Malformed msg, no end of header found")
    return message[start + 4 :]


def params_to_json(params):
    """Turn 'a=1&b=2' into a flat JSON object with string values."""
    if params is None:
        raise ProtocolError("missing GET parameters")
    fields = []
    for pair in filter(None, params.split("&")):
        key, sep, value = pair.partition("=")
        if not sep:
            raise ProtocolError(f"parameter without '=': {pair!r}")
        fields.append(f'"{key}":"{value}"')
    return "{" + ",".join(fields) + "}"


def resolve_request(request):
    """Extract the JSON payload of a GET or POST request."""
    tokens = request.split()
    if not tokens:
        raise ProtocolError(f"ERROR, invalid request, reading: {request}")
    method = tokens[0]
    if method == "GET":
        host = get_header(request, "Host")
        parts = [part for part in host.split("?") if part]
        if len(parts) < 2:
            raise ProtocolError(f"ERROR, invalid request, reading: {request}")
        return params_to_json(parts[1])
    if method == "POST":
        return get_load(request)
    raise ProtocolError("Unrecognized request")


def build_get_request(host, token, query):
    """Build a GET request carrying query in the Host header."""
    if host is None or query is None:
        raise ProtocolError("ERROR, invalid GET request parameter")
    if len(query) > GET_CONTENT_LEN:
        raise ProtocolError("ERROR, GET request too long")
    return _clip(GET_REQ % (f"{host}?{query}", token), GET_MAX_SIZE)


def build_post_request(host, token, body):
    """Build a POST request with a JSON body."""
    if host is None or body is None:
        raise ProtocolError("ERROR, invalid POST request parameter")
    if len(body) > POST_CONTENT_LEN:
        raise ProtocolError("ERROR, POST request too long")
    length = len(body.encode("utf-8"))
    return _clip(POST_REQ % (host, token, length, body), POST_MAX_SIZE)


def build_response(body):
    """Build the server's 200 response around body."""
    length = len(body.encode("utf-8"))
    return _clip(RESPONSE % (length, body), RESPONSE_MAX_SIZE)