"""Wire-level names shared by the transport layer."""

# Anti-forgery token header; httpx matches header names case-insensitively.
XCSRF_HEADER = "x-csrf-token"

CREDENTIAL_COOKIE_NAME = ".ROBLOSECURITY"

CONTENT_TYPE_JSON = "application/json;charset=utf-8"
