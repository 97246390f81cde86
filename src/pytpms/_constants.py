"""Internal constants shared across the library."""

USER_AGENT = "pytpms/0.1"

DATA_ENDPOINT = "/data"
COMMAND_ENDPOINT = "/command"

#: Key of the readings mapping inside the ``/data`` response body.
READINGS_KEY = "tireData"

DEFAULT_POLL_INTERVAL: float = 1.0
DEFAULT_REQUEST_TIMEOUT: float = 5.0

SUPPORTED_SCHEMES: frozenset[str] = frozenset({"http", "https"})


def build_url(scheme: str, address: str, endpoint: str) -> str:
    """Join a device address and an endpoint path into a URL.

    The address is used verbatim; hostnames, IP literals and ``host:port``
    forms are all accepted.
    """
    return f"{scheme}://{address.strip().rstrip('/')}{endpoint}"
