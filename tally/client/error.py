"""Client engine errors."""


class ClientError(Exception):
    """Base client error."""

    pass


class ActionTransportError(ClientError):
    """The request never produced an HTTP response (connect, timeout, reset)."""

    pass


class ActionFailedError(ClientError):
    """The server answered with a non-success status or an `{ok: false}` body."""

    def __init__(self, status_code: int, payload: object = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Action failed with status {status_code}")

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429
