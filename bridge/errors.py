"""Error types raised inside the bridge."""


class BridgeError(Exception):
    """Base class for bridge errors."""


class MalformedInputError(BridgeError):
    """Inbound webhook payload failed structural validation."""


class UnsupportedObjectError(MalformedInputError):
    """Webhook payload is not for the expected object type (maps to 404)."""

    def __init__(self, received: object, expected: str):
        super().__init__(f"Unsupported object type {received!r}, expected {expected!r}")
        self.received = received
        self.expected = expected


class DelegateFailure(BridgeError):
    """Completion call failed, timed out or returned something unusable."""


class DeliveryFailure(BridgeError):
    """Outbound send to the messaging platform failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
