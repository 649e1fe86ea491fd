"""Error type and shared error messages for the IBC core contracts."""

UNEXPECTED_PACKET_SOURCE = "Unexpected packet source"
PACKET_ALREADY_PROCESSED = "Channel packet already processed in prev upgrade"
UNEXPECTED_PACKET_DEST = "Unexpected packet destination"
PACKET_COMM_MISMATCH = "Packet commitment mismatch"
UNKNOWN_CHANNEL_ORDER = "Unknown channel order"
UNEXPECTED_CHANNEL_STATE = "Unexpected channel state"


class IbcError(Exception):
    """Raised when a contract requirement fails; the call is rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message