"""Errors raised while executing the Govee node."""
from typing import Any, Optional


class GoveeError(Exception):
    """Base error; carries the index of the input item that failed, if any."""

    def __init__(self, message: str, item_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class NotFoundError(GoveeError):
    """Device or appliance id is not in the account's list."""


class CommandNotSupportedError(GoveeError):
    """Command is missing from the target's supportCmds."""


class InvalidFormatError(GoveeError):
    """Malformed hex color or commands JSON."""


class MissingParameterError(GoveeError):
    pass


class UnknownResourceError(GoveeError):
    pass


class UnknownOperationError(GoveeError):
    pass


class GoveeApiError(GoveeError):
    """Non-2xx response or transport failure talking to the Govee API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        item_index: Optional[int] = None,
    ):
        super().__init__(message, item_index)
        self.status_code = status_code
        self.payload = payload
