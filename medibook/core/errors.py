"""Errors raised by the appointment registry."""


class RegistryError(Exception):
    """Base class for recoverable registry failures."""


class InvalidInput(RegistryError):
    """Raised when a name, email, or date string fails validation."""


class DuplicateSlot(RegistryError):
    """Raised when the doctor already has a slot at the requested time."""


class PastDateTime(RegistryError):
    """Raised when a slot is requested before the current time."""


class NotFound(RegistryError):
    """Raised when no appointment has the requested id."""


class AlreadyBooked(RegistryError):
    """Raised when booking a slot that already has a patient."""


class NotBooked(RegistryError):
    """Raised when cancelling a slot that has no booking."""


__all__ = [
    "RegistryError",
    "InvalidInput",
    "DuplicateSlot",
    "PastDateTime",
    "NotFound",
    "AlreadyBooked",
    "NotBooked",
]
