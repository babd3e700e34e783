class POSError(Exception):
    """Base class for point-of-sale workflow errors."""


class NotFoundError(POSError):
    """The referenced table, order or menu item does not exist."""


class InvalidStateError(POSError):
    """The entity exists but its current state does not allow the operation."""
