"""Domain errors raised by kitchenpos services."""


class KitchenPosError(Exception):
    """Base class for rejected operations."""


class NotFoundError(KitchenPosError):
    """A referenced entity id does not exist."""


class InvalidArgumentError(KitchenPosError):
    """A business rule was violated by the requested operation."""
