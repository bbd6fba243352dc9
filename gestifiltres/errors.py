"""Exceptions raised at the boundaries of the maintenance planner."""


class InvalidArgumentError(ValueError):
    """Raised when service hours, range tags or dates are malformed."""
