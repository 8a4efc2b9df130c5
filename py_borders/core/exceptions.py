"""Errors raised by the border field and vertex extraction passes."""


class BorderFieldError(Exception):
    """Base class for border computation errors."""


class BorderPairError(BorderFieldError):
    """
    A contending set reported a border but yielded no differing pair.

    This is a logic defect, never a valid outcome.
    """


class PassInProgressError(BorderFieldError):
    """A pass was triggered while the same pass is still running."""


class PassCancelledError(BorderFieldError):
    """A pass observed its cancellation token and stopped early."""
