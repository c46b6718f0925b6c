from odontocare.core.exceptions import ViewCancelled


class CancelToken:
    """Passed through a screen's load chain and checked after every await."""

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise ViewCancelled("Screen is no longer active")
