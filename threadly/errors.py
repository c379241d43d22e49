class ActionError(RuntimeError):
    """A data-access call failed; the database error is chained as __cause__."""


class RedirectRequired(Exception):
    def __init__(self, target: str):
        super().__init__(target)
        self.target = target


class NoContent(Exception):
    """No identity on a gated page: render nothing."""


class UsernameTaken(ActionError):
    """The unique username constraint rejected a profile write."""
