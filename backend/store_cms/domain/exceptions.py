class PageError(Exception):
    """Base class for CMS page persistence errors."""


class ValidationError(PageError):
    """
    Page data violates a domain rule. Raised before anything is written.

    ``rule`` names the violated rule: ``format``, ``numeric``,
    ``required`` or ``date``.
    """

    def __init__(self, message: str, *, rule: str):
        super().__init__(message)
        self.rule = rule


class PersistenceError(PageError):
    """Writing a page failed; the surrounding transaction was rolled back."""


class IntegrityError(PersistenceError):
    """Uniqueness or referential integrity violation."""


class ConflictError(PersistenceError):
    """The page row was changed by someone else since it was loaded."""


class NotFoundError(PageError):
    """Requested page or store does not exist."""
