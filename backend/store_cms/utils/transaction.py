from contextlib import contextmanager
from flask import current_app
from store_cms.extensions import db

@contextmanager
def transactional():
    """
    Context manager for database transactions.
    Yields the session; commits on success, rolls back and re-raises on error.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        current_app.logger.warning(
            "Transaction rolled back after %s", exc.__class__.__name__
        )
        raise
