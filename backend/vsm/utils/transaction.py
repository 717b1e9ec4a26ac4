from contextlib import contextmanager
from flask import current_app
from vsm.extensions import db

@contextmanager
def transactional():
    """
    Commit the session when the block completes, roll it back otherwise.

    Application services wrap each mutation in one of these so a request
    never leaves half of a write behind.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.warning("Transaction rolled back: %s", e)
        raise
