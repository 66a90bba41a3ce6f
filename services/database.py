"""
Database Session Service

Transactional scope around the Flask-SQLAlchemy session. The session's
connection comes from the engine pool that create_app() bound to db.
"""

import logging
from contextlib import contextmanager

from models import db
from .errors import ServiceError, PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def session_scope(operation='database operation'):
    """
    Provide a transactional scope for database operations.

    - Yields the request's session with a transaction open
    - Commits on success
    - Rolls back on any exception; non-service errors become PersistenceError
    - Always closes the session, returning its connection to the pool

    Example:
        with session_scope('create recipe') as session:
            session.add(recipe)
            session.flush()
    """
    session = db.session
    try:
        yield session
        session.commit()
    except ServiceError:
        session.rollback()
        raise
    except Exception as e:
        session.rollback()
        logger.exception('Rolled back %s', operation)
        raise PersistenceError(f'Failed to {operation}') from e
    finally:
        session.close()
