"""Translation of SQLAlchemy failures into service errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from notification_service.domain.exceptions import (
    NotificationValidationError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back ``session`` and re-raise backend failures as service errors.

    The original driver message is logged but never placed on the raised
    error, so it cannot reach API clients.
    """

    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Integrity error while trying to %s: %s", action, exc.orig)
        raise NotificationValidationError(
            f"Could not {action}: a referenced record does not exist or a constraint failed"
        ) from exc
    except PoolTimeoutError as exc:
        session.rollback()
        logger.error("Timed out waiting for a connection to %s", action)
        raise TransientStoreError(f"Timed out while trying to {action}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store failure while trying to %s: %s", action, exc)
        raise TransientStoreError(f"Store unavailable while trying to {action}") from exc


__all__ = ["translate_store_errors"]
