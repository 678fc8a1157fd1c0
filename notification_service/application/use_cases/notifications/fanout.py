"""Replicate one notification template across many recipients."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, wait

from sqlalchemy.orm import Session

from notification_service.config import get_settings
from notification_service.domain.entities import (
    FanoutFailure,
    FanoutResult,
    Notification,
    NotificationTemplate,
)
from notification_service.domain.exceptions import (
    NotificationServiceError,
    NotificationValidationError,
    PartialFanoutFailure,
    TransientStoreError,
)
from notification_service.infrastructure.repositories import (
    NotificationRepository,
    validate_notification,
)

from .validators import unique_recipients

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]

_ERRORS_BY_CODE: dict[str, type[NotificationServiceError]] = {
    NotificationValidationError.error_code: NotificationValidationError,
    TransientStoreError.error_code: TransientStoreError,
}


def fan_out(
    template: NotificationTemplate,
    recipient_ids: Iterable[int],
    *,
    session_factory: SessionFactory,
    max_workers: int | None = None,
    timeout: float | None = None,
) -> FanoutResult:
    """Store one notification per recipient, concurrently and independently.

    Every recipient is written in its own session so a failure for one of
    them never rolls back the others. Failed recipients are reported on the
    returned :class:`FanoutResult`. A write that has not started when
    ``timeout`` expires is cancelled and reported as timed out. A write
    already in flight is awaited, since it may still commit; its duration is
    bounded by the store timeout of its own connection.
    """

    recipients = unique_recipients(recipient_ids)
    if not recipients:
        raise NotificationValidationError("At least one recipient is required")
    # A malformed template fails every recipient the same way.
    validate_notification(template.for_recipient(recipients[0]))

    settings = get_settings()
    workers = min(max_workers or settings.fanout_max_workers, len(recipients))
    if timeout is None:
        rounds = math.ceil(len(recipients) / workers)
        timeout = settings.store_timeout_seconds * rounds

    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fanout")
    try:
        futures: dict[Future, int] = {
            executor.submit(_store_for_recipient, template, recipient_id, session_factory): recipient_id
            for recipient_id in recipients
        }
        _, pending = wait(futures, timeout=timeout)
        timed_out = {future for future in pending if future.cancel()}
        wait(pending - timed_out)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    created: dict[int, Notification] = {}
    failures: dict[int, FanoutFailure] = {}
    for future, recipient_id in futures.items():
        if future in timed_out:
            logger.warning("Timed out before storing notification for recipient %s", recipient_id)
            failures[recipient_id] = FanoutFailure(
                recipient_id=recipient_id,
                reason="Timed out while storing the notification",
                error_code=TransientStoreError.error_code,
            )
            continue
        try:
            created[recipient_id] = future.result()
        except NotificationServiceError as exc:
            logger.warning(
                "Could not store %s notification for recipient %s: %s",
                template.type.value,
                recipient_id,
                exc.message,
            )
            failures[recipient_id] = FanoutFailure(
                recipient_id=recipient_id, reason=exc.message, error_code=exc.error_code
            )

    result = FanoutResult(
        created=[created[r] for r in recipients if r in created],
        failures=[failures[r] for r in recipients if r in failures],
    )
    logger.info(
        "Fan-out of %s finished: %d created, %d failed",
        template.type.value,
        len(result.created),
        len(result.failures),
    )
    return result


def raise_for_result(result: FanoutResult) -> list[Notification]:
    """Return the created notifications or raise when any recipient failed."""

    if result.is_complete:
        return result.created
    if result.is_partial:
        raise PartialFanoutFailure(result)
    first = result.failures[0]
    error_class = _ERRORS_BY_CODE.get(first.error_code, TransientStoreError)
    raise error_class(
        f"No notification could be stored for {len(result.failures)} recipients: {first.reason}"
    )


def _store_for_recipient(
    template: NotificationTemplate,
    recipient_id: int,
    session_factory: SessionFactory,
) -> Notification:
    session = session_factory()
    try:
        return NotificationRepository(session).create(template.for_recipient(recipient_id))
    finally:
        session.close()


__all__ = ["SessionFactory", "fan_out", "raise_for_result"]
