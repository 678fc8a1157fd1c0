"""Utility script to send a schedule reminder for a scene or task."""

from __future__ import annotations

import argparse

from notification_service.application.use_cases.notifications import notify_schedule
from notification_service.domain.exceptions import NotificationServiceError
from notification_service.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the schedule reminder."""

    parser = argparse.ArgumentParser(
        description="Notify everyone assigned to a scene or task about its schedule.",
    )
    parser.add_argument("item_id", type=int, help="Identifier of the scene or task")
    parser.add_argument(
        "--item-type",
        choices=("scene", "task"),
        default="scene",
        help="Kind of item to notify about (default: scene)",
    )
    parser.add_argument(
        "--project-id",
        type=int,
        required=True,
        help="Project the item belongs to",
    )
    parser.add_argument(
        "--sender-id",
        type=int,
        default=None,
        help="User sending the reminder. Defaults to the item's creator.",
    )
    return parser.parse_args()


def main() -> None:
    """Run a schedule fan-out using the provided command line arguments."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        outcome = notify_schedule(
            session,
            item_id=args.item_id,
            item_type=args.item_type,
            project_id=args.project_id,
            sender_id=args.sender_id,
            session_factory=SessionLocal,
        )
    except NotificationServiceError as exc:
        raise SystemExit(f"Could not send the schedule reminder: {exc.message}") from exc
    finally:
        session.close()

    result = outcome.result
    print(
        f"Reminder for {outcome.item.kind.value} \"{outcome.item.title}\":\n"
        f"  Sent: {len(result.created)}\n"
        f"  Failed: {len(result.failures)}"
    )
    for failure in result.failures:
        print(f"    user {failure.recipient_id}: {failure.reason}")
    if result.failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
