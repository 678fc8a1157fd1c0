"""FastAPI dependency utilities."""

from fastapi import Header

from notification_service.interfaces.api.schemas import MAX_DATABASE_ID


def get_actor_id(
    x_user_id: int | None = Header(
        default=None,
        alias="X-User-Id",
        ge=1,
        le=MAX_DATABASE_ID,
        description="Identity of the calling user; must match the inbox owner when sent",
    ),
) -> int | None:
    """Return the identity the caller claims to act as, if any."""

    return x_user_id
