"""
AI Task Manager - Request Dependencies

Resolves the calling owner. Authentication is out of scope; callers name
themselves with the X-User-Id header and fall back to the demo owner.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from ai_task_manager.config import settings


async def get_owner_id(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> str:
    """Owner ID from the X-User-Id header, or the configured default owner."""
    if x_user_id is None or not x_user_id.strip():
        return settings.DEFAULT_OWNER_ID
    return x_user_id.strip()


# Type alias for cleaner dependency injection
CurrentOwner = Annotated[str, Depends(get_owner_id)]
