"""Admin User Routes — block/unblock toggle for accounts.

Invariants:
    - Active account → blocked per BlockRequest (indefinite when no body is sent)
    - Inactive account → unblocked; block_reason and blocked_until cleared
    - 404 for unknown user ids

Design Decisions:
    - Single toggle endpoint mirrors the admin table's one-button UX
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends

from meedle.api.dependencies import get_account_admin, get_now
from meedle.core.domain_types import AccountId
from meedle.schemas.auth import BlockRequest, BlockStateResponse
from meedle.services.account_admin import AccountAdministration

router = APIRouter(prefix="/api/v1/admin/users", tags=["admin"])


@router.patch("/{user_id}/toggle-active", response_model=BlockStateResponse)
async def toggle_active(
    user_id: UUID,
    body: BlockRequest | None = None,
    admin: AccountAdministration = Depends(get_account_admin),
    now: datetime = Depends(get_now),
):
    """Block an active account or unblock a blocked one."""
    body = body or BlockRequest()
    state = await admin.toggle_active(
        AccountId(user_id), now,
        reason=body.reason,
        duration=body.duration,
        custom_until=body.blocked_until,
    )
    return BlockStateResponse(
        id=user_id,
        is_active=state.is_active,
        block_reason=state.block_reason,
        blocked_until=state.blocked_until,
    )
