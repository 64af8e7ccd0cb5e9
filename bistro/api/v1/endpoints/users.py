from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from bistro.core.database import get_db
from bistro.core.security import get_current_user, is_admin
from bistro.models.user import User
from bistro.schemas.user import EmailLookup, IsAdminOut
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("/me/is-admin", response_model=IsAdminOut)
async def check_is_admin(current_user: User = Depends(get_current_user)):
    return IsAdminOut(is_admin=is_admin(current_user))

@router.post("/email", response_model=str)
async def get_user_email(
    lookup: EmailLookup,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return a user's email; only admins may look up someone else."""
    if not is_admin(current_user) and current_user.id != lookup.user_id:
        raise HTTPException(status_code=403, detail="Unauthorized")
    
    try:
        email = await db.scalar(select(User.email).where(User.id == lookup.user_id))
    except SQLAlchemyError as e:
        logger.exception("Email lookup for user %s failed", lookup.user_id)
        raise HTTPException(status_code=500, detail=str(e))
    if email is None:
        raise HTTPException(status_code=500, detail="User lookup failed")
    return email
