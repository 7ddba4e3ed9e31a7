"""User lookups shared by the per-user API routes."""
from fastapi import HTTPException
from sqlalchemy.orm import Session

from glimmer.models.user import User


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
