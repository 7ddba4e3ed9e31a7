"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from glimmer.database import get_db
from glimmer.models.user import User
from glimmer.schemas.user import UserCreate, UserUpdate, UserOut
from glimmer.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)
router = APIRouter()


def _commit_or_409(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a new user."""
    user = User(**payload.model_dump())
    db.add(user)
    _commit_or_409(db)
    db.refresh(user)
    logger.info("Created user %s", user.user_id)
    return user


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    return get_user_or_404(db, user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    """Update display name and/or email (partial update)."""
    user = get_user_or_404(db, user_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    _commit_or_409(db)
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user
