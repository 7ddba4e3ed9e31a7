"""Emergency contact API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from glimmer.database import get_db
from glimmer.models.emergency_contact import EmergencyContact, MAX_CONTACTS_PER_USER
from glimmer.schemas.contact import ContactCreate, ContactOut, ContactUpdate
from glimmer.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_contact_or_404(db: Session, user_id: str, contact_id: str) -> EmergencyContact:
    contact = (
        db.query(EmergencyContact)
        .filter(EmergencyContact.contact_id == contact_id, EmergencyContact.user_id == user_id)
        .first()
    )
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.get("/{user_id}/contacts", response_model=list[ContactOut])
def list_contacts(user_id: str, db: Session = Depends(get_db)):
    """List a user's emergency contacts."""
    return get_user_or_404(db, user_id).emergency_contacts


@router.post("/{user_id}/contacts", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
def create_contact(user_id: str, payload: ContactCreate, db: Session = Depends(get_db)):
    """Add an emergency contact (at most three per user)."""
    get_user_or_404(db, user_id)
    count = db.query(EmergencyContact).filter(EmergencyContact.user_id == user_id).count()
    if count >= MAX_CONTACTS_PER_USER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {MAX_CONTACTS_PER_USER} emergency contacts are allowed",
        )

    contact = EmergencyContact(user_id=user_id, name=payload.name, email=payload.email)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("Added contact %s for user %s", contact.contact_id, user_id)
    return contact


@router.patch("/{user_id}/contacts/{contact_id}", response_model=ContactOut)
def update_contact(user_id: str, contact_id: str, payload: ContactUpdate, db: Session = Depends(get_db)):
    """Rename, re-address, or enable/disable a contact."""
    contact = _get_contact_or_404(db, user_id, contact_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(contact, field, value)
    db.commit()
    db.refresh(contact)
    logger.info("Updated contact %s for user %s", contact_id, user_id)
    return contact


@router.delete("/{user_id}/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(user_id: str, contact_id: str, db: Session = Depends(get_db)):
    contact = _get_contact_or_404(db, user_id, contact_id)
    db.delete(contact)
    db.commit()
    logger.info("Deleted contact %s for user %s", contact_id, user_id)
