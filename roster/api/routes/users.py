import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roster.core.database import get_db
from roster.core.errors import Conflict, NotFound, StoreError, ValidationError
from roster.models.user import User
from roster.schemas.base import SuccessResponse
from roster.schemas.user import UserCreate, UserDelete, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter()

EMAIL_TAKEN = "User with this email already exists"


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """List all users, newest first."""
    try:
        return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch users")
        raise StoreError(str(e) or "Failed to fetch users")


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Create a new user."""
    email = (user.email or "").strip()
    if not email:
        raise ValidationError("Email is required")

    try:
        db_user = User(name=user.name, email=email)
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
    except IntegrityError:
        db.rollback()
        raise Conflict(EMAIL_TAKEN)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create user %s", email)
        raise StoreError(str(e) or "Failed to create user")

    logger.info("Created user %s", db_user.id)
    return db_user


@router.patch("", response_model=UserResponse)
def update_user(user_update: UserUpdate, db: Session = Depends(get_db)):
    """Update a user's name and email."""
    if user_update.id is None:
        raise ValidationError("User id is required")
    email = (user_update.email or "").strip()
    if not email:
        raise ValidationError("Email is required")

    user = db.query(User).filter(User.id == user_update.id).first()
    if not user:
        raise NotFound("User not found")

    try:
        # An omitted name keeps its value; an explicit null clears it
        if "name" in user_update.model_fields_set:
            user.name = user_update.name
        user.email = email
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise Conflict(EMAIL_TAKEN)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update user %s", user_update.id)
        raise StoreError(str(e) or "Failed to update user")

    logger.info("Updated user %s", user.id)
    return user


@router.delete("", response_model=SuccessResponse)
def delete_user(body: UserDelete, db: Session = Depends(get_db)):
    """Delete a user. Their enrollments go with them."""
    if body.id is None:
        raise ValidationError("User id is required")

    user = db.query(User).filter(User.id == body.id).first()
    if not user:
        raise NotFound("User not found")

    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to delete user %s", body.id)
        raise StoreError(str(e) or "Failed to delete user")

    logger.info("Deleted user %s", body.id)
    return SuccessResponse()
