import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from user_api.core.exceptions import (
    EMAIL_CONFLICT_MESSAGE,
    USERNAME_CONFLICT_MESSAGE,
    UserConflictError,
    UserIdMismatchError,
    UserNotFoundError,
    UserValidationError,
)
from user_api.models.user import User
from user_api.schemas.user import UserPayload
from user_api.services.user_validation import validate_user

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def list_users(
        db: Session,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> List[User]:
        """List users whose fields contain every given substring"""
        query = db.query(User)
        # Empty filters are treated like absent ones
        if first_name:
            query = query.filter(User.first_name.contains(first_name, autoescape=True))
        if last_name:
            query = query.filter(User.last_name.contains(last_name, autoescape=True))
        if email:
            query = query.filter(User.email.contains(email, autoescape=True))
        return query.order_by(User.id).all()

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def email_taken(db: Session, email: str, exclude_user_id: Optional[int] = None) -> bool:
        query = db.query(User.id).filter(User.email == email)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def username_taken(db: Session, user_name: str, exclude_user_id: Optional[int] = None) -> bool:
        query = db.query(User.id).filter(User.user_name == user_name)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def _check_payload(db: Session, payload: UserPayload, exclude_user_id: Optional[int] = None):
        """Structural validation first, then email and username uniqueness, in that order"""
        errors = validate_user(payload)
        if errors:
            logger.warning(f"Rejected user payload with {len(errors)} validation error(s)")
            raise UserValidationError(errors)

        if UserService.email_taken(db, payload.email, exclude_user_id):
            logger.warning(f"Email conflict for {payload.email}")
            raise UserConflictError(EMAIL_CONFLICT_MESSAGE)

        if UserService.username_taken(db, payload.user_name, exclude_user_id):
            logger.warning(f"Username conflict for {payload.user_name}")
            raise UserConflictError(USERNAME_CONFLICT_MESSAGE)

    @staticmethod
    def create_user(db: Session, payload: UserPayload) -> User:
        """Validate, check uniqueness and insert a new user; any client id is ignored"""
        UserService._check_payload(db, payload)

        user = User(**payload.column_values())
        db.add(user)
        try:
            db.commit()
        except SQLAlchemyError as e:
            # The unique constraints catch duplicates inserted between the check and the commit
            db.rollback()
            logger.error(f"Error saving new user {payload.user_name}: {str(e)}")
            raise
        # Refresh to load the id assigned by the database
        db.refresh(user)

        logger.info(f"Created user {user.id} ({user.user_name})")
        return user

    @staticmethod
    def update_user(db: Session, user_id: int, payload: UserPayload) -> User:
        """Replace every editable field of an existing user"""
        if payload.id != user_id:
            raise UserIdMismatchError(user_id, payload.id)

        UserService._check_payload(db, payload, exclude_user_id=user_id)

        try:
            user = db.get(User, user_id)
            if user is None:
                # Same failure the ORM reports when an UPDATE matches no row
                raise StaleDataError(
                    "UPDATE statement on table 'users' expected to update 1 row(s); 0 were matched."
                )
            for field in User.EDITABLE_FIELDS:
                setattr(user, field, getattr(payload, field))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating user {user_id}: {str(e)}")
            raise

        logger.info(f"Updated user {user_id}")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int) -> None:
        user = UserService.get_user(db, user_id)
        db.delete(user)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting user {user_id}: {str(e)}")
            raise

        logger.info(f"Deleted user {user_id}")


user_service = UserService()
