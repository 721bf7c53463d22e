from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from landrecords.errors import ConflictError, NotFoundError
from landrecords.extensions import db
from landrecords.models.user import User
from landrecords.repositories.borrowing_repo import BorrowingRepo
from landrecords.repositories.notification_repo import NotificationRepo
from landrecords.repositories.user_repo import UserRepo
from landrecords.utils.time import utcnow


def _duplicate_reason(error: IntegrityError) -> str:
    # driver messages name the violated column or constraint
    detail = str(getattr(error, "orig", error)).lower()
    if "email" in detail:
        return "duplicate_email"
    if "username" in detail:
        return "duplicate_username"
    return "duplicate_user"


class UserService:
    @staticmethod
    def list_users():
        return UserRepo.list_all()

    @staticmethod
    def get_user(user_id: int):
        return UserRepo.get_by_id(user_id)

    @staticmethod
    def list_section_user_ids(section: str | None):
        if not section:
            return []
        return UserRepo.list_ids_by_section(section)

    @staticmethod
    def _check_unique(username=None, email=None, exclude_id=None):
        if username is not None:
            other = UserRepo.get_by_username(username)
            if other and other.id != exclude_id:
                raise ConflictError("duplicate_username", f"Username '{username}' is already taken")
        if email is not None:
            other = UserRepo.get_by_email(email)
            if other and other.id != exclude_id:
                raise ConflictError("duplicate_email", f"Email '{email}' is already registered")

    @staticmethod
    def create_user(data: dict):
        UserService._check_unique(username=data["username"], email=data.get("email"))

        user = User(
            username=data["username"],
            email=data.get("email"),
            password_hash=generate_password_hash(data["password"]),
            full_name=data["full_name"],
            role=data["role"],
            section=data.get("section"),
        )
        try:
            UserRepo.create(user)
        except IntegrityError as e:
            db.session.rollback()
            raise ConflictError(_duplicate_reason(e), "Username or email is already taken")

        current_app.logger.info(f"[users] created id={user.id} username={user.username} role={user.role}")
        return user

    @staticmethod
    def update_user(user_id: int, data: dict):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFoundError("user", f"User {user_id} not found")

        UserService._check_unique(username=data.get("username"), email=data.get("email"), exclude_id=user.id)

        for key in ("username", "full_name", "role", "email", "section"):
            if key in data:
                setattr(user, key, data[key])
        if data.get("is_active") is not None:
            user.is_active = data["is_active"]
        if data.get("password"):
            user.password_hash = generate_password_hash(data["password"])
        user.updated_at = utcnow()

        try:
            UserRepo.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise ConflictError(_duplicate_reason(e), "Username or email is already taken")

        return user

    @staticmethod
    def delete_user(user_id: int) -> bool:
        if BorrowingRepo.has_open_for_user(user_id):
            raise ConflictError("active_borrowings", f"Cannot delete user {user_id} with active borrowings")

        user = UserRepo.get_by_id(user_id)
        if not user:
            return False

        # closed ledger rows survive without an owner; the user's inbox goes with them
        NotificationRepo.delete_for_user(user_id)
        BorrowingRepo.detach_user(user_id)
        UserRepo.delete(user)

        current_app.logger.info(f"[users] deleted id={user_id}")
        return True
