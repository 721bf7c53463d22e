from werkzeug.security import check_password_hash
from flask_jwt_extended import create_access_token

from landrecords.errors import AuthenticationError
from landrecords.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def verify_credentials(username: str, password: str):
        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            return None
        return user

    @staticmethod
    def login(username: str, password: str):
        user = AuthService.verify_credentials(username, password)
        if not user:
            raise AuthenticationError("invalid_credentials", "Invalid username or password")
        if not user.is_active:
            raise AuthenticationError("inactive_user", "User account is disabled")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "username": user.username, "section": user.section}
        )
        return token, user
