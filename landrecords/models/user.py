from landrecords.extensions import db
from landrecords.utils.time import utcnow

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_SECTION_HEAD = "section_head"
ROLES = (ROLE_ADMIN, ROLE_USER, ROLE_SECTION_HEAD)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(200), nullable=False)

    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # admin/user/section_head
    # section heads see the borrowings of users in their own section
    section = db.Column(db.String(100), nullable=True, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User {self.id} {self.username} ({self.role})>"
