from landrecords.models.user import User, ROLES, ROLE_ADMIN, ROLE_USER, ROLE_SECTION_HEAD
from landrecords.models.documents import (
    DocumentType,
    PropertyBook,
    SurveyDeed,
    ArchivalDossier,
    DOCUMENT_MODELS,
)
from landrecords.models.borrowing import Borrowing, STATUS_OPEN, STATUS_CLOSED
from landrecords.models.notification import Notification, KIND_OVERDUE, KIND_MANUAL

__all__ = [
    "User",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLE_SECTION_HEAD",
    "DocumentType",
    "PropertyBook",
    "SurveyDeed",
    "ArchivalDossier",
    "DOCUMENT_MODELS",
    "Borrowing",
    "STATUS_OPEN",
    "STATUS_CLOSED",
    "Notification",
    "KIND_OVERDUE",
    "KIND_MANUAL",
]
