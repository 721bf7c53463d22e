# landrecords/models/documents.py
from enum import Enum

from landrecords.extensions import db
from landrecords.utils.time import utcnow


class DocumentType(str, Enum):
    PROPERTY_BOOK = "property_book"
    SURVEY_DEED = "survey_deed"
    ARCHIVAL_DOSSIER = "archival_dossier"

    @classmethod
    def values(cls):
        return [t.value for t in cls]


class DocumentMixin:
    id = db.Column(db.Integer, primary_key=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # fields a client may set besides `code`
    editable_fields: tuple = ()


class PropertyBook(DocumentMixin, db.Model):
    __tablename__ = "property_books"
    document_type = DocumentType.PROPERTY_BOOK.value
    editable_fields = ("owner_name", "village", "district")

    # rights number
    code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    owner_name = db.Column(db.String(200), nullable=False)
    village = db.Column(db.String(120), nullable=False)
    district = db.Column(db.String(120), nullable=False)


class SurveyDeed(DocumentMixin, db.Model):
    __tablename__ = "survey_deeds"
    document_type = DocumentType.SURVEY_DEED.value
    editable_fields = ("year", "area", "village")

    # survey number
    code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False)
    area = db.Column(db.Numeric(12, 2), nullable=False)
    village = db.Column(db.String(120), nullable=False)


class ArchivalDossier(DocumentMixin, db.Model):
    __tablename__ = "archival_dossiers"
    document_type = DocumentType.ARCHIVAL_DOSSIER.value
    editable_fields = ("village", "district", "dossier_ref")

    # rights number the dossier belongs to
    code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    village = db.Column(db.String(120), nullable=False)
    district = db.Column(db.String(120), nullable=False)
    dossier_ref = db.Column(db.String(120), nullable=False)


DOCUMENT_MODELS = {
    DocumentType.PROPERTY_BOOK.value: PropertyBook,
    DocumentType.SURVEY_DEED.value: SurveyDeed,
    DocumentType.ARCHIVAL_DOSSIER.value: ArchivalDossier,
}
