from flask import current_app
from sqlalchemy.exc import IntegrityError

from landrecords.errors import ConflictError, NotFoundError, ValidationError
from landrecords.extensions import db
from landrecords.repositories.borrowing_repo import BorrowingRepo
from landrecords.repositories.document_repo import DocumentRepo
from landrecords.utils.time import utcnow


class CatalogService:
    """CRUD for the three document catalogs, keyed by document type."""

    @staticmethod
    def _model(document_type: str):
        model = DocumentRepo.model_for(document_type)
        if model is None:
            raise ValidationError("document_type", f"Unknown document type: {document_type}")
        return model

    @staticmethod
    def list_documents(document_type: str):
        CatalogService._model(document_type)
        return DocumentRepo.list_all(document_type)

    @staticmethod
    def get_document(document_type: str, document_id: int):
        CatalogService._model(document_type)
        return DocumentRepo.get(document_type, document_id)

    @staticmethod
    def is_available(document_type: str, document_id: int) -> bool:
        # derived from the ledger, never stored on the catalog row
        return BorrowingRepo.find_open_for_document(document_type, document_id) is None

    @staticmethod
    def open_document_ids(document_type: str) -> set:
        return BorrowingRepo.open_document_ids(document_type)

    @staticmethod
    def create_document(document_type: str, fields: dict):
        model = CatalogService._model(document_type)

        if DocumentRepo.get_by_code(document_type, fields["code"]):
            raise ConflictError("duplicate_code", f"{document_type} with code '{fields['code']}' already exists")

        document = model(**fields)
        try:
            DocumentRepo.create(document)
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("duplicate_code", f"{document_type} with code '{fields['code']}' already exists")

        current_app.logger.info(f"[catalog] created {document_type} id={document.id} code={document.code}")
        return document

    @staticmethod
    def update_document(document_type: str, document_id: int, fields: dict):
        CatalogService._model(document_type)

        document = DocumentRepo.get(document_type, document_id)
        if not document:
            raise NotFoundError("document", f"{document_type} {document_id} not found")

        code = fields.get("code")
        if code is not None and code != document.code:
            other = DocumentRepo.get_by_code(document_type, code)
            if other and other.id != document.id:
                raise ConflictError("duplicate_code", f"{document_type} with code '{code}' already exists")

        for key, value in fields.items():
            setattr(document, key, value)
        document.updated_at = utcnow()

        try:
            DocumentRepo.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("duplicate_code", f"{document_type} with code '{code}' already exists")

        return document

    @staticmethod
    def delete_document(document_type: str, document_id: int) -> bool:
        CatalogService._model(document_type)

        if BorrowingRepo.find_open_for_document(document_type, document_id):
            raise ConflictError("active_borrowings", f"Cannot delete {document_type} {document_id} with active borrowings")

        document = DocumentRepo.get(document_type, document_id)
        if not document:
            return False

        DocumentRepo.delete(document)
        current_app.logger.info(f"[catalog] deleted {document_type} id={document_id}")
        return True
