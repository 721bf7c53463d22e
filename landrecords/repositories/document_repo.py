from landrecords.extensions import db
from landrecords.models.documents import DOCUMENT_MODELS


class DocumentRepo:
    """Catalog access dispatched on the document type tag."""

    @staticmethod
    def model_for(document_type: str):
        return DOCUMENT_MODELS.get(document_type)

    @staticmethod
    def get(document_type: str, document_id: int):
        model = DocumentRepo.model_for(document_type)
        if model is None:
            return None
        return db.session.get(model, document_id)

    @staticmethod
    def get_by_code(document_type: str, code: str):
        model = DOCUMENT_MODELS[document_type]
        return model.query.filter_by(code=code).first()

    @staticmethod
    def list_all(document_type: str):
        model = DOCUMENT_MODELS[document_type]
        return model.query.order_by(model.id.asc()).all()

    @staticmethod
    def count_all():
        return sum(model.query.count() for model in DOCUMENT_MODELS.values())

    @staticmethod
    def create(document):
        db.session.add(document)
        db.session.commit()
        return document

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def delete(document):
        db.session.delete(document)
        db.session.commit()
