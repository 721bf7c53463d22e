# landrecords/controllers/catalog_controller.py

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from landrecords.errors import NotFoundError
from landrecords.models.documents import DocumentType
from landrecords.models.user import ROLE_ADMIN
from landrecords.services.catalog_service import CatalogService
from landrecords.utils.decorators import role_required
from landrecords.utils.serializers import document_to_dict
from landrecords.utils.validation import document_payload, json_body


def make_catalog_blueprint(document_type: str, name: str) -> Blueprint:
    """The three catalogs expose the same CRUD surface."""
    bp = Blueprint(name, __name__)

    @bp.get("/")
    @jwt_required()
    def list_documents():
        open_ids = CatalogService.open_document_ids(document_type)
        docs = CatalogService.list_documents(document_type)
        return jsonify({"success": True, "data": [document_to_dict(d, d.id not in open_ids) for d in docs]})

    @bp.get("/<int:document_id>")
    @jwt_required()
    def get_document(document_id: int):
        doc = CatalogService.get_document(document_type, document_id)
        if not doc:
            raise NotFoundError("document", f"{document_type} {document_id} not found")
        return jsonify({
            "success": True,
            "data": document_to_dict(doc, CatalogService.is_available(document_type, doc.id)),
        })

    @bp.post("/")
    @role_required(ROLE_ADMIN)
    def create_document():
        doc = CatalogService.create_document(document_type, document_payload(document_type, json_body()))
        return jsonify({"success": True, "data": document_to_dict(doc, True)}), 201

    @bp.put("/<int:document_id>")
    @role_required(ROLE_ADMIN)
    def update_document(document_id: int):
        fields = document_payload(document_type, json_body(), partial=True)
        doc = CatalogService.update_document(document_type, document_id, fields)
        return jsonify({
            "success": True,
            "data": document_to_dict(doc, CatalogService.is_available(document_type, doc.id)),
        })

    @bp.delete("/<int:document_id>")
    @role_required(ROLE_ADMIN)
    def delete_document(document_id: int):
        if not CatalogService.delete_document(document_type, document_id):
            return jsonify({
                "success": False,
                "deleted": False,
                "message": f"{document_type} {document_id} not found",
            }), 404
        return jsonify({"success": True, "deleted": True})

    return bp


property_book_bp = make_catalog_blueprint(DocumentType.PROPERTY_BOOK.value, "property_books")
survey_deed_bp = make_catalog_blueprint(DocumentType.SURVEY_DEED.value, "survey_deeds")
archival_dossier_bp = make_catalog_blueprint(DocumentType.ARCHIVAL_DOSSIER.value, "archival_dossiers")
