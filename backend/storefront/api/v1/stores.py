from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from storefront.domain.exceptions import ValidationError
from storefront.domain.slug import generate_slug, validate_slug
from storefront.models.audit_log import AuditLog
from storefront.normalizers.audit import normalize_audit_log
from storefront.normalizers.store import normalize_store
from storefront.utils.decorators import tenant_required, roles_required, feature_enabled
from .context import current_session
from . import v1_bp


@v1_bp.route("/stores/slug-suggestion", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def suggest_slug():
    name = request.args.get("name", "")
    return jsonify({"name": name, "slug": generate_slug(name)}), 200


@v1_bp.route("/stores/slug-check", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def check_slug():
    slug = request.args.get("slug", "")
    validate_slug(slug, current_session().gateway)

    return jsonify({"slug": slug, "available": True}), 200


@v1_bp.route("/stores", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def create_store():
    data = request.get_json(silent=True) or {}

    store_name = data.get("store_name") or ""
    if not isinstance(store_name, str):
        raise ValidationError("Store name must be a string", field="store_name")

    store_name = store_name.strip()
    if not store_name:
        raise ValidationError("Store name is required", field="store_name")

    session = current_session()
    slug = validate_slug(data.get("slug", ""), session.gateway)
    store_id = session.create_store(store_name, slug)

    return jsonify({
        "id": store_id,
        "slug": slug,
        "message": "Store created successfully"
    }), 201


@v1_bp.route("/stores/current", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def get_current_store():
    store = current_session().gateway.get_store()
    return jsonify(normalize_store(store)), 200


@v1_bp.route("/stores/activity", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def list_store_activity():
    limit = max(1, min(request.args.get("limit", 20, type=int), 100))

    logs = (
        AuditLog.query
        .filter_by(tenant_id=g.current_tenant.id, entity_type="store")
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )

    return jsonify({"data": [normalize_audit_log(log) for log in logs]}), 200
