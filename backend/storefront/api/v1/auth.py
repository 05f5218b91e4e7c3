from flask import request, jsonify, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt,
    get_jwt_identity,
    jwt_required,
)
from storefront.domain.exceptions import ValidationError
from storefront.models.user import User
from . import v1_bp


def _builder_claims(user, tenant):
    # JWT subjects must be strings; tenant and role travel as claims
    return {"tenant_id": tenant.id, "role": user.role}


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password")
    if not email or not password:
        raise ValidationError("Email and password required")

    tenant = g.current_tenant
    user = User.query.filter_by(email=email, tenant_id=tenant.id).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    claims = _builder_claims(user, tenant)
    return jsonify({
        "access_token": create_access_token(identity=user.id, additional_claims=claims),
        "refresh_token": create_refresh_token(identity=user.id, additional_claims=claims),
        "role": user.role,
    }), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    tenant = g.current_tenant
    if get_jwt().get("tenant_id") != tenant.id:
        return jsonify({"error": "Tenant mismatch"}), 403

    user = User.query.filter_by(id=get_jwt_identity(), tenant_id=tenant.id).first()
    if not user or not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    access_token = create_access_token(
        identity=user.id,
        additional_claims=_builder_claims(user, tenant),
    )
    return jsonify({"access_token": access_token}), 200
