from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required
from storefront.domain.exceptions import ValidationError
from storefront.normalizers.document import normalize_session
from storefront.normalizers.store import normalize_version
from storefront.utils.decorators import tenant_required, roles_required, feature_enabled
from storefront.utils.optimistic_lock import enforce_optimistic_lock
from .context import current_session, discard_session
from . import v1_bp


def _payload():
    return request.get_json(silent=True) or {}


def _required(data, key, kind=str):
    value = data.get(key)
    if value is None or (kind is str and not value):
        raise ValidationError(f"'{key}' is required", field=key)
    if not isinstance(value, kind) or isinstance(value, bool) and kind is int:
        raise ValidationError(f"'{key}' must be of type {kind.__name__}", field=key)
    return value


def _state(session, status=200, **extra):
    body = normalize_session(session)
    body.update(extra)
    return jsonify(body), status


# ------------------------
# Session
# ------------------------
@v1_bp.route("/builder", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def get_builder():
    return _state(current_session())


@v1_bp.route("/builder/reload", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def reload_builder():
    discard_session()
    return _state(current_session())


@v1_bp.route("/builder/select", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def select_section():
    session = current_session()
    session.select(_payload().get("section_id"))
    return _state(session)


# ------------------------
# Sections
# ------------------------
@v1_bp.route("/builder/sections", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def add_section():
    session = current_session()
    section_id = session.add_section(_required(_payload(), "type"))
    return _state(session, 201, section_id=section_id)


@v1_bp.route("/builder/sections/<section_id>/duplicate", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def duplicate_section(section_id):
    session = current_session()
    new_id = session.duplicate_section(section_id)
    return _state(session, 201, section_id=new_id)


@v1_bp.route("/builder/sections/<section_id>/visibility", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def toggle_visibility(section_id):
    session = current_session()
    session.toggle_visibility(section_id)
    return _state(session)


@v1_bp.route("/builder/sections/<section_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def update_section(section_id):
    data = _payload()
    if "value" not in data:
        raise ValidationError("'value' is required", field="value")

    session = current_session()
    session.update_field(
        section_id,
        _required(data, "field"),
        _required(data, "key"),
        data["value"],
    )
    return _state(session)


@v1_bp.route("/builder/sections/<section_id>/move", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def move_section(section_id):
    session = current_session()
    session.move_section(section_id, _required(_payload(), "to_index", int))
    return _state(session)


@v1_bp.route("/builder/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def request_section_removal(section_id):
    session = current_session()
    session.request_removal(section_id)
    return _state(session, 202)


@v1_bp.route("/builder/removal/confirm", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def confirm_section_removal():
    session = current_session()
    removed = session.confirm_removal()
    return _state(session, removed_section_id=removed)


@v1_bp.route("/builder/removal/cancel", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def cancel_section_removal():
    session = current_session()
    session.cancel_removal()
    return _state(session)


@v1_bp.route("/builder/commit", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def commit_pending_edits():
    session = current_session()
    committed = session.commit_pending()
    return _state(session, committed=committed)


@v1_bp.route("/builder/template", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def apply_template():
    session = current_session()
    session.apply_template(_required(_payload(), "template"))
    return _state(session)


# ------------------------
# Theme
# ------------------------
@v1_bp.route("/builder/theme/preset", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def apply_theme_preset():
    session = current_session()
    session.apply_theme_preset(_required(_payload(), "preset"))
    return _state(session)


@v1_bp.route("/builder/theme", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def patch_theme():
    data = _payload()
    session = current_session()
    session.patch_theme(
        _required(data, "group"),
        _required(data, "key"),
        data.get("value"),
    )
    return _state(session)


# ------------------------
# History
# ------------------------
@v1_bp.route("/builder/undo", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def undo():
    session = current_session()
    session.undo()
    return _state(session)


@v1_bp.route("/builder/redo", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def redo():
    session = current_session()
    session.redo()
    return _state(session)


# ------------------------
# Persistence
# ------------------------
@v1_bp.route("/builder/save", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def save_draft():
    session = current_session()
    enforce_optimistic_lock(session.gateway.get_store()["updated_at"])

    session.save_draft()
    current_app.logger.info("Draft saved for tenant %s", session.context.tenant_id)
    return _state(session, message="Draft saved")


@v1_bp.route("/builder/publish", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def publish():
    session = current_session()
    enforce_optimistic_lock(session.gateway.get_store()["updated_at"])

    version = session.publish()
    current_app.logger.info(
        "Storefront published for tenant %s (version %s)", session.context.tenant_id, version
    )
    return _state(session, message="Store published", version=version)


@v1_bp.route("/builder/unpublish", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def unpublish():
    session = current_session()
    session.unpublish()
    return _state(session, message="Store unpublished")


@v1_bp.route("/builder/versions", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def list_versions():
    versions = current_session().gateway.list_versions()
    return jsonify([normalize_version(v) for v in versions]), 200


@v1_bp.route("/builder/versions/<int:version>/restore", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("storefront")
def restore_version(version):
    session = current_session()
    session.restore_version(version)
    return _state(session, restored_version=version)
