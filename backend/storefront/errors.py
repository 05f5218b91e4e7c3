from flask import current_app, jsonify
from storefront.domain.exceptions import BuilderError, GatewayError


def register_error_handlers(app):
    @app.errorhandler(BuilderError)
    def handle_builder_error(error):
        if isinstance(error, GatewayError):
            current_app.logger.error("Gateway failure: %s", error.__cause__ or error)

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response
