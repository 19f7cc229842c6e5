"""
Flask Application for Email Validation API

Provides REST API endpoints for email validation.

Configuration is read from the environment:
    CHECK_MX, MX_FALLBACK_TO_A, EMAIL_MESSAGE, EMAIL_MX_MESSAGE,
    DNS_TIMEOUT, DNS_NAMESERVERS, MAX_BATCH_SIZE, LOG_LEVEL
"""

import logging
import os
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS

from validates_email import DNSService, DNSServiceBase, EmailValidator, ValidationConfig
from validates_email.config import dns_settings_from_env, max_batch_size_from_env

logger = logging.getLogger(__name__)


def create_app(config: Optional[ValidationConfig] = None,
               dns_service: Optional[DNSServiceBase] = None,
               max_batch_size: Optional[int] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Validation options; read from the environment when omitted
        dns_service: DNS service for MX checks; built from DNS_TIMEOUT and
            DNS_NAMESERVERS when omitted and a DNS check is configured
        max_batch_size: Largest accepted /validate/batch request
    """
    config = config or ValidationConfig.from_env()
    if dns_service is None and config.dns_requested:
        settings = dns_settings_from_env()
        dns_service = DNSService(timeout=settings.timeout, nameservers=settings.nameservers)
    if max_batch_size is None:
        max_batch_size = max_batch_size_from_env()

    validator = EmailValidator(config, dns_service=dns_service)

    app = Flask(__name__)
    CORS(app)
    app.config['VALIDATOR'] = validator
    app.config['MAX_BATCH_SIZE'] = max_batch_size

    @app.route('/health', methods=['GET'])
    def health_check():
        """
        Health check endpoint.

        Returns:
            JSON response with status
        """
        return jsonify({
            'status': 'healthy',
            'service': 'validates-email',
            'check_mx': config.use_mx,
            'mx_fallback_to_a': config.use_mx_with_fallback_to_a
        }), 200

    @app.route('/validate', methods=['POST'])
    def validate_email():
        """
        Validate an email address.

        Request Body:
            {
                "email": "user@example.com"
            }

        Returns:
            JSON response with ValidationResult.to_dict()
        """
        data, error = _json_body()
        if error:
            return error

        email = data.get('email')
        if email is None:
            return jsonify({
                'error': 'Missing required field: email'
            }), 400

        result = validator.validate(email)
        return jsonify(result.to_dict()), 200

    @app.route('/validate/batch', methods=['POST'])
    def validate_batch():
        """
        Validate multiple email addresses.

        Request Body:
            {
                "emails": ["user1@example.com", "user2@example.com"]
            }

        Returns:
            JSON response with results, total, valid_count and invalid_count
        """
        data, error = _json_body()
        if error:
            return error

        emails = data.get('emails')
        if emails is None:
            return jsonify({
                'error': 'Missing required field: emails'
            }), 400
        if not isinstance(emails, list):
            return jsonify({
                'error': 'emails must be an array'
            }), 400
        if len(emails) == 0:
            return jsonify({
                'error': 'emails array cannot be empty'
            }), 400
        if len(emails) > max_batch_size:
            return jsonify({
                'error': f'emails array cannot exceed {max_batch_size} items'
            }), 400

        results = validator.validate_batch(emails)
        valid_count = sum(1 for r in results if r.is_valid)

        return jsonify({
            'results': [r.to_dict() for r in results],
            'total': len(results),
            'valid_count': valid_count,
            'invalid_count': len(results) - valid_count
        }), 200

    @app.route('/quick-check', methods=['GET'])
    def quick_check():
        """
        Quick email validation check via GET request.

        Query Parameters:
            email: Email address to validate
        """
        email = request.args.get('email')
        if email is None:
            return jsonify({
                'error': 'Missing required query parameter: email'
            }), 400

        return jsonify({
            'email': email,
            'is_valid': validator.is_valid(email)
        }), 200

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Endpoint not found'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method not allowed'
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify({
            'error': 'Internal server error'
        }), 500

    return app


def _json_body():
    """Return (data, None) for a JSON object body, or (None, error_response)."""
    if not request.is_json:
        return None, (jsonify({
            'error': 'Content-Type must be application/json'
        }), 415)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({
            'error': 'Invalid JSON body'
        }), 400)
    return data, None


app = create_app()


if __name__ == '__main__':
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'

    logger.info("Starting Email Validator API on port %s", port)
    logger.info("MX check enabled: %s", app.config['VALIDATOR'].config.dns_requested)

    app.run(host='0.0.0.0', port=port, debug=debug)
