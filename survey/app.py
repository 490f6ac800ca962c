# CSAT Survey
# Relays help center satisfaction surveys into Zendesk

import sys
import os
import logging

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify

from csat import (
    PayloadBuilder,
    SurveyRelay,
    ZendeskGateway,
    load_config
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get('LOG_LEVEL', 'INFO')
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type'
}


def log_startup(config):
    """Report configuration problems without refusing to start"""
    if not config.api_token:
        logger.error("ZENDESK_TOKEN environment variable is not set; every Zendesk call will fail authentication")
    else:
        logger.info("ZENDESK_TOKEN loaded (length: %d characters)", len(config.api_token))
    if not config.admin_email:
        logger.warning("ZENDESK_ADMIN_EMAIL is not set")
    logger.info("Using Zendesk subdomain: %s", config.subdomain)
    logger.info("Admin email: %s", config.admin_email)


def build_relay(config):
    """Wire the gateway and payload builder around one config"""
    return SurveyRelay(ZendeskGateway(config), PayloadBuilder(config))


def create_app(relay=None):
    """Build the survey service.

    Pass a relay to swap the Zendesk wiring (tests do); otherwise one is
    built from the environment.
    """
    app = Flask(__name__)

    if relay is None:
        config = load_config()
        log_startup(config)
        relay = build_relay(config)
    app.config['SURVEY_RELAY'] = relay

    @app.before_request
    def preflight():
        # Browsers send OPTIONS before the real POST
        if request.method == 'OPTIONS':
            response = app.make_response(('', 204))
            response.headers['Access-Control-Max-Age'] = '86400'
            return response

    @app.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    @app.route('/submit-survey', methods=['POST'])
    def submit_survey():
        """Relay a survey to Zendesk.

        Accepts:
            - ticketId: Ticket the survey is about (required)
            - rating: '1' to '5' (required)
            - positive: What went well (optional)
            - improvement: What can we improve
            - userEmail: Customer email (optional)

        Returns:
            - success: Boolean
            - message: Human-readable result
            - error, zendeskStatus: Only when Zendesk failed
        """
        try:
            data = request.get_json(silent=True)
            outcome = app.config['SURVEY_RELAY'].submit(data)
            return jsonify(outcome.to_response()), outcome.http_status

        except Exception as e:
            logger.exception("Error in /submit-survey")
            return jsonify({
                'success': False,
                'message': 'Failed to submit survey',
                'error': str(e),
                'zendeskStatus': 'unknown'
            }), 500

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': 'CSAT Survey',
            'version': '1.0'
        })

    return app


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    app.run(host='0.0.0.0', port=port)
