# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from sqlalchemy import text
from werkzeug.middleware.proxy_fix import ProxyFix
import os
import logging
import time
import sys

from config import Config
from database import init_engine, init_db, get_db_session
from routes.verses import verses_bp
from routes.oracle import oracle_bp
from routes.admin import admin_bp
from utils.oracle import build_dispatcher
from utils.registry import VerseOracleService

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(config_overrides=None, dispatcher=None):
    """Build the Flask app and the one VerseOracleService it serves."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024  # Oracle results and admin payloads are small

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    logger.info("Initializing database...")
    init_engine(app.config['DATABASE_URL'])
    init_db()

    service = VerseOracleService(
        dispatcher=dispatcher or build_dispatcher(app.config),
        owner=app.config['OWNER_ADDRESS'],
        oracle_address=app.config['ORACLE_ADDRESS'],
        initial_price=app.config['INITIAL_VERSE_PRICE'],
        initial_gas_limit=app.config['INITIAL_GAS_LIMIT']
    )
    app.extensions['verse_oracle'] = service

    app.register_blueprint(verses_bp, url_prefix='/api/verses')
    app.register_blueprint(oracle_bp, url_prefix='/api/oracle')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        # Log request duration
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"{request.method} {request.path} -> {response.status_code} in {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint that also verifies the database connection"""
        try:
            with get_db_session() as db:
                db.execute(text('SELECT 1'))

            return jsonify({
                'status': 'healthy',
                'database': 'connected',
                'owner': service.owner,
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    create_app().run(debug=True, port=port)
