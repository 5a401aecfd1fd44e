import logging

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException, InternalServerError

from api import bp as products_bp
from config import LOG_LEVEL, Config
from errors import InventoryError
from store import ProductStore

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(config=None, store=None):
    """Build the inventory app.

    ``config`` overrides the environment-driven defaults in ``Config``.
    ``store`` is the product store the app will own; a new ProductStore is
    created when none is given. Either way the app initialises it and keeps
    it in ``app.extensions['product_store']``.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    store = store or ProductStore()
    store.init(app)
    app.extensions['product_store'] = store

    app.register_blueprint(products_bp)

    @app.errorhandler(InventoryError)
    def handle_inventory_error(error):
        logger.debug(f"{request.method} {request.path} -> {error.status_code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error on {request.method} {request.path}: {str(error)}")
        if not request.path.startswith('/api/'):
            return InternalServerError()
        return jsonify({'error': 'Internal server error.'}), 500

    @app.route('/')
    def index():
        return render_template('index.html')

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    return app
