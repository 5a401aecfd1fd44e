"""JSON endpoints for the product inventory, mounted under /api/products."""

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from errors import NotFound, ValidationError
from export import export_products

logger = logging.getLogger(__name__)

bp = Blueprint('products', __name__, url_prefix='/api/products')

REQUIRED_FIELDS = ('name', 'code', 'quantity')

# Largest value an INTEGER column holds
MAX_INT = 2**63 - 1


def get_store():
    return current_app.extensions['product_store']


def _json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object.')
    return payload


def _parse_product_id(raw):
    # Digits only: int() alone would also take '+3', ' 3' and '1_0'
    if not (raw.isascii() and raw.isdigit()) or int(raw) <= 0:
        raise ValidationError('Product id is not valid.')
    product_id = int(raw)
    if product_id > MAX_INT:
        raise NotFound('Product not found.')
    return product_id


def _is_quantity(value):
    # bool is an int subclass, but true/false are not quantities
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_INT


def _text(payload, field):
    value = payload[field]
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Field '{field}' must be a non-empty string.")
    return value.strip()


@bp.route('', methods=['POST'])
def create_product():
    payload = _json_body()
    logger.debug(f"Create product called for code {payload.get('code')!r}")

    if any(payload.get(field) in (None, '') for field in REQUIRED_FIELDS):
        raise ValidationError('Fields name, code and quantity are required.')
    name = _text(payload, 'name')
    code = _text(payload, 'code')
    if not _is_quantity(payload['quantity']):
        raise ValidationError('Quantity must be a non-negative integer.')

    description = payload.get('description')
    if description is not None and not isinstance(description, str):
        raise ValidationError("Field 'description' must be a string.")

    product = get_store().create(
        name=name,
        code=code,
        description=(description or '').strip() or None,
        quantity=payload['quantity']
    )
    return jsonify(product.to_dict()), 201


@bp.route('', methods=['GET'])
def list_products():
    products = get_store().list()
    return jsonify({'products': [product.to_dict() for product in products]})


@bp.route('/export', methods=['GET'])
def export_inventory():
    """Download the whole inventory as an Excel workbook (default) or CSV file."""
    fmt = request.args.get('format', 'xlsx').lower()
    payload, mimetype, filename = export_products(get_store().list(), fmt)

    response = Response(payload, content_type=mimetype)
    response.headers['Content-Disposition'] = f'attachment; filename={filename}'
    return response


@bp.route('/<product_id>', methods=['GET'])
def get_product(product_id):
    product = get_store().get(_parse_product_id(product_id))
    return jsonify({'product': product.to_dict()})


@bp.route('/<product_id>', methods=['PUT'])
def update_product(product_id):
    quantity = _json_body().get('quantity')
    if not _is_quantity(quantity):
        raise ValidationError('Quantity is required and must be a non-negative integer.')
    product_id = _parse_product_id(product_id)

    affected = get_store().update_quantity(product_id, quantity)
    return jsonify({
        'message': f'Product {product_id} updated successfully.',
        'affectedRows': affected
    })


@bp.route('/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    product_id = _parse_product_id(product_id)
    affected = get_store().delete(product_id)
    return jsonify({
        'message': f'Product {product_id} deleted successfully.',
        'affectedRows': affected
    })
