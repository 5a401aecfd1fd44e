import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import ConstraintViolation, NotFound, StoreError
from models import Product, db

logger = logging.getLogger(__name__)

# The sqlite driver raises OverflowError itself for integers wider than 64 bits
DATABASE_ERRORS = (SQLAlchemyError, OverflowError)


def _is_duplicate(error):
    # sqlite reports "UNIQUE constraint failed", postgres "duplicate key value"
    detail = str(error.orig).lower()
    return 'unique' in detail or 'duplicate' in detail


class ProductStore:
    """Persistence for the products table.

    The store is owned by a Flask app: ``init`` binds it and creates the
    table when it is missing, ``close`` releases the session and the
    connection pool. Every operation must run inside that app's context.
    """

    def __init__(self):
        self.app = None

    def init(self, app):
        db.init_app(app)
        with app.app_context():
            db.create_all()
            url = db.engine.url.render_as_string(hide_password=True)
        self.app = app
        logger.info(f"Product store ready on {url}")

    def close(self):
        if self.app is None:
            return
        with self.app.app_context():
            db.session.remove()
            db.engine.dispose()
        logger.debug("Product store closed")
        self.app = None

    def _fail(self, error, message):
        db.session.rollback()
        logger.error(f"{message} {str(error)}")
        raise StoreError(message) from error

    def create(self, name, code, description=None, quantity=0):
        product = Product(name=name, code=code, description=description, quantity=quantity)
        db.session.add(product)
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.debug(f"Insert of product {code} rejected: {e.orig}")
            if _is_duplicate(e):
                raise ConstraintViolation(f"A product with code '{code}' already exists.") from e
            raise ConstraintViolation("The product violates a table constraint.") from e
        except DATABASE_ERRORS as e:
            self._fail(e, "Internal server error while saving the product.")

        logger.debug(f"Created product {product.id} ({code})")
        return product

    def list(self):
        """Return every product ordered by name."""
        try:
            return Product.query.order_by(Product.name.asc()).all()
        except DATABASE_ERRORS as e:
            self._fail(e, "Internal server error while fetching the products.")

    def get(self, product_id):
        try:
            product = db.session.get(Product, product_id)
        except DATABASE_ERRORS as e:
            self._fail(e, "Internal server error while fetching the product.")

        if product is None:
            raise NotFound("Product not found.")
        return product

    def update_quantity(self, product_id, quantity):
        """Overwrite the stock quantity of a product and return the affected row count."""
        try:
            affected = Product.query.filter_by(id=product_id).update({'quantity': quantity})
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.debug(f"Quantity update of product {product_id} rejected: {e.orig}")
            raise ConstraintViolation("The quantity violates a table constraint.") from e
        except DATABASE_ERRORS as e:
            self._fail(e, "Internal server error while updating the product.")

        if affected == 0:
            raise NotFound("Product not found.")
        logger.debug(f"Product {product_id} quantity set to {quantity}")
        return affected

    def delete(self, product_id):
        """Remove a product and return the affected row count."""
        try:
            affected = Product.query.filter_by(id=product_id).delete()
            db.session.commit()
        except DATABASE_ERRORS as e:
            self._fail(e, "Internal server error while deleting the product.")

        if affected == 0:
            raise NotFound("Product not found.")
        logger.debug(f"Deleted product {product_id}")
        return affected
