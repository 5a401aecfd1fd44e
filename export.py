import io
import logging

import pandas as pd

from errors import ValidationError

logger = logging.getLogger(__name__)

COLUMNS = ['id', 'name', 'code', 'description', 'quantity']

EXPORT_FORMATS = {
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'csv': 'text/csv; charset=utf-8',
}


def products_to_frame(products):
    """Build a DataFrame with one row per product, keeping the column order even when empty."""
    return pd.DataFrame([product.to_dict() for product in products], columns=COLUMNS)


def export_products(products, fmt='xlsx'):
    """Render the inventory as a downloadable file.

    Returns a ``(payload, mimetype, filename)`` tuple. Raises ValidationError
    for formats other than ``xlsx`` and ``csv``.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}.")

    df = products_to_frame(products)
    if fmt == 'csv':
        payload = df.to_csv(index=False).encode('utf-8')
    else:
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Inventory')
        payload = output.getvalue()

    logger.debug(f"Exported {len(df)} products as {fmt}")
    return payload, EXPORT_FORMATS[fmt], f'inventory.{fmt}'
