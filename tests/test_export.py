import io

import pandas as pd
import pytest

from errors import ValidationError
from export import COLUMNS, export_products, products_to_frame
from models import Product


def seed(client):
    client.post("/api/products", json={"name": "Widget", "code": "W1", "quantity": 5})
    client.post("/api/products", json={"name": "Anvil", "code": "A1", "description": "Heavy", "quantity": 2})


def test_frame_keeps_columns_when_empty():
    df = products_to_frame([])
    assert list(df.columns) == COLUMNS
    assert df.empty


def test_frame_rows_follow_input_order():
    products = [
        Product(id=2, name="Anvil", code="A1", description=None, quantity=2),
        Product(id=1, name="Widget", code="W1", description="Blue", quantity=5),
    ]
    df = products_to_frame(products)
    assert df["code"].tolist() == ["A1", "W1"]
    assert df.loc[1, "description"] == "Blue"


def test_unknown_format_is_rejected():
    with pytest.raises(ValidationError):
        export_products([], "pdf")


def test_export_csv(client):
    seed(client)

    response = client.get("/api/products/export?format=csv")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.headers["Content-Disposition"] == "attachment; filename=inventory.csv"

    lines = response.get_data(as_text=True).splitlines()
    assert lines[0] == "id,name,code,description,quantity"
    assert lines[1] == "2,Anvil,A1,Heavy,2"
    assert lines[2] == "1,Widget,W1,,5"


def test_export_xlsx_is_default(client):
    seed(client)

    response = client.get("/api/products/export")
    assert response.status_code == 200
    assert response.headers["Content-Disposition"] == "attachment; filename=inventory.xlsx"

    df = pd.read_excel(io.BytesIO(response.data), sheet_name="Inventory")
    assert list(df.columns) == COLUMNS
    assert df["name"].tolist() == ["Anvil", "Widget"]
    assert df["quantity"].tolist() == [2, 5]


def test_export_bad_format_returns_400(client):
    response = client.get("/api/products/export?format=pdf")
    assert response.status_code == 400
    assert "pdf" in response.get_json()["error"]
