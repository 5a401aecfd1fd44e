import pytest

from app import create_app


@pytest.fixture
def app(tmp_path):
    """App backed by a throwaway SQLite file."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'inventory.db'}",
    })
    yield app
    app.extensions["product_store"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    """The app's product store, with an application context pushed."""
    with app.app_context():
        yield app.extensions["product_store"]
