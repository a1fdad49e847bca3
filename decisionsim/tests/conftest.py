from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from decisionsim.app import create_app


@pytest.fixture()
def app(tmp_path) -> Flask:
    return create_app(
        {
            "TESTING": True,
            "DATABASE_PATH": str(tmp_path / "test.db"),
            "RANDOM_SEED": 7,
        }
    )


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
