import pytest
from fastapi.testclient import TestClient

from payoff_lab.main import create_app
from payoff_lab.services.book import PortfolioBook


@pytest.fixture()
def client(tmp_path):
    db_path = tmp_path / "test.db"
    app = create_app(database_url=f"sqlite:///{db_path}")
    return TestClient(app)


@pytest.fixture()
def seed_book():
    return PortfolioBook.seeded()
