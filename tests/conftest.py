from datetime import date, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import freshness_checker.models  # noqa: F401
from freshness_checker.database import Base, get_db
from freshness_checker.main import app
from freshness_checker.schemas.analysis import AnalysisResult, SpoilageEstimate, StorageAdvice
from freshness_checker.services.freshness_ai import get_freshness_ai
from freshness_checker.services.spoiled_images import get_spoiled_image_generator
from freshness_checker.utils.http import get_http_client


class FakeAI:
    """Stands in for FreshnessAI; records calls and returns canned results."""

    def __init__(self):
        self.analysis = AnalysisResult(
            food_name="Strawberries",
            is_spoiled="Fresh",
            explanation="Bright red, firm, no visible mold.",
            sensory_checks="",
        )
        self.estimate = SpoilageEstimate(
            start_date=date.today() + timedelta(days=1),
            end_date=date.today() + timedelta(days=2),
        )
        self.advice = StorageAdvice(
            is_optimal=False,
            optimal_method="Refrigerate unwashed in a paper-towel lined container.",
            shelf_life_extension="2-4 extra days",
        )
        self.error: Exception | None = None
        self.calls: list[tuple] = []

    async def analyze_image(self, image_base64, media_type="image/jpeg"):
        self.calls.append(("analyze_image", image_base64, media_type))
        if self.error:
            raise self.error
        return self.analysis

    async def estimate_spoilage(self, food_name, purchase_date):
        self.calls.append(("estimate_spoilage", food_name, purchase_date))
        if self.error:
            raise self.error
        return self.estimate

    async def storage_advice(self, food_name, storage_method):
        self.calls.append(("storage_advice", food_name, storage_method))
        if self.error:
            raise self.error
        return self.advice


class FakeImages:
    def __init__(self):
        self.images = ["data:image/jpeg;base64,AAAA", "data:image/jpeg;base64,BBBB"]
        self.error: Exception | None = None
        self.requested: list[str] = []

    async def generate(self, food_name):
        self.requested.append(food_name)
        if self.error:
            raise self.error
        return self.images


SAMPLE_RECALL = {
    "product_description": "Fresh Strawberries, 1 lb clamshell",
    "reason_for_recall": "Potential hepatitis A contamination",
    "recall_initiation_date": "20250314",
    "recalling_firm": "Berry Farms LLC",
    "city": "Salinas",
    "state": "CA",
    "country": "United States",
    "recall_number": "F-1234-2025",
    "status": "Ongoing",
}


def fda_handler(results=None, status_code=200):
    """Build a MockTransport handler that answers like openFDA and records requests."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": {"code": "NOT_FOUND"}})
        return httpx.Response(200, json={"meta": {}, "results": results if results is not None else [SAMPLE_RECALL]})

    handler.seen = seen
    return handler


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def fake_images():
    return FakeImages()


@pytest.fixture
def fda():
    return fda_handler()


@pytest.fixture
def client(db_session, fake_ai, fake_images, fda):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fda))

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_freshness_ai] = lambda: fake_ai
    app.dependency_overrides[get_spoiled_image_generator] = lambda: fake_images
    app.dependency_overrides[get_http_client] = lambda: http_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
