import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Database
from app.main import create_app
from app.services.upload_urls import build_upload_url_issuer

TEST_BUCKET = "video-catalog-test"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        aws_region="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        s3_bucket_name=TEST_BUCKET,
    )


@pytest.fixture
def database():
    db = Database("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def issuer(settings):
    return build_upload_url_issuer(settings)


@pytest.fixture
def app(settings, database, issuer):
    return create_app(settings=settings, database=database, issuer=issuer)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
