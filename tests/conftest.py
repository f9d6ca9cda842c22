import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from thumbnail_api.api import app, get_db, get_owner_id, get_generator, get_publisher, get_strict_delete
from thumbnail_api.database import Base
from thumbnail_api.models import Thumbnail


@pytest.fixture()
def owner_id():
    return "user-1"


@pytest.fixture()
def other_owner_id():
    return "user-2"


@pytest.fixture()
def png_bytes():
    return b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture()
def image_url():
    return "https://res.cloudinary.com/demo/image/upload/thumbnail.png"


@pytest.fixture()
def sample_request():
    return {
        "title": "My Video",
        "prompt": "",
        "style": "Minimalist",
        "aspect_ratio": "16:9",
        "color_scheme": None,
        "text_overlay": True,
    }


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture()
def make_thumbnail(db_session, owner_id, image_url):
    def _make(**kwargs):
        values = {
            "user_id": owner_id,
            "title": "Existing",
            "style": "Minimalist",
            "aspect_ratio": "16:9",
            "is_generating": False,
            "image_url": image_url,
        }
        values.update(kwargs)
        thumbnail = Thumbnail(**values)
        db_session.add(thumbnail)
        db_session.commit()
        db_session.refresh(thumbnail)
        return thumbnail

    return _make


@pytest.fixture()
def mock_generator(png_bytes):
    generator = MagicMock()
    generator.generate.return_value = png_bytes
    return generator


@pytest.fixture()
def mock_publisher(image_url):
    publisher = MagicMock()
    publisher.publish.return_value = image_url
    return publisher


@pytest.fixture()
def client(db_session, mock_generator, mock_publisher, owner_id):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_owner_id] = lambda: owner_id
    app.dependency_overrides[get_generator] = lambda: mock_generator
    app.dependency_overrides[get_publisher] = lambda: mock_publisher
    app.dependency_overrides[get_strict_delete] = lambda: False

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
