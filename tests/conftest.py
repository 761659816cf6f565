import os

# In-memory SQLite for every test; must be set before database.db is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")

from datetime import datetime

import pytest

from database.db import Base, SessionLocal, engine
from database.models import candidate_model  # noqa: F401
from services.pipeline_config import PipelineConfig
from services.schemas import AuthorRef, NormalizedPublication, PublicationSource

CURRENT_YEAR = datetime.now().year


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def config():
    return PipelineConfig(inter_university_delay=0)


def _make_pub(
    title="A Paper",
    authors=("Jane Doe",),
    year=CURRENT_YEAR,
    citations=10,
    doi=None,
    venue="Unknown Venue",
    abstract="",
    institutions=("Stanford University",),
    source=PublicationSource.OPENALEX,
):
    return NormalizedPublication(
        source_id=f"id-{title}",
        title=title,
        authors=[AuthorRef(name=a, institutions=list(institutions)) for a in authors],
        year=year,
        citations=citations,
        venue=venue,
        doi=doi,
        abstract=abstract,
        source=source,
    )


@pytest.fixture
def make_pub():
    return _make_pub

