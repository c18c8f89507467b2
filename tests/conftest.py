import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from sample_models import Base
from tabular_records.core.config import settings


@pytest.fixture()
def engine():
    eng = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def session(engine):
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    sess = Session()
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture(autouse=True)
def strict_shape_checks():
    prev = settings.strict_shape_checks_raw
    settings.strict_shape_checks_raw = True
    try:
        yield
    finally:
        settings.strict_shape_checks_raw = prev
