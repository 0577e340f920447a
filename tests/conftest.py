import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from spice_shop.db.base import Base
from spice_shop.db.session import build_sessionmaker
from spice_shop.db.storage import MemoryStorage, SqlStorage
from spice_shop.main import create_app
from spice_shop.schemas.product import CatalogItem
from spice_shop.services.cart import CartStore


DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def sql_storage(engine):
    return SqlStorage(build_sessionmaker(engine))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    cart_store = CartStore(storage)
    cart_store.initialize()
    yield cart_store
    cart_store.close()


@pytest.fixture
def chilli():
    return CatalogItem(id=1, name="Lal Mirch Powder", price="₹150", weight="500g")


@pytest.fixture
def haldi():
    return CatalogItem(id=2, name="Haldi Powder", price="₹120", weight="500g")


@pytest.fixture
def lemon():
    return CatalogItem(id=4, name="Black Lemon Powder", price="₹220", weight="500g")


@pytest.fixture
def client(store):
    app = create_app(cart_store=store)
    with TestClient(app) as test_client:
        yield test_client
