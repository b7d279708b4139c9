import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.routers.tokens import get_token_store
from src.config import settings
from src.services.registry_store import JsonFileTokenStore


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    import logging
    import structlog

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(),
    )

    root_logger = logging.getLogger()
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    path = tmp_path / "data" / "tokens.json"
    monkeypatch.setattr(settings, "DATA_FILE", str(path))
    return path


@pytest.fixture
def token_store(data_file):
    store = JsonFileTokenStore(str(data_file))
    store.initialize()
    return store


@pytest.fixture
def token_fields():
    return {
        "owner": "A",
        "tokenName": "AT",
        "balance": 10,
        "fundingSource": "F",
        "fee": 1,
        "liquidity": 100,
        "supplyPercentAdded": 1,
    }


@pytest.fixture
def client(token_store):
    app.dependency_overrides[get_token_store] = lambda: token_store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_token_store, None)
