import pytest

from dddkit.config import DddKitConfig, DeliveryLogConfig


def test_defaults():
    config = DddKitConfig()
    assert config.delivery_log.backend == "memory"
    assert config.publisher.log_dispatch is False
    assert config.queue.max_pending == 10000


def test_from_env(monkeypatch):
    monkeypatch.setenv("DDDKIT_LOG_DISPATCH", "yes")
    monkeypatch.setenv("DDDKIT_DELIVERY_LOG_BACKEND", "sqlalchemy")
    monkeypatch.setenv("DDDKIT_DELIVERY_LOG_DSN", "sqlite+aiosqlite:///tmp.db")
    monkeypatch.setenv("DDDKIT_DELIVERY_LOG_MAXLEN", "5")
    monkeypatch.setenv("DDDKIT_QUEUE_MAX_PENDING", "7")

    config = DddKitConfig.from_env()

    assert config.publisher.log_dispatch is True
    assert config.delivery_log.backend == "sqlalchemy"
    assert config.delivery_log.resolve_dsn() == "sqlite+aiosqlite:///tmp.db"
    assert config.delivery_log.maxlen == 5
    assert config.queue.max_pending == 7


def test_from_env_rejects_unknown_backend(monkeypatch):
    monkeypatch.setenv("DDDKIT_DELIVERY_LOG_BACKEND", "redis")
    with pytest.raises(ValueError):
        DddKitConfig.from_env()


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_from_env_rejects_bad_sizes(monkeypatch, raw):
    monkeypatch.setenv("DDDKIT_QUEUE_MAX_PENDING", raw)
    with pytest.raises(ValueError):
        DddKitConfig.from_env()


def test_resolve_dsn_fallback():
    assert DeliveryLogConfig(backend="sqlalchemy").resolve_dsn() == "sqlite+aiosqlite:///./dddkit.db"
    assert DeliveryLogConfig(backend="memory").resolve_dsn() is None
