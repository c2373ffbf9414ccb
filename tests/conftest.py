from dddkit.testing.fixtures import memory_app, publisher  # noqa: F401
