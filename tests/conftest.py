pytest_plugins = ["autopromote.testing.conftest"]
