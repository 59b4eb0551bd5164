import logging

import pytest

from common.factories import make_settings

# 激活自定义插件
pytest_plugins = [
    "common.plugins.layers_plugin",
    "common.plugins.lookup_plugin"
]


def pytest_addoption(parser):
    parser.addoption("--env", action="store", default="dev", help="运行环境")


@pytest.fixture(scope="session")
def env(pytestconfig):
    return pytestconfig.getoption("--env")


@pytest.fixture(scope="function")
def settings(env):
    return make_settings(environment=env)


@pytest.fixture(scope="function")
def free_shipping_env(monkeypatch):
    monkeypatch.setenv("SHOPCALC_FREE_SHIPPING_THRESHOLD", "50")
    yield
    monkeypatch.delenv("SHOPCALC_FREE_SHIPPING_THRESHOLD", raising=False)


@pytest.fixture(scope="function")
def log_capture(caplog):
    logger = logging.getLogger("shopcalc.service")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    return caplog


def pytest_generate_tests(metafunc):
    if "item_count" in metafunc.fixturenames:
        metafunc.parametrize("item_count", [0, 1, 3], ids=["empty", "single", "several"])


@pytest.fixture(scope="function")
def config_dir(tmp_path):
    d = tmp_path / "configs"
    d.mkdir()
    (d / "common.yaml").write_text(
        "shipping:\n"
        "  flat_fee: \"4.00\"\n"
        "  free_threshold: \"80.00\"\n",
        encoding="utf-8",
    )
    yield d
