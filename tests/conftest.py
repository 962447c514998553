import pytest


SWEEP_ORDERS = ["forward", "reverse", "shuffled"]


def pytest_addoption(parser):
    parser.addoption('--sweep_order', choices=SWEEP_ORDERS, default=SWEEP_ORDERS, nargs='+', help="Order in which the solver visits the blocks")


def pytest_generate_tests(metafunc):
    if "sweep_order" in metafunc.fixturenames:
        metafunc.parametrize("sweep_order", metafunc.config.getoption("sweep_order"))


def pytest_configure(config):
    config.addinivalue_line("markers", "only_forward_order: the test checks sweep counts, which depend on the visiting order")


# Sweep counts are only meaningful for a known visiting order
def pytest_collection_modifyitems(config, items):
    skip_if_not_forward = pytest.mark.skip(reason="sweep counts are checked only in forward order")
    for item in items:
        if "only_forward_order" not in item.keywords:
            continue

        callspec = getattr(item, "callspec", None)
        if callspec is not None and callspec.params.get("sweep_order", "forward") != "forward":
            item.add_marker(skip_if_not_forward)
