import pytest

def pytest_addoption(parser):
    parser.addoption("--quick", action="store_true",
                     default=False, help="skip slow tests")
    parser.addoption("--slow", action="store_true",
                     default=False, help="only run slow tests")
    parser.addoption("--seeds", type=int, default=500,
                     help="number of random document pairs "
                          "in the slow round trip tests")


def pytest_report_header(config):
    return "jsondelta random round trip seeds: %d" % config.getoption("--seeds")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--slow"):
        return
    # Only tests requesting the slow fixture are run
    skip_quick = pytest.mark.skip(reason="not a slow round trip test")
    for item in items:
        if 'slow' not in item.fixturenames:
            item.add_marker(skip_quick)
