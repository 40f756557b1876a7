import datetime
import logging

import pytest

# smallest size OpenSSL will load into a TLS context at its default security level
TEST_BITS = 2048


def pytest_addoption(parser):
    parser.addoption(
        "--longrun",
        action="store_true",
        dest="longrun",
        default=False,
        help="enable longrundecorated tests",
    )


@pytest.fixture(scope="session")
def small_key():
    from gencert.keygen import generate_key_pair

    return generate_key_pair(TEST_BITS)


@pytest.fixture(scope="session")
def localhost_cert():
    from gencert import generate

    return generate("localhost", datetime.timedelta(hours=1), bits=TEST_BITS)


@pytest.fixture
def restore_logging():
    handlers = list(logging.root.handlers)
    yield
    logging.root.handlers = handlers
