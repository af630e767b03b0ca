import base64

import pytest

from otpgen_web import create_app


def b32(seed: str) -> str:
    return base64.b32encode(seed.encode("ascii")).decode("ascii")


# RFC 6238 Appendix B seeds, one per hash size
SEED_SHA1 = b32("12345678901234567890")
SEED_SHA256 = b32("12345678901234567890123456789012")
SEED_SHA512 = b32("1234567890123456789012345678901234567890123456789012345678901234")


@pytest.fixture()
def secret():
    return SEED_SHA1


@pytest.fixture()
def app():
    app = create_app({"TESTING": True})
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()
