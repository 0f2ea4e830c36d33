import copy

import pytest

from support import PAYLOAD, REQUIREMENTS, StubSigner


@pytest.fixture
def requirements():
    return copy.deepcopy(REQUIREMENTS)


@pytest.fixture
def body(requirements):
    return {"paymentPayload": copy.deepcopy(PAYLOAD), "paymentRequirements": requirements}


@pytest.fixture
def stub_signer_factory():
    async def factory(network, secret_key):
        return StubSigner(network)

    return factory
