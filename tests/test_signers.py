import asyncio

import pytest

from dexter_facilitator.constants import UnsupportedNetworkError
from dexter_facilitator.signers import (
    ConfigurationError,
    EvmSigner,
    NetworkRegistry,
    create_signer,
    is_wallet_capable,
)

TEST_KEY = "0x" + "1" * 64


class StubSigner:
    def __init__(self, network):
        self.network = network
        self.address = "0xfee"


class CountingFactory:
    def __init__(self, fail_first=False):
        self.calls = []
        self.fail_first = fail_first

    async def __call__(self, network, secret_key):
        self.calls.append((network, secret_key))
        await asyncio.sleep(0)
        if self.fail_first and len(self.calls) == 1:
            raise RuntimeError("rpc unavailable")
        return StubSigner(network)


def test_unknown_configured_network_is_fatal():
    with pytest.raises(ConfigurationError, match="solana"):
        NetworkRegistry(["base", "solana"], TEST_KEY)


def test_duplicate_networks_are_collapsed():
    registry = NetworkRegistry(["base", "base-sepolia", "base"], TEST_KEY)
    assert registry.networks == ["base", "base-sepolia"]


def test_resolve_network_rejects_known_but_disabled_network():
    registry = NetworkRegistry(["base-sepolia"], TEST_KEY)
    assert registry.resolve_network("base-sepolia") == "base-sepolia"
    with pytest.raises(UnsupportedNetworkError, match="not enabled"):
        registry.resolve_network("base")
    with pytest.raises(UnsupportedNetworkError):
        registry.resolve_network("made-up")


@pytest.mark.asyncio
async def test_concurrent_first_use_creates_one_signer():
    factory = CountingFactory()
    registry = NetworkRegistry(["base"], TEST_KEY, signer_factory=factory)

    first, second = await asyncio.gather(registry.get_signer("base"), registry.get_signer("base"))

    assert first is second
    assert factory.calls == [("base", TEST_KEY)]
    assert await registry.get_signer("base") is first
    assert len(factory.calls) == 1


@pytest.mark.asyncio
async def test_signers_are_cached_per_network():
    factory = CountingFactory()
    registry = NetworkRegistry(["base", "polygon"], TEST_KEY, signer_factory=factory)

    base = await registry.get_signer("base")
    polygon = await registry.get_signer("polygon")

    assert base is not polygon
    assert [call[0] for call in factory.calls] == ["base", "polygon"]


@pytest.mark.asyncio
async def test_failed_creation_is_retried_on_next_request():
    factory = CountingFactory(fail_first=True)
    registry = NetworkRegistry(["base"], TEST_KEY, signer_factory=factory)

    with pytest.raises(RuntimeError, match="rpc unavailable"):
        await registry.get_signer("base")
    signer = await registry.get_signer("base")

    assert signer.network == "base"
    assert len(factory.calls) == 2


@pytest.mark.asyncio
async def test_create_signer_builds_evm_wallet():
    signer = await create_signer("base-sepolia", TEST_KEY)
    assert isinstance(signer, EvmSigner)
    assert signer.network == "base-sepolia"
    assert signer.address.startswith("0x")
    assert len(signer.address) == 42
    assert is_wallet_capable(signer)


def test_is_wallet_capable():
    assert is_wallet_capable(StubSigner("base"))
    assert not is_wallet_capable(object())

    class Blank:
        address = ""

    assert not is_wallet_capable(Blank())
