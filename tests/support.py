"""Request bodies and stubs shared by the facilitator tests."""

TEST_KEY = "0x" + "1" * 64

REQUIREMENTS = {
    "scheme": "exact",
    "network": "base-sepolia",
    "maxAmountRequired": "1500000",
    "resource": "https://api.example.com/premium/data",
    "description": "Premium data",
    "payTo": "0x000000000000000000000000000000000000dEaD",
    "maxTimeoutSeconds": 60,
    "asset": "0x036CbD53842c5426634e7929541eC2318f3dCF7e",
    "extra": {"name": "USDC", "version": "2"},
}

PAYLOAD = {
    "x402Version": 1,
    "scheme": "exact",
    "network": "base-sepolia",
    "payload": {"signature": "0xdeadbeef", "authorization": {"from": "0xabc"}},
}


class StubSigner:
    def __init__(self, network, address="0x00000000000000000000000000000000000000Fe"):
        self.network = network
        self.address = address


class StubBackend:
    def __init__(self, verify_result=None, settle_result=None, error=None):
        self.verify_result = verify_result or {"isValid": True, "payer": "0xabc"}
        self.settle_result = settle_result or {
            "success": True,
            "transaction": "0xfeed",
            "network": "base-sepolia",
            "payer": "0xabc",
        }
        self.error = error
        self.calls = []

    async def verify(self, signer, payload, requirements):
        self.calls.append(("verify", signer, payload, requirements))
        if self.error:
            raise self.error
        return self.verify_result

    async def settle(self, signer, payload, requirements):
        self.calls.append(("settle", signer, payload, requirements))
        if self.error:
            raise self.error
        return self.settle_result
