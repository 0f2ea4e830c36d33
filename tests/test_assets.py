from dexter_facilitator.assets import (
    CanonicalAsset,
    PlainAddress,
    StructuredAsset,
    asset_label,
    decode_asset_field,
    resolve_asset,
)
from dexter_facilitator.schemas import PaymentRequirements


def test_override_wins_over_structured_decimals():
    asset = resolve_asset({"asset": {"address": "A", "decimals": 2}, "extra": {"assetDecimals": 9}})
    assert asset == CanonicalAsset("A", 9)


def test_structured_asset_uses_its_own_decimals():
    assert resolve_asset({"asset": {"address": "A", "decimals": 2}}) == CanonicalAsset("A", 2)


def test_structured_asset_without_numeric_decimals_defaults():
    assert resolve_asset({"asset": {"address": "A", "decimals": "2"}}) == CanonicalAsset("A", 6)


def test_structured_asset_address_is_stringified():
    assert resolve_asset({"asset": {"address": 123}}).address == "123"
    assert resolve_asset({"asset": {"address": None}}).address == "unknown"


def test_plain_string_asset():
    assert resolve_asset({"asset": "0xabc"}) == CanonicalAsset("0xabc", 6)
    assert resolve_asset({"asset": "0xabc", "extra": {"assetDecimals": 18}}) == CanonicalAsset(
        "0xabc", 18
    )


def test_missing_or_blank_asset_is_unknown():
    assert resolve_asset({}) == CanonicalAsset("unknown", 6)
    assert resolve_asset({"asset": "   "}) == CanonicalAsset("unknown", 6)
    assert resolve_asset({"asset": {"decimals": 2}, "extra": {"assetDecimals": 0}}) == CanonicalAsset(
        "unknown", 0
    )


def test_malformed_override_is_ignored():
    assert resolve_asset({"asset": "0xabc", "extra": {"assetDecimals": "9"}}).decimals == 6
    assert resolve_asset({"asset": "0xabc", "extra": {"assetDecimals": -1}}).decimals == 6
    assert resolve_asset({"asset": "0xabc", "extra": {"assetDecimals": True}}).decimals == 6


def test_resolve_asset_reads_models():
    requirements = PaymentRequirements.model_validate(
        {
            "scheme": "exact",
            "network": "base",
            "maxAmountRequired": "1",
            "resource": "https://api.example.com/data",
            "payTo": "0xdef",
            "asset": {"address": "0xabc", "decimals": 18},
        }
    )
    assert resolve_asset(requirements) == CanonicalAsset("0xabc", 18)


def test_decode_asset_field_shapes():
    assert decode_asset_field("0xabc") == PlainAddress("0xabc")
    assert decode_asset_field({"address": "0xabc", "decimals": 6.0}) == StructuredAsset("0xabc", 6)
    assert decode_asset_field({"decimals": 6}) is None
    assert decode_asset_field(None) is None


def test_asset_label():
    assert asset_label("unknown") == "unknown"
    assert asset_label("") == "unknown"
    assert asset_label("0x833589fcd6edb6e08f4c7c32d4f71b54bda02913") == "USDC"
    assert asset_label("SHORT") == "SHORT"
    assert asset_label("0x1234567890abcdef") == "0x12…cdef"
