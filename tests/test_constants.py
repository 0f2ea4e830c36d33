from dexter_facilitator.constants import (
    EXPLORER_URLS,
    KNOWN_ASSET_LABELS,
    KNOWN_ASSETS,
    SUPPORTED_NETWORKS,
    UnsupportedNetworkError,
)


def test_supported_networks_match_expected():
    assert SUPPORTED_NETWORKS == [
        "base",
        "base-sepolia",
        "avalanche",
        "avalanche-fuji",
        "polygon",
        "polygon-amoy",
    ]


def test_every_network_has_asset_and_explorer():
    for network in SUPPORTED_NETWORKS:
        assert KNOWN_ASSETS[network]["decimals"] == 6
        assert EXPLORER_URLS[network].startswith("https://")


def test_known_asset_labels_are_lowercase_keyed():
    assert KNOWN_ASSET_LABELS["0x036cbd53842c5426634e7929541ec2318f3dcf7e"] == "USDC"


def test_unsupported_network_error_is_value_error():
    assert issubclass(UnsupportedNetworkError, ValueError)
