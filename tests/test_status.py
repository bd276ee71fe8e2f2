import pytest

from asset_monitor.errors import AssetNotFound, FetchError, ParseError
from asset_monitor.models import NetworkStatus, StatusSnapshot

from conftest import asset_document, network, network_entry, snapshot


def test_parses_networks_in_source_order():
    document = asset_document(
        network_entry("BSC"),
        network_entry("AVAX-C", withdraw=False, withdraw_desc="maintenance"),
        network_entry("AVAX-X"),
    )

    result = StatusSnapshot.from_asset_detail(document, "AVAX")

    assert result.network_names == ["BSC", "AVAX-C", "AVAX-X"]
    avax_c = result.get("AVAX-C")
    assert avax_c.withdraw_enabled is False
    assert avax_c.withdraw_reason == "maintenance"
    assert avax_c.deposit_enabled is True


def test_missing_coin_is_asset_not_found():
    document = asset_document(network_entry(), coin="ETH")

    with pytest.raises(AssetNotFound):
        StatusSnapshot.from_asset_detail(document, "AVAX")


def test_document_must_be_a_list():
    with pytest.raises(ParseError):
        StatusSnapshot.from_asset_detail({"code": -1022, "msg": "Signature invalid"}, "AVAX")


@pytest.mark.parametrize("network_list", [None, "AVAX-C", {"network": "AVAX-C"}])
def test_network_list_missing_or_malformed(network_list):
    document = [{"coin": "AVAX", "networkList": network_list}]

    with pytest.raises(ParseError):
        StatusSnapshot.from_asset_detail(document, "AVAX")


def test_one_bad_entry_fails_the_whole_snapshot():
    bad = network_entry("AVAX-X")
    bad["withdrawEnable"] = "true"
    document = asset_document(network_entry("AVAX-C"), bad)

    with pytest.raises(ParseError, match="withdrawEnable"):
        StatusSnapshot.from_asset_detail(document, "AVAX")


def test_entry_without_name_fails():
    entry = network_entry()
    del entry["network"]

    with pytest.raises(ParseError):
        StatusSnapshot.from_asset_detail(asset_document(entry), "AVAX")


def test_missing_reasons_default_to_empty():
    entry = network_entry()
    del entry["depositDesc"]
    entry["withdrawDesc"] = None

    result = StatusSnapshot.from_asset_detail(asset_document(entry), "AVAX")

    assert result.get("AVAX-C").deposit_reason == ""
    assert result.get("AVAX-C").withdraw_reason == ""


def test_duplicate_network_names_rejected():
    document = asset_document(network_entry("AVAX-C"), network_entry("AVAX-C"))

    with pytest.raises(ParseError, match="Duplicate"):
        StatusSnapshot.from_asset_detail(document, "AVAX")


def test_parse_errors_are_fetch_errors():
    assert issubclass(ParseError, FetchError)
    assert issubclass(AssetNotFound, FetchError)


def test_equality_is_structural_and_order_sensitive():
    a = network("AVAX-C")
    b = network("BSC")

    assert snapshot(a, b) == snapshot(network("AVAX-C"), network("BSC"))
    assert snapshot(a, b) != snapshot(b, a)
    assert snapshot(a) != snapshot(network("AVAX-C", deposit_reason="x"))


def test_snapshot_is_immutable():
    s = snapshot(network())

    with pytest.raises(AttributeError):
        s.networks = ()
    with pytest.raises(AttributeError):
        s.networks[0].deposit_enabled = False


def test_describe_network_block():
    status = NetworkStatus("AVAX-C", False, "wallet upgrade", True, "")

    assert status.describe() == (
        "Network: AVAX-C\n"
        "Deposit suspended: wallet upgrade\n"
        "Withdraw available"
    )
