import pytest

from core.statuses import (
    COMMON_STATUS_COMBINATIONS,
    INITIAL_STATUS,
    UPDATABLE_BUSINESS_STATUSES,
    BusinessStatus,
    PhysicalStatus,
    StatusPair,
    get_status_display_info,
)


def test_enum_values_match_wire_strings():
    assert [s.value for s in PhysicalStatus] == ["depot", "in_repair", "in_transit"]
    assert [s.value for s in BusinessStatus] == ["available", "reserved", "sold", "cancelled"]
    assert PhysicalStatus.DEPOT == "depot"


def test_cancelled_is_not_an_updatable_business_status():
    assert UPDATABLE_BUSINESS_STATUSES == ["available", "reserved", "sold"]


def test_initial_status_is_available_at_depot():
    assert INITIAL_STATUS == StatusPair.from_values("depot", "available")


def test_resolve_keeps_omitted_fields():
    current = StatusPair.from_values("in_repair", "available")
    assert current.resolve(business_status="reserved") == StatusPair.from_values("in_repair", "reserved")
    assert current.resolve(physical_status="depot") == StatusPair.from_values("depot", "available")
    assert current.resolve() == current


def test_from_values_rejects_unknown_status():
    with pytest.raises(ValueError):
        StatusPair.from_values("hangar", "available")


@pytest.mark.parametrize(
    "physical,business,legacy,label",
    [
        ("depot", "available", "Available", "In Stock"),
        ("depot", "reserved", "Reserved", "Reserved - In Stock"),
        ("in_transit", "sold", "Sold", "Sold - In Transit"),
        ("in_repair", "available", "Under Repair", "In Repair - Available"),
    ],
)
def test_display_info_for_common_combinations(physical, business, legacy, label):
    info = get_status_display_info(physical, business)
    assert info.legacy_status == legacy
    assert info.display_label == label


def test_display_info_falls_back_for_uncommon_combinations():
    info = get_status_display_info("in_transit", "reserved")
    assert info.to_dict() == {
        "physical_status": "in_transit",
        "business_status": "reserved",
        "legacy_status": None,
        "display_label": "reserved - in_transit",
        "color_class": "bg-gray-100 text-gray-800 border-gray-200",
    }


def test_common_combinations_are_unique():
    keys = [(c.physical_status, c.business_status) for c in COMMON_STATUS_COMBINATIONS]
    assert len(keys) == len(set(keys))
