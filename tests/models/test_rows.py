"""Tests for pharmapack/models/rows.py"""

from decimal import Decimal

import pytest

from pharmapack.models import (
    ContainerRow,
    ContainerShape,
    MedicineRecord,
    PackSizeRow,
    PreparedContainer,
    Segment,
)


class TestMedicineRecord:
    def test_create_with_defaults(self):
        record = MedicineRecord(brand_id=1)
        assert record.container_descriptor is None
        assert record.pack_size_descriptor is None
        assert not record.has_data

    def test_has_data_with_either_field(self):
        assert MedicineRecord(1, "10 gm tube", None).has_data
        assert MedicineRecord(2, None, "(10's pack: ৳ 5.00)").has_data

    def test_is_immutable(self):
        record = MedicineRecord(1, "10 gm tube")
        with pytest.raises(AttributeError):
            record.container_descriptor = None


class TestContainerRow:
    def test_description_only(self):
        row = ContainerRow(1, "Not for sale", None)
        assert row.unit_price is None

    def test_price_only(self):
        row = ContainerRow(1, None, Decimal("8.00"))
        assert row.container_size is None

    def test_both_null_rejected(self):
        with pytest.raises(ValueError):
            ContainerRow(1, None, None)

    def test_as_dict(self):
        row = ContainerRow(3, "100 ml bottle", Decimal("130.00"))
        assert row.as_dict() == {
            "Brand_ID": 3,
            "Container_Size": "100 ml bottle",
            "Unit_Price": "130.00",
        }

    def test_as_dict_null_price(self):
        assert ContainerRow(3, "10 gm tube", None).as_dict()["Unit_Price"] == ""


class TestPackSizeRow:
    def test_both_null_rejected(self):
        with pytest.raises(ValueError):
            PackSizeRow(1, None, None)

    def test_as_dict(self):
        row = PackSizeRow(2, 100, Decimal("100.00"))
        assert row.as_dict() == {"Brand_ID": 2, "Pack_Size": "100", "Pack_Price": "100.00"}

    def test_equality_is_by_value(self):
        assert PackSizeRow(2, 100, Decimal("100.00")) == PackSizeRow(2, 100, Decimal("100"))


class TestIntermediates:
    def test_segment_defaults_to_no_price(self):
        assert Segment("10 gm tube").price is None

    def test_prepared_container_defaults(self):
        prepared = PreparedContainer(shape=ContainerShape.NULL)
        assert prepared.container_size is None
        assert prepared.unit_price is None
        assert prepared.marker_count == 0
        assert prepared.rule is None
