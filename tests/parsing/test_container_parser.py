"""Tests for pharmapack/parsing/container_parser.py"""

from decimal import Decimal

import pytest

from pharmapack.models import ContainerShape, NormalizationRule, PreparedContainer
from pharmapack.parsing.container_parser import ContainerPreparer, ContainerSegmenter


@pytest.fixture
def preparer():
    return ContainerPreparer()


@pytest.fixture
def segmenter():
    return ContainerSegmenter()


def _parse(preparer, segmenter, text):
    return segmenter.segment(preparer.prepare(text))


def _pairs(result):
    return [(seg.description, seg.price) for seg in result.segments]


class TestPrepare:
    def test_null(self, preparer):
        assert preparer.prepare(None).shape is ContainerShape.NULL
        assert preparer.prepare("   ").shape is ContainerShape.NULL

    def test_flat_price(self, preparer):
        prepared = preparer.prepare("Unit Price: ৳ 8.00,(60's pack: ৳ 480.00),")
        assert prepared.shape is ContainerShape.FLAT_PRICE
        assert prepared.container_size is None
        assert prepared.unit_price == Decimal("8.00")

    def test_malformed(self, preparer):
        prepared = preparer.prepare("10 ml vial: ৳ 50.00,,20 ml vial: ৳ 90.00")
        assert prepared.shape is ContainerShape.MALFORMED
        assert prepared.container_size is None

    def test_single_priced(self, preparer):
        prepared = preparer.prepare("100 ml bottle: ৳ 130.00")
        assert prepared.shape is ContainerShape.SINGLE_PRICED
        assert prepared.marker_count == 1
        assert prepared.rule is None

    def test_normalized_before_classification(self, preparer):
        prepared = preparer.prepare("10 ml vial,(60's pack: ৳ 480.00)")
        assert prepared.shape is ContainerShape.SINGLE_PLAIN
        assert prepared.container_size == "10 ml vial"
        assert prepared.rule is NormalizationRule.PACK_FRAGMENT

    def test_doubled_separator_after_plain_bracket_is_discarded(self, preparer):
        prepared = preparer.prepare("5 ml vial (refill),,10 ml vial")
        assert prepared.shape is ContainerShape.MALFORMED
        assert prepared.container_size is None

    def test_marker_without_anchor_is_unknown(self, preparer):
        prepared = preparer.prepare("10 ml vial: ৳ 50.00 or ৳ 45.00")
        assert prepared.shape is ContainerShape.UNKNOWN

    def test_fixed_point_option(self):
        text = "10 ml vial,5,(60's pack: ৳ 480.00),,20 ml vial"
        assert ContainerPreparer().prepare(text).container_size == "10 ml vial,5,20 ml vial"
        fixed = ContainerPreparer(to_fixed_point=True).prepare(text)
        assert fixed.container_size == "10 ml vial,20 ml vial"
        assert fixed.shape is ContainerShape.MULTI_PLAIN


class TestPricedSegments:
    def test_single_priced(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "100 ml bottle: ৳ 130.00")
        assert _pairs(result) == [("100 ml bottle", Decimal("130.00"))]

    def test_single_priced_keeps_thousands(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "0.2 ml syringe: ৳ 1,450.00")
        assert _pairs(result) == [("0.2 ml syringe", Decimal("1450.00"))]

    def test_multi_priced(self, preparer, segmenter):
        result = _parse(preparer, segmenter,
                        "37.5 ml bottle: ৳ 130.00,50 ml bottle: ৳ 160.00")
        assert _pairs(result) == [
            ("37.5 ml bottle", Decimal("130.00")),
            ("50 ml bottle", Decimal("160.00")),
        ]

    def test_multi_priced_after_fragment_removal(self, preparer, segmenter):
        result = _parse(preparer, segmenter,
                        "5 ml vial: ৳ 60.00,10 ml vial: ৳ 110.00,(10's pack: ৳ 1,100.00)")
        assert _pairs(result) == [
            ("5 ml vial", Decimal("60.00")),
            ("10 ml vial", Decimal("110.00")),
        ]

    def test_segments_beyond_limit_are_counted(self, preparer, segmenter):
        text = ",".join(f"{n} ml vial: ৳ {n}.00" for n in range(1, 9))
        result = _parse(preparer, segmenter, text)
        assert len(result.segments) == 7
        assert result.over_limit == 1
        assert result.segments[-1].description == "7 ml vial"

    def test_empty_description_dropped(self, segmenter):
        prepared = PreparedContainer(shape=ContainerShape.MULTI_PRICED,
                                     container_size=": ৳ 5.00,b: ৳ 6.00",
                                     marker_count=2)
        result = segmenter.segment(prepared)
        assert _pairs(result) == [("b", Decimal("6.00"))]
        assert result.empty_descriptions == 1

    def test_unparseable_price_kept_as_none(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "10 ml vial: ৳ N/A,20 ml vial: ৳ 90.00")
        assert _pairs(result) == [
            ("10 ml vial", None),
            ("20 ml vial", Decimal("90.00")),
        ]
        assert result.unparseable_prices == 1


class TestPlainSegments:
    def test_single_plain(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "75 µg pre-filled syringe")
        assert _pairs(result) == [("75 µg pre-filled syringe", None)]

    def test_multi_plain(self, preparer, segmenter):
        result = _parse(preparer, segmenter,
                        "120 metered doses,120 metered doses (refill)")
        assert _pairs(result) == [
            ("120 metered doses", None),
            ("120 metered doses (refill)", None),
        ]

    @pytest.mark.parametrize("text", ["Not for sale", "Price Unavailable"])
    def test_sentinel_is_a_plain_segment(self, preparer, segmenter, text):
        result = _parse(preparer, segmenter, text)
        assert _pairs(result) == [(text, None)]

    def test_blank_parts_dropped(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "10 gm tube, ,20 gm tube")
        assert _pairs(result) == [("10 gm tube", None), ("20 gm tube", None)]
        assert result.empty_descriptions == 1

    def test_segments_beyond_limit_are_counted(self, preparer, segmenter):
        result = _parse(preparer, segmenter, "5 gm tube,10 gm tube,15 gm tube,20 gm tube")
        assert len(result.segments) == 3
        assert result.over_limit == 1


class TestNothingToSegment:
    @pytest.mark.parametrize("text", [
        None,
        "Unit Price: ৳ 8.00",
        "10 ml vial: ৳ 50.00,,20 ml vial: ৳ 90.00",
        "10 ml vial: ৳ 50.00 or ৳ 45.00",
    ])
    def test_no_segments(self, preparer, segmenter, text):
        assert segmenter.segment(preparer.prepare(text)).segments == []
