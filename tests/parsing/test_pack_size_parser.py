"""Tests for pharmapack/parsing/pack_size_parser.py"""

from decimal import Decimal

import pytest

from pharmapack.parsing.pack_size_parser import PackSizeParser


@pytest.fixture
def parser():
    return PackSizeParser()


class TestSplitBlocks:
    def test_single_block(self, parser):
        assert parser.split_blocks("(100's pack: ৳ 100.00)") == ["100's pack: ৳ 100.00"]

    def test_two_blocks_with_trailing_separator(self, parser):
        assert parser.split_blocks("(10's pack: ৳ 50.00),(20's pack: ৳ 95.00),") == [
            "10's pack: ৳ 50.00",
            "20's pack: ৳ 95.00",
        ]


class TestParseBlock:
    def test_count_and_price(self, parser):
        assert parser.parse_block("100's pack: ৳ 100.00") == (100, Decimal("100.00"))

    def test_price_with_thousands(self, parser):
        assert parser.parse_block("10's pack: ৳ 1,300.00") == (10, Decimal("1300.00"))

    def test_missing_price(self, parser):
        assert parser.parse_block("30's pack") == (30, None)

    def test_missing_count(self, parser):
        assert parser.parse_block("pack: ৳ 5.00") == (None, Decimal("5.00"))


class TestParse:
    def test_one_block(self, parser):
        result = parser.parse("(100's pack: ৳ 100.00)")
        assert result.blocks == [(100, Decimal("100.00"))]

    def test_two_blocks(self, parser):
        result = parser.parse("(100's pack: ৳ 100.00),(150's pack: ৳ 150.00)")
        assert result.blocks == [(100, Decimal("100.00")), (150, Decimal("150.00"))]

    def test_three_blocks(self, parser):
        result = parser.parse("(10's pack: ৳ 10.00),(20's pack: ৳ 19.00),(30's pack: ৳ 27.00)")
        assert [count for count, _ in result.blocks] == [10, 20, 30]
        assert result.over_limit == 0

    def test_blocks_beyond_limit_are_counted(self, parser):
        text = ",".join(f"({n}'s pack: ৳ {n}.00)" for n in (10, 20, 30, 40))
        result = parser.parse(text)
        assert len(result.blocks) == 3
        assert result.over_limit == 1

    def test_over_limit_matches_block_count(self, parser):
        text = ",".join(f"({n}'s pack: ৳ {n}.00)" for n in range(1, 7))
        assert parser.classifier.count_blocks(text) == 6
        assert parser.parse(text).over_limit == 3

    def test_empty_block_skipped(self, parser):
        result = parser.parse("(),(20's pack: ৳ 95.00)")
        assert result.blocks == [(20, Decimal("95.00"))]
        assert result.empty_blocks == 1
        assert result.unparseable_counts == 0
        assert result.unparseable_prices == 0

    def test_partial_blocks_counted(self, parser):
        result = parser.parse("(pack: ৳ 5.00),(30's pack)")
        assert result.blocks == [(None, Decimal("5.00")), (30, None)]
        assert result.unparseable_counts == 1
        assert result.unparseable_prices == 1

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_descriptor(self, parser, text):
        result = parser.parse(text)
        assert result.blocks == []
        assert result.over_limit == 0


class TestCounts:
    def test_grouped_count(self, parser):
        result = parser.parse("(1,000's pack: ৳ 1,200.00)")
        assert result.blocks == [(1000, Decimal("1200.00"))]
        assert result.unparseable_counts == 0

    def test_garbled_count_is_null_and_counted(self, parser):
        result = parser.parse("(10x's pack: ৳ 5.00)")
        assert result.blocks == [(None, Decimal("5.00"))]
        assert result.unparseable_counts == 1

    def test_oversized_price_is_null_and_counted(self, parser):
        result = parser.parse("(10's pack: ৳ 1E+30)")
        assert result.blocks == [(10, None)]
        assert result.unparseable_prices == 1
