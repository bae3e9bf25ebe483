"""
Tests for the unit conversion answer handler.
"""

import pytest

from quickanswer.search.handlers.convert import ConvertHandler


class TestConvertMatches:
    """Test the conversion query shapes."""

    @pytest.mark.parametrize("query", [
        "100 km to miles",
        "convert 50 kg to pounds",
        "32 °f to °c",
        "10 meters in feet",
        "5 gb -> mb",
        "5.5 lbs = ? kg",
        "100 KM TO MILES",
    ])
    def test_matches(self, query):
        assert ConvertHandler().can_handle(query) is True

    @pytest.mark.parametrize("query", [
        "hello world",
        "km to miles",
        "2 + 2",
        "convert case hello",
    ])
    def test_no_match(self, query):
        assert ConvertHandler().can_handle(query) is False

    def test_name_and_patterns(self):
        h = ConvertHandler()
        assert h.name == "convert"
        assert len(h.patterns) == 2


class TestConvertResults:
    """Test answers for valid conversions."""

    @pytest.mark.asyncio
    async def test_kilometers_to_miles(self):
        answer = await ConvertHandler().handle("100 km to miles")
        assert answer.kind == "convert"
        assert answer.title == "Unit Conversion"
        assert answer.data["from_unit"] == "kilometers"
        assert answer.data["to_unit"] == "miles"
        assert answer.data["category"] == "length"
        assert answer.data["result"] == pytest.approx(62.1371192)

    @pytest.mark.asyncio
    async def test_gigabytes_content(self):
        answer = await ConvertHandler().handle("1 gb to mb")
        assert answer.data["result"] == 1024
        assert "1 gigabytes = <strong>1024 megabytes</strong>" in answer.content

    @pytest.mark.asyncio
    async def test_temperature(self):
        answer = await ConvertHandler().handle("32 f to c")
        assert answer.data["result"] == 0
        assert answer.data["category"] == "temperature"

    @pytest.mark.asyncio
    async def test_degree_sign_units(self):
        answer = await ConvertHandler().handle("100 °C to °F")
        assert answer.data["result"] == 212

    @pytest.mark.asyncio
    async def test_question_mark_form(self):
        answer = await ConvertHandler().handle("1000 m = ? km")
        assert answer.data["result"] == 1

    @pytest.mark.asyncio
    async def test_arrow_form(self):
        answer = await ConvertHandler().handle("2 weeks -> days")
        assert answer.data["result"] == 14

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self):
        assert await ConvertHandler().handle("hello world") is None


class TestConvertErrors:
    """Test user-visible messages for impossible conversions."""

    @pytest.mark.asyncio
    async def test_cross_category(self):
        answer = await ConvertHandler().handle("5 kg to meters")
        assert answer is not None
        assert "Cannot convert kilograms to meters" in answer.content
        assert answer.data == {}

    @pytest.mark.asyncio
    async def test_misspelled_unit_gets_suggestion(self):
        answer = await ConvertHandler().handle("5 kilometrs to miles")
        assert "did you mean kilometrs → kilometers" in answer.content

    @pytest.mark.asyncio
    async def test_unknown_units_without_suggestion(self):
        answer = await ConvertHandler().handle("5 zzzz to qqqq")
        assert "Cannot convert zzzz to qqqq" in answer.content
        assert "did you mean" not in answer.content
