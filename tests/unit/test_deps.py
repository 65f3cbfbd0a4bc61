"""Tests for id parsing shared by the page handlers."""

import pytest

from app.core.exceptions import NotFound
from app.deps import MAX_ID, parse_id


class TestParseId:
    """Tests for parse_id."""

    def test_plain_id(self):
        assert parse_id("42") == 42

    def test_largest_storable_id(self):
        assert parse_id(str(MAX_ID)) == MAX_ID

    @pytest.mark.parametrize("raw", [None, "", "abc", "-1", "4.2", "٣", str(MAX_ID + 1), "9" * 40])
    def test_rejected_ids(self, raw):
        with pytest.raises(NotFound) as exc_info:
            parse_id(raw, "This post doesn't exist")
        assert exc_info.value.message == "This post doesn't exist"
