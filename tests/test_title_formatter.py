"""Tests for Brit title formatting."""

from catalog_scraper.scrapers.utils.title_formatter import TitleFormatter
from catalog_scraper.schemas.product import ProductRecord
from catalog_scraper.services.catalog_pipeline import apply_title_fix


class TestTitleFormatter:
    """Tests for TitleFormatter.format."""

    def test_series_is_quoted_and_weight_bracketed(self):
        assert (
            TitleFormatter.format("Brit Premium By Nature Adult Large 15kg", "brit")
            == "Brit 'Premium By Nature' - Adult Large (15kg)"
        )

    def test_too_few_tokens_returns_input(self):
        assert TitleFormatter.format("Brit X", "brit") == "Brit X"
        assert TitleFormatter.format("Brit Care Adult", "brit") == "Brit Care Adult"

    def test_other_brand_returns_input(self):
        title = "Royal Canin Maxi Adult 15kg"
        assert TitleFormatter.format(title, "brit") == title

    def test_guard_is_case_insensitive(self):
        assert (
            TitleFormatter.format("BRIT Care Lamb Adult Medium 3kg", "Brit")
            == "BRIT 'Care Lamb' - Adult Medium (3kg)"
        )

    def test_four_tokens_give_empty_series(self):
        assert TitleFormatter.format("Brit Adult Large 15kg", "brit") == "Brit '' - Adult Large (15kg)"

    def test_extra_whitespace_is_ignored(self):
        assert (
            TitleFormatter.format("Brit  Fresh   Beef  Adult Small 2,5kg ", "brit")
            == "Brit 'Fresh Beef' - Adult Small (2,5kg)"
        )

    def test_empty_title(self):
        assert TitleFormatter.format("", "brit") == ""


class TestApplyTitleFix:
    """Tests for in-place title fixing of records."""

    def test_updates_matching_record(self):
        record = ProductRecord(url="https://zooart.com.pl/p.html", title="Brit Premium Adult Large 15kg")
        assert apply_title_fix(record, "brit") is True
        assert record.title == "Brit 'Premium' - Adult Large (15kg)"

    def test_leaves_other_fields_alone(self):
        record = ProductRecord(
            url="https://zooart.com.pl/p.html",
            title="Josera Adult 15kg",
            brand="Josera",
        )
        before = record.model_dump()
        assert apply_title_fix(record, "brit") is False
        assert record.model_dump() == before
