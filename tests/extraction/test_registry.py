"""Tests for the extractor registry in addbook/extraction/__init__.py"""

import pytest

from addbook.extraction import (
    SITE_EXTRACTORS,
    AmazonExtractor,
    FidiboExtractor,
    GoodreadsExtractor,
    TaaghcheExtractor,
    get_extractor_for_site,
    get_extractor_for_url,
    get_supported_sites,
)


class TestRegistry:
    def test_every_site_registered(self):
        assert set(get_supported_sites()) == {"amazon", "goodreads", "taaghche", "fidibo"}

    def test_site_ids_match_extractors(self):
        for site, extractor_class in SITE_EXTRACTORS.items():
            assert extractor_class.SITE == site

    @pytest.mark.parametrize("url, expected", [
        ("https://www.amazon.com/dp/0062315005", AmazonExtractor),
        ("https://www.goodreads.com/book/show/1885", GoodreadsExtractor),
        ("https://taaghche.com/book/40298", TaaghcheExtractor),
        ("https://fidibo.com/book/40298", FidiboExtractor),
    ])
    def test_extractor_for_url(self, url, expected):
        assert get_extractor_for_url(url) is expected

    def test_unsupported_url_raises(self):
        with pytest.raises(ValueError, match="Unsupported site"):
            get_extractor_for_url("https://example.com/book/1")

    def test_unsupported_site_raises(self):
        with pytest.raises(ValueError, match="Unsupported site"):
            get_extractor_for_site("bookdepository")
