"""Tests for addbook/extraction/amazon_extractor.py"""

import pytest

from addbook.extraction.amazon_extractor import (
    AmazonExtractor,
    clean_amazon_title,
    first_number,
    trailing_value,
)

URL = "https://www.amazon.com/dp/0062315005"


@pytest.fixture
def record(amazon_html):
    extractor = AmazonExtractor(URL)
    extractor.load_html(amazon_html)
    return extractor.extract()


class TestCleanAmazonTitle:
    def test_category_suffix(self):
        assert clean_amazon_title("Some Book (Bird Books, Gift Books)") == "Some Book"

    def test_long_parenthetical(self):
        assert clean_amazon_title("Dune (A story of politics, religion and ecology)") == "Dune"

    def test_repeated_suffixes(self):
        assert clean_amazon_title("Emma (Penguin Classics) (Deluxe Edition)") == "Emma"

    def test_short_parenthetical_kept(self):
        assert clean_amazon_title("Catch-22 (50th)") == "Catch-22 (50th)"

    def test_inner_parenthetical_kept(self):
        assert clean_amazon_title("The (Un)Known World") == "The (Un)Known World"


class TestDetailValueHelpers:
    def test_trailing_value_strips_direction_marks(self):
        assert trailing_value("Publisher ‏ : ‎ Penguin") == "Penguin"

    def test_iso_date_survives(self):
        assert trailing_value("Publication date : 2014-04-15") == "2014-04-15"

    def test_spaced_hyphen_is_separator(self):
        assert trailing_value("Language - English") == "English"

    def test_single_character_is_miss(self):
        assert trailing_value("Edition : 1") is None

    def test_first_number(self):
        assert first_number("Print length : 208 pages") == "208"


class TestAmazonFixture:
    def test_title_cleaned(self, record):
        assert record.title == "The Alchemist"

    def test_byline_split(self, record):
        assert record.author == "Paulo Coelho"
        assert record.translator == "Alan R. Clarke"

    def test_detail_bullets(self, record):
        assert record.pages == "208"
        assert record.publisher == "HarperOne; 25th Anniversary edition (April 15, 2014)"
        assert record.date_published == "April 15, 2014"
        assert record.language == "English"

    def test_isbn13_preferred(self, record):
        assert record.isbn == "9780062315007"

    def test_high_resolution_cover(self, record):
        assert record.cover == "https://m.media-amazon.com/images/I/51Z0nLAfLmL._SL1500_.jpg"

    def test_canonical_url(self, record):
        assert record.url == "https://www.amazon.com/Alchemist-25th-Anniversary-Paulo-Coelho/dp/0062315005"

    def test_description_left_empty(self, record):
        assert record.description == ""


class TestAmazonFallbacks:
    def test_no_title_is_extraction_miss(self):
        extractor = AmazonExtractor(URL)
        extractor.load_html("<html><body><div id='bylineInfo'></div></body></html>")
        assert extractor.extract() is None

    def test_dynamic_image_and_asin_fallback(self):
        html = """
        <html><body>
        <span id="productTitle">Kindle Title</span>
        <div id="bylineInfo">
          <span class="author"><a class="a-link-normal">Ann Author</a>
            <span class="contribution"><span class="a-color-secondary">()</span></span></span>
          <span class="author"><a class="a-link-normal">Ed Editor</a>
            <span class="contribution"><span class="a-color-secondary">(Editor)</span></span></span>
        </div>
        <img id="landingImage" src="small.jpg"
             data-a-dynamic-image='{"https://img/small.jpg": [100, 150], "https://img/large.jpg": [400, 600]}'>
        </body></html>
        """
        extractor = AmazonExtractor("https://www.amazon.com/Kindle-Title/dp/B00K0OI42W")
        extractor.load_html(html)
        record = extractor.extract()

        assert record.author == "Ann Author"
        assert record.translator == ""
        assert record.cover == "https://img/large.jpg"
        assert record.isbn == "B00K0OI42W"

    def test_rich_product_information_fields(self):
        html = """
        <html><body>
        <span id="productTitle">Carousel Book</span>
        <div id="rpi-attribute-book_details-fiona_pages"><div class="rpi-attribute-value"><span>320 pages</span></div></div>
        <div id="rpi-attribute-book_details-publisher"><div class="rpi-attribute-value"><span>Vintage</span></div></div>
        <div id="rpi-attribute-book_details-isbn13"><div class="rpi-attribute-value"><span>978-0307277671</span></div></div>
        </body></html>
        """
        extractor = AmazonExtractor(URL)
        extractor.load_html(html)
        record = extractor.extract()

        assert record.pages == "320"
        assert record.isbn == "9780307277671"
