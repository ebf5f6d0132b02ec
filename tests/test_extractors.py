import unittest

from product_scraper.extractors import (
    decode_html_entities,
    extract_description,
    extract_from_meta,
    extract_price,
    extract_title,
    extract_title_tag,
    first_match,
    parse_price,
)


class MetaLookupTests(unittest.TestCase):
    def test_property_before_content(self) -> None:
        html = '<meta property="og:title" content="Red Kettle">'
        self.assertEqual(extract_from_meta(html, "og:title"), "Red Kettle")

    def test_content_before_name(self) -> None:
        html = "<meta content='Nice kettle' name='description'>"
        self.assertEqual(extract_from_meta(html, "description"), "Nice kettle")

    def test_lookup_is_case_insensitive(self) -> None:
        html = '<META PROPERTY="OG:TITLE" CONTENT="Loud Kettle">'
        self.assertEqual(extract_from_meta(html, "og:title"), "Loud Kettle")

    def test_value_is_trimmed_and_decoded(self) -> None:
        html = '<meta name="twitter:title" content="  Salt &amp; Pepper  ">'
        self.assertEqual(extract_from_meta(html, "twitter:title"), "Salt & Pepper")

    def test_key_is_matched_literally(self) -> None:
        html = '<meta property="ogXtitle" content="Wrong">'
        self.assertIsNone(extract_from_meta(html, "og.title"))

    def test_missing_key_returns_none(self) -> None:
        self.assertIsNone(extract_from_meta("<html></html>", "og:title"))

    def test_whitespace_only_content_is_absent(self) -> None:
        html = '<meta property="og:title" content="   ">'
        self.assertIsNone(extract_from_meta(html, "og:title"))


class TitleTests(unittest.TestCase):
    def test_title_tag_used_without_meta(self) -> None:
        self.assertEqual(extract_title("<html><head><title>Foo</title></head></html>"), "Foo")

    def test_og_title_takes_precedence(self) -> None:
        html = '<meta property="og:title" content="A"><title>B</title>'
        self.assertEqual(extract_title(html), "A")

    def test_twitter_title_before_generic_title_meta(self) -> None:
        html = '<meta name="title" content="Generic"><meta name="twitter:title" content="Card">'
        self.assertEqual(extract_title(html), "Card")

    def test_generic_title_meta_before_title_tag(self) -> None:
        html = '<title>Tag</title><meta name="title" content="Meta">'
        self.assertEqual(extract_title(html), "Meta")

    def test_title_tag_with_attributes(self) -> None:
        self.assertEqual(extract_title_tag('<title lang="en">\n  Mug &lt;3 \n</title>'), "Mug <3")

    def test_no_title_anywhere(self) -> None:
        self.assertIsNone(extract_title("<p>nothing</p>"))


class DescriptionTests(unittest.TestCase):
    def test_og_description_wins(self) -> None:
        html = (
            '<meta name="description" content="plain">'
            '<meta property="og:description" content="open graph">'
        )
        self.assertEqual(extract_description(html), "open graph")

    def test_description_before_twitter(self) -> None:
        html = (
            '<meta name="twitter:description" content="card">'
            '<meta name="description" content="plain">'
        )
        self.assertEqual(extract_description(html), "plain")

    def test_twitter_description_as_last_resort(self) -> None:
        html = '<meta name="twitter:description" content="card">'
        self.assertEqual(extract_description(html), "card")


class EntityDecodingTests(unittest.TestCase):
    def test_known_entities_are_replaced(self) -> None:
        self.assertEqual(
            decode_html_entities("&lt;b&gt; &quot;x&quot; &#39;y&apos; &amp;"),
            "<b> \"x\" 'y' &",
        )

    def test_unknown_entities_are_left_alone(self) -> None:
        self.assertEqual(decode_html_entities("caf&eacute; &#233;"), "caf&eacute; &#233;")


class PriceTests(unittest.TestCase):
    def test_currency_prefixed_amount(self) -> None:
        self.assertEqual(extract_price("<span>$12.34</span>"), 12.34)

    def test_comma_decimal_separator(self) -> None:
        self.assertEqual(extract_price("<span>€ 19,99</span>"), 19.99)

    def test_json_like_price_key(self) -> None:
        self.assertEqual(extract_price('{"Price": 45.50}'), 45.5)

    def test_currency_suffixed_amount(self) -> None:
        self.assertEqual(extract_price("<b>7,50 £</b>"), 7.5)

    def test_data_price_attribute(self) -> None:
        self.assertEqual(extract_price('<div data-price="12.99"></div>'), 12.99)

    def test_first_pattern_in_list_wins_over_document_order(self) -> None:
        html = '<div data-price="3.00"></div><span>$9.99</span>'
        self.assertEqual(extract_price(html), 9.99)

    def test_zero_match_is_skipped_for_next_pattern(self) -> None:
        html = '<span>0.00 €</span><div data-price="12.99"></div>'
        self.assertEqual(extract_price(html), 12.99)

    def test_only_first_occurrence_of_a_pattern_is_considered(self) -> None:
        html = '<div data-price="0.00"></div><div data-price="12.99"></div>'
        self.assertIsNone(extract_price(html))

    def test_no_price(self) -> None:
        self.assertIsNone(extract_price("<p>Call us for a quote</p>"))

    def test_non_ascii_digits_are_not_prices(self) -> None:
        self.assertIsNone(extract_price("<span>$١٢.٣٤</span>"))
        self.assertEqual(extract_price('<span>€١٢,٥٠</span><div data-price="9.99"></div>'), 9.99)

    def test_open_graph_price_is_not_consulted(self) -> None:
        html = '<meta property="og:price:amount" content="12">'
        self.assertIsNone(extract_price(html))

    def test_parse_price_rejects_zero(self) -> None:
        for raw in ["0.00", "0,00"]:
            with self.subTest(raw=raw):
                self.assertIsNone(parse_price(raw))


class FirstMatchTests(unittest.TestCase):
    def test_stops_at_first_value(self) -> None:
        calls = []

        def empty(html: str):
            calls.append("empty")
            return None

        def found(html: str):
            calls.append("found")
            return "value"

        def never(html: str):  # pragma: no cover - must not be reached
            calls.append("never")
            return "other"

        self.assertEqual(first_match((empty, found, never), ""), "value")
        self.assertEqual(calls, ["empty", "found"])


if __name__ == "__main__":
    unittest.main()
