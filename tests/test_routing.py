import unittest

from tvchannels.errors import InvalidIdentifier, MethodNotAllowed
from tvchannels.routing import (
    ChannelFilters,
    DetailRoute,
    MAX_PAGE,
    ListRoute,
    StatsRoute,
    first_values,
    parse_filters,
    parse_limit,
    parse_page,
    resolve_route,
    sanitize_string,
)

CHANNEL_ID = "3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b"


class ResolveRouteTests(unittest.TestCase):
    def test_collection_path_is_list(self):
        self.assertEqual(resolve_route("GET", "/tv-channels"), ListRoute())
        self.assertEqual(resolve_route("GET", "/tv-channels/"), ListRoute())
        self.assertEqual(resolve_route("GET", "/"), ListRoute())

    def test_stats_segment(self):
        self.assertEqual(resolve_route("GET", "/tv-channels/stats"), StatsRoute())

    def test_detail_with_uuid(self):
        self.assertEqual(
            resolve_route("GET", f"/tv-channels/{CHANNEL_ID}"),
            DetailRoute(channel_id=CHANNEL_ID),
        )

    def test_detail_id_pattern_is_case_insensitive(self):
        route = resolve_route("GET", f"/tv-channels/{CHANNEL_ID.upper()}")
        self.assertEqual(route, DetailRoute(channel_id=CHANNEL_ID.upper()))

    def test_malformed_id_rejected(self):
        for bad in ("123", "not-a-uuid", CHANNEL_ID + "0", CHANNEL_ID.replace("-", ""), "zzzzzzzz-9a4d-4e6f-8b2a-1c3d5e7f9a0b"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidIdentifier):
                    resolve_route("GET", f"/tv-channels/{bad}")

    def test_deeper_paths_have_no_route(self):
        with self.assertRaises(MethodNotAllowed):
            resolve_route("GET", f"/tv-channels/{CHANNEL_ID}/extra")

    def test_non_get_methods_rejected(self):
        for method in ("POST", "PUT", "PATCH", "DELETE"):
            with self.subTest(method=method):
                with self.assertRaises(MethodNotAllowed):
                    resolve_route(method, "/tv-channels")

    def test_method_checked_before_identifier(self):
        with self.assertRaises(MethodNotAllowed):
            resolve_route("DELETE", "/tv-channels/bogus")

    def test_base_path_is_stripped(self):
        base = "/functions/v1"
        self.assertEqual(resolve_route("GET", "/functions/v1", base), ListRoute())
        self.assertEqual(resolve_route("GET", "/functions/v1/tv-channels", base), ListRoute())
        self.assertEqual(resolve_route("GET", "/functions/v1/tv-channels/stats", base), StatsRoute())
        self.assertEqual(
            resolve_route("GET", f"/functions/v1/tv-channels/{CHANNEL_ID}", base),
            DetailRoute(channel_id=CHANNEL_ID),
        )


class QueryParsingTests(unittest.TestCase):
    def test_sanitize_trims_and_truncates(self):
        self.assertEqual(sanitize_string("  News  ", 50), "News")
        self.assertEqual(sanitize_string("x" * 80, 50), "x" * 50)
        self.assertIsNone(sanitize_string("   ", 50))
        self.assertIsNone(sanitize_string("", 50))
        self.assertIsNone(sanitize_string(None, 50))

    def test_page_floor(self):
        self.assertEqual(parse_page(None), 1)
        self.assertEqual(parse_page("3"), 3)
        self.assertEqual(parse_page("-5"), 1)
        self.assertEqual(parse_page("0"), 1)
        self.assertEqual(parse_page("abc"), 1)
        self.assertEqual(parse_page("4xyz"), 4)

    def test_page_is_capped_so_offset_fits_64_bits(self):
        page = parse_page("99999999999999999999")
        self.assertEqual(page, MAX_PAGE)
        self.assertLess((page - 1) * 100, 2**63)

    def test_limit_clamp(self):
        self.assertEqual(parse_limit(None), 50)
        self.assertEqual(parse_limit("abc"), 50)
        self.assertEqual(parse_limit("500"), 100)
        self.assertEqual(parse_limit("0"), 1)
        self.assertEqual(parse_limit("-3"), 1)
        self.assertEqual(parse_limit("25"), 25)
        self.assertEqual(parse_limit("2.9"), 2)

    def test_parse_filters(self):
        filters = parse_filters(
            {
                "category": " News ",
                "language": "",
                "country": "USA",
                "search": "s" * 150,
                "page": "2",
                "limit": "10",
            }
        )
        self.assertEqual(filters.category, "News")
        self.assertIsNone(filters.language)
        self.assertEqual(filters.country, "USA")
        self.assertEqual(filters.search, "s" * 100)
        self.assertEqual((filters.page, filters.limit, filters.offset), (2, 10, 10))

    def test_repeated_parameters_keep_first_value(self):
        params = first_values([("category", "News"), ("category", "Kids"), ("page", "2")])
        self.assertEqual(params, {"category": "News", "page": "2"})
        self.assertEqual(parse_filters(params).category, "News")

    def test_default_filters(self):
        filters = parse_filters({})
        self.assertEqual(filters, ChannelFilters())
        self.assertEqual(filters.offset, 0)


if __name__ == "__main__":
    unittest.main()
