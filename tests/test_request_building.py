from __future__ import annotations

from urllib.parse import quote

import pytest

from core.jina import HEADER_RULES, build_headers, build_request, build_search_url
from core.models import HeaderRule, SearchOptions

BOOLEAN_FLAGS = [
    ("no_cache", "X-No-Cache"),
    ("stream", "X-Stream"),
    ("gather_links", "X-With-Links-Summary"),
    ("gather_images", "X-With-Images-Summary"),
    ("image_caption", "X-With-Generated-Alt"),
    ("enable_iframe", "X-With-Iframe"),
    ("enable_shadow_dom", "X-With-Shadow-Dom"),
]


def test_query_only_yields_exactly_two_headers(api_key):
    headers = build_headers(SearchOptions(query="python"), api_key)

    assert headers == {
        "Authorization": f"Bearer {api_key}",
        "Accept": "text/plain",
    }


def test_json_format_selects_json_accept(api_key):
    headers = build_headers(SearchOptions(query="python", format="json"), api_key)

    assert headers["Accept"] == "application/json"
    assert len(headers) == 2


@pytest.mark.parametrize("option, header", BOOLEAN_FLAGS)
def test_boolean_flag_true_adds_one_header(api_key, option, header):
    headers = build_headers(SearchOptions(query="q", **{option: True}), api_key)

    assert headers[header] == "true"
    assert len(headers) == 3


@pytest.mark.parametrize("option, header", BOOLEAN_FLAGS)
def test_boolean_flag_false_adds_nothing(api_key, option, header):
    headers = build_headers(SearchOptions(query="q", **{option: False}), api_key)

    assert header not in headers
    assert len(headers) == 2


def test_resolve_redirects_only_explicit_false_adds_header(api_key):
    default = build_headers(SearchOptions(query="q"), api_key)
    enabled = build_headers(SearchOptions(query="q", resolve_redirects=True), api_key)
    disabled = build_headers(SearchOptions(query="q", resolve_redirects=False), api_key)

    assert "X-No-Redirect" not in default
    assert "X-No-Redirect" not in enabled
    assert disabled["X-No-Redirect"] == "true"


@pytest.mark.parametrize("budget, expected", [(42, "42"), (42.0, "42"), (1.5, "1.5")])
def test_token_budget_is_stringified(api_key, budget, expected):
    headers = build_headers(SearchOptions(query="q", token_budget=budget), api_key)

    assert headers["X-Token-Budget"] == expected


def test_browser_locale_passes_through(api_key):
    headers = build_headers(SearchOptions(query="q", browser_locale="de-DE"), api_key)

    assert headers["X-Locale"] == "de-DE"


def test_every_optional_field_set_at_once(api_key):
    options = SearchOptions(
        query="q",
        no_cache=True,
        token_budget=100,
        browser_locale="en-GB",
        stream=True,
        gather_links=True,
        gather_images=True,
        image_caption=True,
        enable_iframe=True,
        enable_shadow_dom=True,
        resolve_redirects=False,
    )

    headers = build_headers(options, api_key)

    assert len(headers) == 2 + len(HEADER_RULES)


def test_header_rules_cover_each_header_once():
    names = [rule.header for rule in HEADER_RULES]
    assert len(names) == len(set(names))


def test_unknown_rule_kind_is_rejected():
    rule = HeaderRule("no_cache", "X-Whatever", kind="sometimes")
    with pytest.raises(ValueError):
        rule.render(SearchOptions(query="q"))


@pytest.mark.parametrize(
    "query, path",
    [
        ("hello world", "hello%20world"),
        ("a/b?c=d&e", "a%2Fb%3Fc%3Dd%26e"),
        ("it's (fine)!", "it's%20(fine)!"),
        ("café", "caf%C3%A9"),
    ],
)
def test_search_url_percent_encodes_query(query, path):
    assert build_search_url(query) == f"https://s.jina.ai/{path}"


def test_search_url_matches_standard_quote():
    query = "hello world"
    assert build_search_url(query).endswith("/" + quote(query, safe=""))


def test_build_request_is_a_bodyless_post(api_key):
    request = build_request(SearchOptions(query="hello world", no_cache=True), api_key)

    assert request.method == "POST"
    assert request.url == "https://s.jina.ai/hello%20world"
    assert request.headers["X-No-Cache"] == "true"


class TestSearchOptionsFromArguments:
    def test_defaults(self):
        options = SearchOptions.from_arguments({"query": "q"})

        assert options == SearchOptions(query="q")
        assert options.format == "text"
        assert options.resolve_redirects is True

    def test_unknown_keys_are_ignored(self):
        options = SearchOptions.from_arguments({"query": "q", "page": 3})
        assert options == SearchOptions(query="q")

    def test_none_values_fall_back_to_defaults(self):
        options = SearchOptions.from_arguments({"query": "q", "format": None})
        assert options.format == "text"

    def test_missing_query(self):
        with pytest.raises(ValueError, match="query"):
            SearchOptions.from_arguments({"format": "json"})

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="format"):
            SearchOptions.from_arguments({"query": "q", "format": "xml"})
