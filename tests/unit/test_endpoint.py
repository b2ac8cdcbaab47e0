# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from httpbin_api import AnythingResponse, RecordingApi
from wrappedapi import Header, PathParameter, QueryParameter, WrappedApi


def _request(api, endpoint, *, params=(), queries=(), headers=(), url=None):
    builder = api.request(AnythingResponse).with_endpoint(endpoint).with_method("GET")
    builder.with_path_parameters(*params).with_queries(*queries).with_headers(*headers)
    if url is not None:
        builder.with_url(url)
    return builder.build()


@pytest.mark.parametrize(
    ("endpoint", "params", "expected"),
    [
        ("/users/{id}", [("id", "7")], "/users/7"),
        ("/{a}/{b}/{a}", [("a", "x"), ("b", "y")], "/x/y/x"),
        ("/plain", [], "/plain"),
        ("/{a}", [("a", "{b}"), ("b", "z")], "/z"),
        ("/{a}/{a}", [("a", "1"), ("a", "2")], "/1/1"),
    ],
)
def test_path_parameters_are_substituted_in_order(endpoint, params, expected):
    api = RecordingApi()
    request = _request(api, endpoint, params=[PathParameter(i, r) for i, r in params])

    assert request.computed_endpoint() == expected


def test_covering_parameters_leave_no_braces():
    api = RecordingApi()
    request = _request(
        api,
        "/orgs/{org}/repos/{repo}/issues/{number}",
        params=[PathParameter("org", "acme"), PathParameter("repo", "tools"), PathParameter("number", "12")],
    )

    computed = request.computed_endpoint()

    assert "{" not in computed and "}" not in computed


def test_queries_render_in_order():
    api = RecordingApi()
    request = _request(api, "/x", queries=[QueryParameter("a", "1"), QueryParameter("b", "2")])

    assert request.computed_endpoint() == "/x?a=1&b=2"


def test_no_queries_leave_endpoint_unchanged():
    api = RecordingApi()

    assert _request(api, "/x").computed_endpoint() == "/x"


def test_query_values_are_not_encoded():
    api = RecordingApi()
    request = _request(api, "/search", queries=[QueryParameter("q", "a b&c")])

    assert request.computed_endpoint() == "/search?q=a b&c"


def test_headers_keep_duplicates_request_first():
    class Api(WrappedApi):
        default_url = "https://example.com"
        default_headers = (Header("K", "2"), Header("Accept", "*/*"))

    api = Api()
    request = _request(api, "/x", headers=[Header("K", "1")])

    assert request.assembled_headers() == [Header("K", "1"), Header("K", "2"), Header("Accept", "*/*")]


def test_base_url_prefers_request_override():
    api = RecordingApi()

    assert api.resolve_base_url(_request(api, "/x")) == "https://httpbin.org"
    assert api.resolve_base_url(_request(api, "/x", url="https://mirror.example/")) == "https://mirror.example"


def test_api_without_default_url_cannot_be_instantiated():
    class Incomplete(WrappedApi):
        pass

    with pytest.raises(TypeError):
        Incomplete()
