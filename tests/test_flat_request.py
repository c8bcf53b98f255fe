from __future__ import annotations

import pytest

from zip_bundler.models import FileItem
from zip_bundler.services import name_from_url, request_from_urls


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://x/a.txt", "a.txt"),
        ("http://x/dir/a.txt?token=1&b=2", "a.txt"),
        ("http://x/a.txt#frag", "a.txt"),
        ("http://x/my%20file.pdf", "my file.pdf"),
        ("http://x/a%2Fb.txt", "b.txt"),
        ("http://x/", "download"),
        ("http://x", "download"),
        ("http://x/..", "download"),
        ("", "download"),
        ("http://x/a%00b.txt", "download"),
        ("http://x/%20%20", "download"),
    ],
)
def test_name_from_url(url: str, expected: str) -> None:
    assert name_from_url(url) == expected


def test_request_from_urls_keeps_order_and_sources() -> None:
    req = request_from_urls(["http://x/a", "http://y/a"], name="Files")
    assert req.name == "Files"
    assert req.roots == [
        FileItem(name="a", source="http://x/a"),
        FileItem(name="a", source="http://y/a"),
    ]


def test_unusable_url_name_does_not_spoil_the_request() -> None:
    from zip_bundler.services import validate_request

    req = request_from_urls(["http://x/a%00b.txt", "http://x/ok.txt"], name="Files")
    validate_request(req)
    assert [n.name for n in req.roots] == ["download", "ok.txt"]
