import pytest

from html_insert_assets.assets import AssetKind, ScriptMode
from html_insert_assets.document import (
    create_script,
    find_element,
    find_first,
    inject_assets,
    parse_document,
    require_element,
    serialize,
)
from html_insert_assets.errors import DocumentError
from html_insert_assets.paths import UrlBuilder

EMPTY_PAGE = "<html><head></head><body></body></html>"


@pytest.fixture
def urls(fixed_timestamp):
    return UrlBuilder("./index.html", [], fixed_timestamp)


def test_find_first_is_depth_first():
    soup = parse_document('<div><section><p id="inner"></p></section></div><p id="outer"></p>')
    found = find_element(soup, "P")
    assert found["id"] == "inner"


def test_find_first_with_predicate():
    soup = parse_document('<ul><li class="a"></li><li class="b"></li></ul>')
    found = find_first(soup, lambda tag: tag.get("class") == ["b"])
    assert found.name == "li"
    assert find_first(soup, lambda tag: tag.name == "table") is None


def test_missing_body_raises():
    soup = parse_document("<html><head></head></html>")
    with pytest.raises(DocumentError, match="body"):
        require_element(soup, "body")


def test_inject_requires_head(urls):
    soup = parse_document("<html><body></body></html>")
    with pytest.raises(DocumentError, match="head"):
        inject_assets(soup, {AssetKind.CSS: ["a.css"]}, urls)


def test_inject_all_kinds(urls):
    soup = parse_document(EMPTY_PAGE)
    assets = {
        AssetKind.JS: ["app.mjs", "app.js", "https://cdn.example.com/x.js"],
        AssetKind.CSS: ["style.css"],
        AssetKind.ICO: ["favicon.ico"],
    }

    inject_assets(soup, assets, urls)

    assert serialize(soup) == (
        "<html><head>"
        '<link rel="stylesheet" href="./style.css?v=1234">'
        '<link rel="shortcut icon" type="image/ico" href="./favicon.ico?v=1234">'
        "</head><body>"
        '<script type="module" src="./app.mjs?v=1234"></script>'
        '<script nomodule src="./app.js?v=1234"></script>'
        '<script src="https://cdn.example.com/x.js"></script>'
        "</body></html>"
    )


def test_lone_script_has_no_extra_attributes(urls):
    soup = parse_document(EMPTY_PAGE)
    inject_assets(soup, {AssetKind.JS: ["only.js"]}, urls)

    script = soup.body.script
    assert dict(script.attrs) == {"src": "./only.js?v=1234"}


def test_tags_are_appended_after_existing_content(urls):
    soup = parse_document('<html><head><title>t</title></head><body><div id="app"></div></body></html>')
    inject_assets(soup, {AssetKind.JS: ["a.js", "b.js"], AssetKind.CSS: ["x.css", "y.css"]}, urls)

    assert [tag.name for tag in soup.head.find_all(recursive=False)] == ["title", "link", "link"]
    assert [s["src"] for s in soup.body.find_all("script")] == ["./a.js?v=1234", "./b.js?v=1234"]
    assert [link["href"] for link in soup.head.find_all("link")] == ["./x.css?v=1234", "./y.css?v=1234"]
    assert soup.body.contents[0]["id"] == "app"


def test_unknown_assets_are_not_injected(urls):
    soup = parse_document(EMPTY_PAGE)
    inject_assets(soup, {AssetKind.UNKNOWN: ["notes.txt"]}, urls)
    assert serialize(soup) == EMPTY_PAGE


def test_external_script_skips_timestamp():
    calls = []
    urls = UrlBuilder("./index.html", [], lambda path: calls.append(path) or 1)
    soup = parse_document(EMPTY_PAGE)

    inject_assets(soup, {AssetKind.JS: ["https://cdn.example.com/x.mjs"]}, urls)

    assert soup.body.script.attrs == {"src": "https://cdn.example.com/x.mjs"}
    assert calls == []


def test_serialize_keeps_untouched_markup():
    markup = '<!DOCTYPE html>\n<html lang="fr"><head><meta charset="utf-8"></head><body><p data-x="1" class="c">café &amp; crème</p></body></html>'
    assert serialize(parse_document(markup)) == markup


def test_nomodule_renders_as_bare_attribute():
    soup = parse_document(EMPTY_PAGE)
    script = create_script(soup, "legacy.js", ScriptMode.NOMODULE)
    soup.body.append(script)
    assert '<script nomodule src="legacy.js"></script>' in serialize(soup)


def test_doctype_round_trip_is_stable():
    markup = "<!DOCTYPE html>\n<html><head></head><body></body></html>"
    once = serialize(parse_document(markup))
    twice = serialize(parse_document(once))
    assert once == markup
    assert twice == markup
