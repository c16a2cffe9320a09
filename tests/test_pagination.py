import pytest

from wikiclient.datatypes import Category, Image, LangLink, Link, Reference
from wikiclient.errors import JSONPathError, TransportError
from wikiclient.pagination import START_MARKER, RequestTemplate

BASE = [("format", "json"), ("action", "query"), ("titles", "World")]

IMAGES_FIXED = [
    ("generator", "images"),
    ("gimlimit", "max"),
    ("prop", "imageinfo"),
    ("iiprop", "url"),
    *BASE,
]


def image_page(title, cont=None):
    data = {
        "query": {
            "pages": {
                "-1": {
                    "title": title,
                    "imageinfo": [
                        {
                            "url": f"http://example.com/{title}",
                            "descriptionurl": f"http://example.com/{title}.html",
                        }
                    ],
                }
            }
        }
    }
    if cont is not None:
        data["continue"] = cont
    return data


def field_page(field, elements, cont=None):
    data = {"query": {"pages": {"42": {"title": "World", field: elements}}}}
    if cont is not None:
        data["continue"] = cont
    return data


# (getter, field, raw elements, expected items)
RESOURCES = [
    (
        "get_references",
        "extlinks",
        [{"*": "//example.com/a"}, {"*": "http://example.com/b"}],
        [Reference("http://example.com/a"), Reference("http://example.com/b")],
    ),
    ("get_links", "links", [{"title": "Earth"}, {"title": "Globe"}], [Link("Earth"), Link("Globe")]),
    (
        "get_langlinks",
        "langlinks",
        [{"lang": "es", "*": "Mundo"}, {"lang": "fr"}],
        [LangLink("es", "Mundo"), LangLink("fr", None)],
    ),
    (
        "get_categories",
        "categories",
        [{"title": "Category: Planets"}, {"title": "Worlds"}],
        [Category("Planets"), Category("Worlds")],
    ),
]


class TestRequestTemplate:
    def test_first_request_sends_start_marker(self):
        template = RequestTemplate("https://x/api.php", (("prop", "links"), ("titles", "A")))
        assert template.params_for(None) == [("prop", "links"), ("titles", "A"), START_MARKER]

    def test_continuation_is_merged_verbatim(self):
        template = RequestTemplate("https://x/api.php", (("prop", "links"), ("titles", "A")))
        params = template.params_for((("plcontinue", "1|0|B"), ("continue", "||")))
        assert params == [
            ("prop", "links"),
            ("titles", "A"),
            ("plcontinue", "1|0|B"),
            ("continue", "||"),
        ]

    def test_colliding_key_is_not_sent_twice(self):
        template = RequestTemplate("https://x/api.php", (("prop", "links"), ("titles", "A")))
        params = template.params_for((("titles", "A"), ("plcontinue", "x")))
        keys = [key for key, _ in params]
        assert len(keys) == len(set(keys))
        assert ("plcontinue", "x") in params


class TestWithoutContinuation:
    @pytest.mark.parametrize("getter,field,elements,expected", RESOURCES)
    def test_single_page_then_stop(self, wiki, client, getter, field, elements, expected):
        client.push(field_page(field, elements))
        items = list(getattr(wiki.page_from_title("World"), getter)())
        assert items == expected
        assert len(client.arguments) == 1

    def test_images_single_page(self, wiki, client):
        client.push(image_page("A.jpg"))
        images = list(wiki.page_from_title("World").get_images())
        assert [image.title for image in images] == ["A.jpg"]
        assert client.arguments == [[*IMAGES_FIXED, ("continue", "")]]


class TestWithContinuation:
    def test_world_images_two_pages(self, wiki, client):
        client.push(
            image_page("A.jpg", cont={"gimcontinue": "next"}),
            image_page("B.jpg"),
        )
        images = list(wiki.page_from_title("World").get_images())

        assert images == [
            Image("http://example.com/A.jpg", "A.jpg", "http://example.com/A.jpg.html"),
            Image("http://example.com/B.jpg", "B.jpg", "http://example.com/B.jpg.html"),
        ]
        assert len(client.arguments) == 2
        second = client.arguments[1]
        assert ("gimcontinue", "next") in second
        assert ("continue", "") not in second
        assert second == [*IMAGES_FIXED, ("gimcontinue", "next")]

    @pytest.mark.parametrize("getter,field,elements,expected", RESOURCES)
    def test_follow_up_uses_fixed_params_and_token(self, wiki, client, getter, field, elements, expected):
        token = {"xxcontinue": "42|7", "continue": "||"}
        client.push(
            field_page(field, elements[:1], cont=token),
            field_page(field, elements[1:]),
        )
        items = list(getattr(wiki.page_from_title("World"), getter)())
        assert items == expected

        first, second = client.arguments
        assert first[-1] == ("continue", "")
        fixed = first[:-1]
        assert second == [*fixed, ("xxcontinue", "42|7"), ("continue", "||")]
        keys = [key for key, _ in second]
        assert len(keys) == len(set(keys))

    def test_numeric_and_boolean_tokens_are_stringified(self, wiki, client):
        client.push(
            field_page("links", [{"title": "A"}], cont={"offset": 5, "done": True}),
            field_page("links", [{"title": "B"}]),
        )
        assert len(list(wiki.page_from_title("World").get_links())) == 2
        assert ("offset", "5") in client.arguments[1]
        assert ("done", "1") in client.arguments[1]

    def test_pages_are_fetched_lazily(self, wiki, client):
        client.push(
            field_page("links", [{"title": "A"}, {"title": "B"}], cont={"plcontinue": "p2"}),
            field_page("links", [{"title": "C"}]),
        )
        links = wiki.page_from_title("World").get_links()
        assert len(client.arguments) == 1
        assert next(links) == Link("A")
        assert next(links) == Link("B")
        assert len(client.arguments) == 1
        assert next(links) == Link("C")
        assert len(client.arguments) == 2

    def test_empty_follow_up_page_keeps_going(self, wiki, client):
        client.push(
            field_page("links", [{"title": "A"}], cont={"plcontinue": "p2"}),
            {"continue": {"plcontinue": "p3"}, "query": {}},
            field_page("links", [{"title": "C"}]),
        )
        assert list(wiki.page_from_title("World").get_links()) == [Link("A"), Link("C")]
        assert len(client.arguments) == 3


class TestTermination:
    def test_next_after_end_never_refetches(self, wiki, client):
        client.push(field_page("links", [{"title": "A"}]))
        links = wiki.page_from_title("World").get_links()
        assert list(links) == [Link("A")]
        for _ in range(3):
            with pytest.raises(StopIteration):
                next(links)
        assert len(client.arguments) == 1

    def test_malformed_elements_are_skipped(self, wiki, client):
        client.push(
            field_page("links", [{"ns": 0}, {"title": "A"}, "junk"], cont={"plcontinue": "p2"}),
            field_page("links", [{"ns": 0}, {"title": "B"}]),
        )
        assert list(wiki.page_from_title("World").get_links()) == [Link("A"), Link("B")]

    def test_bad_element_at_end_of_page_does_not_end_sequence(self, wiki, client):
        client.push(
            field_page("links", [{"title": "A"}, {"ns": 0}], cont={"plcontinue": "p2"}),
            field_page("links", [{"ns": 0}, {"title": "B"}]),
        )
        assert list(wiki.page_from_title("World").get_links()) == [Link("A"), Link("B")]

    @pytest.mark.parametrize(
        "failure",
        [
            TransportError("boom", status_code=503),
            "<html>Service Unavailable</html>",
            {"continue": {"plcontinue": None}, "query": {"pages": {}}},
        ],
    )
    def test_follow_up_failure_ends_sequence(self, wiki, client, failure, caplog):
        client.push(
            field_page("links", [{"title": "A"}], cont={"plcontinue": "p2"}),
            failure,
        )
        links = wiki.page_from_title("World").get_links()
        assert list(links) == [Link("A")]
        assert len(client.arguments) == 2
        assert "Stopping links iteration early" in caplog.text
        with pytest.raises(StopIteration):
            next(links)
        assert len(client.arguments) == 2

    def test_first_fetch_failure_propagates(self, wiki, client):
        client.push(TransportError("boom"))
        with pytest.raises(TransportError):
            wiki.page_from_title("World").get_links()

    def test_first_fetch_without_pages_is_an_error(self, wiki, client):
        client.push({"batchcomplete": ""})
        with pytest.raises(JSONPathError):
            wiki.page_from_title("World").get_images()

    def test_first_fetch_with_bad_continuation_is_an_error(self, wiki, client):
        client.push(field_page("links", [{"title": "A"}], cont={"plcontinue": [1]}))
        with pytest.raises(JSONPathError):
            wiki.page_from_title("World").get_links()

    def test_page_without_field_is_empty(self, wiki, client):
        client.push({"query": {"pages": {"42": {"title": "World"}}}})
        assert list(wiki.page_from_title("World").get_categories()) == []


def test_iterator_snapshots_settings(wiki, client):
    client.push(
        field_page("categories", [{"title": "A"}], cont={"clcontinue": "p2"}),
        field_page("categories", [{"title": "B"}]),
    )
    wiki.categories_results = "5"
    categories = wiki.page_from_pageid("4138548").get_categories()
    wiki.categories_results = "500"
    wiki.language = "es"
    list(categories)
    assert client.urls == ["https://en.wikipedia.org/w/api.php"] * 2
    assert ("cllimit", "5") in client.arguments[1]
    assert ("pageids", "4138548") in client.arguments[1]
