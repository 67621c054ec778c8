"""Tests for page requests, continuations and titles."""

import pytest

from vidbrowse.core.models import (
    NONE, CommentNode, TranscriptNode, VideoNode,
)
from vidbrowse.core.pages import (
    Category, Comment, CommentSection, Game, Home, Previous, Recommendations, Search,
    Transcript, continue_page, page_title, request,
)


@pytest.fixture
def home():
    return Home()


def video_ids(items):
    return [item.node.video_id for item in items if isinstance(item.node, VideoNode)]


def more_replies(token):
    return {"continuationItemRenderer": {
        "button": {"buttonRenderer": {"command": {"continuationCommand": {"token": token}}}},
    }}


# --- Home ---


def test_home_request(home, fake_api):
    items = request(home, fake_api)
    assert video_ids(items) == ["home1", "home2"]
    assert home.continuation == "home-token"
    assert fake_api.calls == [("home",)]


def test_home_chips_open_categories(home, fake_api, payloads):
    fake_api.home_html = payloads.home_page(["home1"], chips=["Music"])
    items = request(home, fake_api)
    assert items[0].node.continuation == "chip-Music"
    # Separator between the tags and the feed
    assert items[1].node is NONE
    assert home.continuation is None


def test_home_continue(home, fake_api, payloads):
    items = request(home, fake_api)
    fake_api.add(("browse", "home-token", None, None),
                 payloads.grid_continuation(["home3"], "home-token-2"))
    continue_page(home, fake_api, items)
    assert video_ids(items) == ["home1", "home2", "home3"]
    assert home.continuation == "home-token-2"


def test_continue_without_token_is_noop(fake_api):
    page = Home(continuation=None)
    items = ["untouched"]
    continue_page(page, fake_api, items)
    assert items == ["untouched"]
    assert page.continuation is None
    assert fake_api.calls == []


def test_request_is_idempotent(home, fake_api, payloads):
    first = request(home, fake_api)
    fake_api.add(("browse", "home-token", None, None),
                 payloads.grid_continuation(["home3"], None))
    continue_page(home, fake_api, first)
    assert home.continuation is None

    second = request(home, fake_api)
    assert video_ids(second) == ["home1", "home2"]
    assert home.continuation == "home-token"


# --- Category and Game ---


def test_category_is_single_batch(home, fake_api, payloads):
    page = Category("chip-Music", Previous(home, 0))
    fake_api.add(("browse", "chip-Music", None, None),
                 payloads.grid_continuation(["c1", "c2"], "next"))
    items = request(page, fake_api)
    assert video_ids(items) == ["c1", "c2"]
    assert page.continuation is None
    continue_page(page, fake_api, items)
    assert len(fake_api.calls) == 1


def test_game_request_and_continue(home, fake_api, payloads):
    page = Game("game-id", Previous(home, 3), params="p")
    fake_api.add(("browse", None, "game-id", "p"), {"contents": {
        "twoColumnBrowseResultsRenderer": {"tabs": [{"tabRenderer": {"content": {
            "richGridRenderer": {"contents": [
                payloads.rich_item("g1"), payloads.continuation_item("game-more"),
            ]},
        }}}]},
    }})
    fake_api.add(("browse", "game-more", None, None), payloads.grid_continuation(["g2"]))
    items = request(page, fake_api)
    assert page.continuation == "game-more"
    continue_page(page, fake_api, items)
    assert video_ids(items) == ["g1", "g2"]
    assert page.continuation is None


# --- Search ---


def test_search_request_and_continue(home, fake_api, payloads):
    page = Search("cats", Previous(home, 0))
    fake_api.add(("search", "cats", None), payloads.search(["s1", "s2"], "search-more"))
    fake_api.add(("search_continuation", "search-more"), payloads.search_continuation(["s3"]))
    items = request(page, fake_api)
    assert items[0].title[0][0].text == "42 results"
    assert page.continuation == "search-more"
    continue_page(page, fake_api, items)
    assert video_ids(items) == ["s1", "s2", "s3"]
    assert page.continuation is None


# --- Recommendations ---


def test_recommendations_request_and_continue(home, fake_api, payloads):
    page = Recommendations("vid", Previous(home, 1))
    fake_api.add(("next", "vid"), payloads.next("vid", ["r1"], "next-more"))
    fake_api.add(("next_continuation", "next-more"), {"onResponseReceivedEndpoints": [
        {"appendContinuationItemsAction": {"continuationItems": [payloads.compact_video("r2")]}},
    ]})
    items = request(page, fake_api)
    assert video_ids(items) == ["autoplay", "r1"]
    continue_page(page, fake_api, items)
    assert video_ids(items) == ["autoplay", "r1", "r2"]
    assert page.continuation is None


# --- Transcript ---


def test_transcript(home, fake_api, payloads):
    def language(title, token, selected):
        return {"title": title, "selected": selected,
                "continuation": {"reloadContinuationData": {"continuation": token}}}

    fake_api.add(("transcript", "params"), {"actions": [{"updateEngagementPanelAction": {
        "content": {"transcriptRenderer": {"content": {"transcriptSearchPanelRenderer": {
            "body": {"transcriptSegmentListRenderer": {"initialSegments": [
                {"transcriptSegmentRenderer": {
                    "snippet": payloads.runs("Hello there"),
                    "startTimeText": {"simpleText": "0:01"},
                }},
            ]}},
            "footer": {"transcriptFooterRenderer": {"languageMenu": {
                "sortFilterSubMenuRenderer": {"subMenuItems": [
                    language("English", "en", True), language("French", "fr", False),
                ]},
            }}},
        }}}},
    }}]})
    page = Transcript("params", Previous(home, 0))
    items = request(page, fake_api)

    assert items[0].title[0][0].text == "Other languages"
    assert [item.node for item in items[1:3]] == [TranscriptNode("en"), TranscriptNode("fr")]
    assert items[1].title[0][0].underline
    assert not items[2].title[0][0].underline
    assert items[3].title[0][0].text == "Hello there"
    assert items[3].detail[0][0].text == "0:01"
    assert page.continuation is None


# --- Comments ---


def test_comment_section(home, fake_api, payloads):
    thread = {"commentThreadRenderer": {
        "comment": payloads.comment("Alice", "First!", replyCount=2),
        "replies": {"commentRepliesRenderer": {
            "contents": [payloads.continuation_item("replies-token")],
        }},
    }}
    lonely = {"commentThreadRenderer": {"comment": payloads.comment("Bob", "Hi")}}
    fake_api.add(("next_continuation", "first"),
                 payloads.comments([thread, lonely], "comments-more"))
    fake_api.add(("next_continuation", "comments-more"),
                 payloads.comments([lonely], None, reload=False))

    page = CommentSection("first", Previous(home, 0))
    items = request(page, fake_api)
    assert [item.title[0][0].text for item in items] == ["Alice", "Bob"]
    assert items[0].node == CommentNode("replies-token")
    assert items[1].node is NONE
    assert items[0].detail[-1][0].text == "2 replies"
    assert page.continuation == "comments-more"

    continue_page(page, fake_api, items)
    assert len(items) == 3
    assert page.continuation is None


def test_comment_replies(home, fake_api, payloads):
    fake_api.add(("next_continuation", "replies-token"), {"onResponseReceivedEndpoints": [
        {"appendContinuationItemsAction": {"continuationItems": [
            payloads.comment("Carol", "Agreed", authorIsChannelOwner=True),
            more_replies("replies-more"),
        ]}},
    ]})
    page = Comment("replies-token", Previous(home, 0))
    items = request(page, fake_api)
    assert items[0].title[0][0].text == "Carol"
    assert [line[0].text for line in items[0].detail if line][-1] == "Video uploader"
    assert page.continuation == "replies-more"


# --- titles ---


def test_page_titles(home):
    previous = Previous(home, 0)
    assert page_title(home) == "Home"
    assert page_title(Category("t", previous)) == "A category"
    assert page_title(Game("g", previous)) == "A game"
    assert page_title(Search("funny cats", previous)) == "funny cats"
    assert page_title(Recommendations("v", previous)) == "Recommendations"
    assert page_title(Transcript("p", previous)) == "Transcript"
    assert page_title(CommentSection("t", previous)) == "Comments"
    assert page_title(Comment("t", previous)) == "A comment"
