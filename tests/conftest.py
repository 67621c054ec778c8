"""Shared test fixtures for vidbrowse tests."""

import json
from typing import Any, Callable, Dict, List, Optional

import pytest

from vidbrowse.core.models import AdaptiveFormat, PlayerResponse, VideoSummary


class Payloads:
    """Builders for the smallest JSON shapes the decoders accept."""

    @staticmethod
    def runs(text: str) -> Dict[str, Any]:
        return {"runs": [{"text": text}]}

    @staticmethod
    def accessible(text: str) -> Dict[str, Any]:
        return {"accessibility": {"accessibilityData": {"label": text}}}

    @staticmethod
    def continuation_item(token: str) -> Dict[str, Any]:
        return {"continuationItemRenderer": {
            "continuationEndpoint": {"continuationCommand": {"token": token}},
        }}

    @classmethod
    def video(cls, video_id: str, title: str = "A video") -> Dict[str, Any]:
        return {"videoRenderer": {
            "videoId": video_id,
            "title": cls.runs(title),
            "ownerText": cls.runs("Some channel"),
            "shortViewCountText": cls.accessible("1,234 views"),
        }}

    @classmethod
    def rich_item(cls, video_id: str, title: str = "A video") -> Dict[str, Any]:
        return {"richItemRenderer": {"content": cls.video(video_id, title)}}

    @classmethod
    def grid_continuation(cls, video_ids: List[str], token: Optional[str] = None) -> Dict[str, Any]:
        items = [cls.rich_item(v) for v in video_ids]
        if token is not None:
            items.append(cls.continuation_item(token))
        return {"onResponseReceivedActions": [
            {"appendContinuationItemsAction": {"continuationItems": items}},
        ]}

    @classmethod
    def home_page(cls, video_ids: List[str], token: Optional[str] = None,
                  chips: Optional[List[str]] = None) -> str:
        contents = [cls.rich_item(v) for v in video_ids]
        if token is not None:
            contents.append(cls.continuation_item(token))
        grid: Dict[str, Any] = {"contents": contents}
        if chips:
            grid["header"] = {"feedFilterChipBarRenderer": {"contents": [
                {"chipCloudChipRenderer": {
                    "text": {"simpleText": chip},
                    "navigationEndpoint": {"continuationCommand": {"token": f"chip-{chip}"}},
                }}
                for chip in chips
            ]}}
        data = {"contents": {"twoColumnBrowseResultsRenderer": {"tabs": [
            {"tabRenderer": {"content": {"richGridRenderer": grid}}},
        ]}}}
        return (
            "<html><script>var ytInitialData = "
            + json.dumps(data)
            + ";</script></html>"
        )

    @classmethod
    def search(cls, video_ids: List[str], token: Optional[str] = None) -> Dict[str, Any]:
        contents: List[Any] = [{"itemSectionRenderer": {
            "contents": [cls.video(v) for v in video_ids],
        }}]
        if token is not None:
            contents.append(cls.continuation_item(token))
        return {
            "estimatedResults": "42",
            "contents": {"twoColumnSearchResultsRenderer": {"primaryContents": {
                "sectionListRenderer": {
                    "contents": contents,
                    "subMenu": {"searchSubMenuRenderer": {"groups": []}},
                },
            }}},
        }

    @classmethod
    def search_continuation(cls, video_ids: List[str], token: Optional[str] = None) -> Dict[str, Any]:
        items: List[Any] = [{"itemSectionRenderer": {
            "contents": [cls.video(v) for v in video_ids],
        }}]
        if token is not None:
            items.append(cls.continuation_item(token))
        return {"onResponseReceivedCommands": [
            {"appendContinuationItemsAction": {"continuationItems": items}},
        ]}

    @classmethod
    def compact_video(cls, video_id: str) -> Dict[str, Any]:
        return {"compactVideoRenderer": {
            "videoId": video_id,
            "title": {"simpleText": f"Related {video_id}"},
            "longBylineText": cls.runs("Some channel"),
            "shortViewCountText": cls.accessible("10 views"),
        }}

    @classmethod
    def next(cls, video_id: str, related: List[str], token: Optional[str] = None) -> Dict[str, Any]:
        results = [cls.compact_video(v) for v in related]
        if token is not None:
            results.append(cls.continuation_item(token))
        return {
            "currentVideoEndpoint": {"watchEndpoint": {"videoId": video_id}},
            "engagementPanels": [],
            "playerOverlays": {"playerOverlayRenderer": {"autoplay": {
                "playerOverlayAutoplayRenderer": {
                    "videoId": "autoplay",
                    "videoTitle": {"simpleText": "Up next"},
                    "byline": cls.runs("Another channel"),
                    "publishedTimeText": {"simpleText": "1 day ago"},
                    "shortViewCountText": cls.accessible("5 views"),
                },
            }}},
            "contents": {"twoColumnWatchNextResults": {"secondaryResults": {
                "secondaryResults": {"results": results},
            }}},
        }

    @classmethod
    def comment(cls, author: str, text: str, **extra: Any) -> Dict[str, Any]:
        renderer = {
            "authorText": {"simpleText": author},
            "contentText": cls.runs(text),
            "publishedTimeText": cls.runs("2 days ago"),
            "authorIsChannelOwner": False,
        }
        renderer.update(extra)
        return {"commentRenderer": renderer}

    @classmethod
    def comments(cls, threads: List[Dict[str, Any]], token: Optional[str] = None,
                 reload: bool = True) -> Dict[str, Any]:
        items: List[Any] = [{"commentsHeaderRenderer": {}}] if reload else []
        items += threads
        if token is not None:
            items.append(cls.continuation_item(token))
        action = "reloadContinuationItemsCommand" if reload else "appendContinuationItemsAction"
        return {"onResponseReceivedEndpoints": [{action: {"continuationItems": items}}]}


@pytest.fixture
def payloads():
    return Payloads


class FakeApi:
    """Stands in for InnerTubeClient, answering from canned payloads and recording calls."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.home_html = Payloads.home_page(["home1", "home2"], "home-token")
        self.responses: Dict[tuple, Any] = {}

    def add(self, key: tuple, payload: Any):
        self.responses[key] = payload

    def _answer(self, key: tuple) -> Any:
        self.calls.append(key)
        try:
            return self.responses[key]
        except KeyError:
            raise AssertionError(f"Unexpected request {key}") from None

    def home_page(self) -> str:
        self.calls.append(("home",))
        return self.home_html

    def browse(self, continuation=None, browse_id=None, params=None):
        return self._answer(("browse", continuation, browse_id, params))

    def search(self, query, params=None):
        return self._answer(("search", query, params))

    def search_continuation(self, continuation):
        return self._answer(("search_continuation", continuation))

    def next(self, video_id):
        return self._answer(("next", video_id))

    def next_continuation(self, continuation, visitor=False):
        return self._answer(("next_continuation", continuation))

    def transcript(self, params):
        return self._answer(("transcript", params))

    def player(self, video_id):
        return self._answer(("player", video_id))

    def watch_page(self, video_id):
        return self._answer(("watch", video_id))

    def player_script(self, path):
        return self._answer(("script", path))


@pytest.fixture
def fake_api():
    return FakeApi()


class FakeEngine:
    """A script engine whose functions are Python callables."""

    def __init__(self, functions: Dict[str, Callable[[str], str]]):
        self.functions = functions
        self.calls: List[tuple] = []

    def call(self, name: str, arg: str) -> str:
        self.calls.append((name, arg))
        return self.functions[name](arg)


@pytest.fixture
def fake_engine():
    return FakeEngine


@pytest.fixture
def reversing_engine():
    """Both functions reverse their input."""
    return FakeEngine({"ncode": lambda s: s[::-1], "sigcode": lambda s: s[::-1]})


def make_format(is_video=True, bitrate=1000, height=480, mime_type="video/mp4; codecs=\"avc1\"",
                url="https://media.example/video?id=1", audio_track=None, signature_cipher=None):
    return AdaptiveFormat(
        is_video=is_video,
        bitrate=bitrate,
        mime_type=mime_type,
        url=url,
        signature_cipher=signature_cipher,
        height=height if is_video else None,
        audio_track=audio_track,
    )


@pytest.fixture
def video_format():
    return make_format


@pytest.fixture
def audio_format():
    def make(bitrate=128, mime_type="audio/webm; codecs=\"opus\"", audio_track=None,
             url="https://media.example/audio?id=1", signature_cipher=None):
        return make_format(False, bitrate, None, mime_type, url, audio_track, signature_cipher)
    return make


@pytest.fixture
def summary():
    return VideoSummary(
        title="A video",
        description="About the video",
        length_seconds=125,
        is_family_safe=True,
        is_unlisted=False,
        view_count="1234",
        category="Music",
        owner_channel_name="Some channel",
        upload_date="2024-01-01",
    )


@pytest.fixture
def player_response(summary, video_format, audio_format):
    return PlayerResponse(
        video_id="abc",
        summary=summary,
        formats=[
            video_format(bitrate=1000, height=720, url="https://media.example/v?x=1&n=AB12&foo=1"),
            video_format(bitrate=500, height=360, url="https://media.example/v?x=2&n=AB12"),
            audio_format(bitrate=128, audio_track="English",
                         url="https://media.example/a?id=1&n=AB12&y=2"),
            audio_format(bitrate=64, audio_track="French",
                         url="https://media.example/a?id=2&n=AB12&y=3"),
        ],
    )
