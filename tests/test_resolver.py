"""Tests for stream resolution and the session's stream resolver."""

import json

import pytest

from vidbrowse.core.errors import SelectionError, UnavailableError
from vidbrowse.core.models import CaptionTrack, LiveStream, ResolvedStreams
from vidbrowse.core.resolver import (
    DAY, MONTH, YEAR, StreamResolver, resolve, seconds_to_human, summary_text,
)
from vidbrowse.core.selector import Bitrate, ClosestTo, Highest, Language, Lowest, Quality

VIDEO_POLICY = [Quality(ClosestTo(720)), Bitrate(Lowest())]
AUDIO_POLICY = [Language("English"), Bitrate(Lowest())]

PLAYER_JS = (
    'Kla=function(a){var b=a.split("");b.reverse();return b.join("")};\n'
    "g.Q=function(){return 1};\n"
    'Xyz=function(a){a=a.split("");VF.wa(a,0);return a.join("")};\n'
)
PLAYER_PATH = "/s/player/12ab34cd/player_ias.vflset/en_US/base.js"


def player_json(video_id, streaming=True):
    data = {
        "responseContext": {},
        "videoDetails": {"videoId": video_id},
        "microformat": {"playerMicroformatRenderer": {
            "title": {"simpleText": f"Video {video_id}"},
            "lengthSeconds": "61",
            "isFamilySafe": True,
            "isUnlisted": False,
            "viewCount": "10",
            "category": "Music",
            "ownerChannelName": "Some channel",
            "uploadDate": "2024-01-01",
        }},
    }
    if streaming:
        data["streamingData"] = {"adaptiveFormats": [
            {"bitrate": 1000, "height": 720, "mimeType": "video/mp4",
             "url": f"https://m.example/v?id={video_id}&n=abc"},
            {"bitrate": 128, "mimeType": "audio/mp4", "audioTrack": {"displayName": "English"},
             "url": f"https://m.example/a?id={video_id}&n=abc&x=1"},
        ]}
    else:
        data["playabilityStatus"] = {"reason": "Sign in to confirm your age"}
    return data


def watch_page(video_id, embedded=True):
    page = f'<html><script src="{PLAYER_PATH}" nonce="x"></script>'
    if embedded:
        page += f"<script>var ytInitialPlayerResponse = {json.dumps(player_json(video_id))};"
        page += "var meta = 1;</script>"
    return page + "</html>"


# --- seconds_to_human ---


@pytest.mark.parametrize("seconds,expected", [
    (0, "0 Seconds"),
    (59, "59 Seconds"),
    (60, "1 Minutes"),
    (125, "2 Minutes"),
    (3599, "59 Minutes"),
    (3600, "1 Hours"),
    (DAY, "1 Days"),
    (MONTH - 1, "29 Days"),
    (MONTH, "1 Months"),
    (YEAR - 1, "12 Months"),
    (YEAR, "1 Years"),
    (3 * YEAR, "3 Years"),
])
def test_seconds_to_human(seconds, expected):
    assert seconds_to_human(seconds) == expected


def test_summary_text(summary):
    text = summary_text(summary)
    assert text.splitlines()[:2] == ["Title: A video", "Description: About the video"]
    assert "Length: 2 Minutes" in text
    assert "Family friendly" in text
    assert "Not unlisted" in text
    assert "Uploader: Some channel" in text
    assert "Uploaded: 2024-01-01" in text


def test_summary_text_without_description(summary):
    summary.description = None
    assert "Description" not in summary_text(summary)


# --- resolve ---


def test_resolve_picks_and_descrambles(player_response, reversing_engine):
    streams = resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine)
    assert isinstance(streams, ResolvedStreams)
    assert streams.video_url == "https://media.example/v?x=1&n=21BA&foo=1"
    assert streams.audio_url == "https://media.example/a?id=1&n=21BA&y=2"
    assert streams.subtitle_url is None


def test_resolve_solves_shared_n_once(player_response, reversing_engine):
    resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine)
    assert reversing_engine.calls == [("ncode", "AB12")]


def test_resolve_with_other_policy(player_response, reversing_engine):
    streams = resolve(player_response, [Bitrate(Lowest())], [Bitrate(Highest())], reversing_engine)
    assert streams.video_url.startswith("https://media.example/v?x=2")
    assert streams.audio_url.endswith("y=2")


def test_resolve_ciphered_format(player_response, reversing_engine, audio_format):
    player_response.formats = [
        player_response.formats[0],
        audio_format(url=None, signature_cipher="s=XYZ&sp=sig&url=https%3A%2F%2Fm%2Fa%3Fn%3Dqq"),
    ]
    streams = resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine)
    assert streams.audio_url == "https://m/a?n=qq&sig=ZYX"


def test_resolve_live_stream(player_response, reversing_engine):
    player_response.hls_manifest_url = "https://m/live.m3u8"
    streams = resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine)
    assert streams == LiveStream("https://m/live.m3u8")
    assert reversing_engine.calls == []


def test_resolve_matching_captions(player_response, reversing_engine):
    player_response.captions = [
        CaptionTrack("French", "https://m/fr.vtt"),
        CaptionTrack("English", "https://m/en.vtt"),
    ]
    streams = resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine, "English")
    assert streams.subtitle_url == "https://m/en.vtt"


def test_resolve_captions_case_sensitive(player_response, reversing_engine):
    player_response.captions = [CaptionTrack("English", "https://m/en.vtt")]
    streams = resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine, "english")
    assert streams.subtitle_url is None


def test_resolve_without_audio(player_response, reversing_engine):
    player_response.formats = [f for f in player_response.formats if f.is_video]
    with pytest.raises(SelectionError):
        resolve(player_response, VIDEO_POLICY, AUDIO_POLICY, reversing_engine)


# --- StreamResolver ---


@pytest.fixture
def resolver(fake_api):
    fake_api.add(("watch", "first"), watch_page("first"))
    fake_api.add(("script", PLAYER_PATH), PLAYER_JS)
    fake_api.add(("player", "second"), player_json("second"))
    return StreamResolver(fake_api, VIDEO_POLICY, AUDIO_POLICY)


def test_first_video_loads_player_script(resolver, fake_api):
    playback = resolver.play("first")
    assert fake_api.calls == [("watch", "first"), ("script", PLAYER_PATH)]
    assert playback.summary.title == "Video first"
    assert playback.streams.video_url == "https://m.example/v?id=first&n=cba"
    assert playback.streams.audio_url == "https://m.example/a?id=first&n=cba&x=1"


def test_later_videos_reuse_engine(resolver, fake_api):
    resolver.play("first")
    engine = resolver.engine
    playback = resolver.play("second")
    assert resolver.engine is engine
    assert fake_api.calls[2:] == [("player", "second")]
    assert playback.streams.video_url == "https://m.example/v?id=second&n=cba"


def test_unavailable_video_from_api(resolver, fake_api):
    resolver.play("first")
    fake_api.add(("player", "restricted"), player_json("restricted", streaming=False))
    with pytest.raises(UnavailableError, match="Sign in"):
        resolver.play("restricted")


def test_watch_page_without_player_response(fake_api):
    fake_api.add(("watch", "restricted"), watch_page("restricted", embedded=False))
    fake_api.add(("script", PLAYER_PATH), PLAYER_JS)
    resolver = StreamResolver(fake_api, VIDEO_POLICY, AUDIO_POLICY)
    with pytest.raises(UnavailableError):
        resolver.play("restricted")
    # The player functions are kept for the next video
    assert resolver.engine is not None
