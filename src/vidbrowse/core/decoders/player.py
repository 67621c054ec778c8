"""Decoder for player responses, the playable side of a video."""

from typing import Any, List

from ..errors import DecodeError, UnavailableError
from ..models import AdaptiveFormat, CaptionTrack, PlayerResponse, VideoSummary
from .base import get, get_list, opt, simple


def adaptive_format(data: Any) -> AdaptiveFormat:
    # Only video formats have a height
    is_video = "height" in data
    if "url" not in data and "signatureCipher" not in data:
        raise DecodeError("format has neither `url` nor `signatureCipher`", "adaptiveFormats")
    track = data.get("audioTrack")
    return AdaptiveFormat(
        is_video=is_video,
        bitrate=int(get(data, "bitrate")),
        mime_type=get(data, "mimeType"),
        url=data.get("url"),
        signature_cipher=data.get("signatureCipher"),
        height=int(data["height"]) if is_video else None,
        audio_track=get(track, "displayName") if track is not None else None,
    )


def summary(data: Any) -> VideoSummary:
    micro = get(data, "microformat", "playerMicroformatRenderer")
    description = micro.get("description")
    return VideoSummary(
        title=simple(get(micro, "title")),
        description=simple(description) if description is not None else None,
        length_seconds=int(get(micro, "lengthSeconds")),
        is_family_safe=bool(get(micro, "isFamilySafe")),
        is_unlisted=bool(get(micro, "isUnlisted")),
        view_count=get(micro, "viewCount"),
        category=get(micro, "category"),
        owner_channel_name=get(micro, "ownerChannelName"),
        upload_date=get(micro, "uploadDate"),
    )


def captions(data: Any) -> List[CaptionTrack]:
    tracks = opt(data, "captions", "playerCaptionsTracklistRenderer", "captionTracks", default=[])
    return [CaptionTrack(simple(get(track, "name")), get(track, "baseUrl")) for track in tracks]


def decode_player(data: Any) -> PlayerResponse:
    """Raises UnavailableError when there is nothing to play, e.g. age restricted videos."""
    streaming = data.get("streamingData") if isinstance(data, dict) else None
    if streaming is None:
        status = opt(data, "playabilityStatus", "reason")
        raise UnavailableError(status)

    response = PlayerResponse(
        video_id=get(data, "videoDetails", "videoId"),
        summary=summary(data),
        captions=captions(data),
    )
    # Streams only need the manifest, the player handles the rest
    if "hlsManifestUrl" in streaming:
        response.hls_manifest_url = streaming["hlsManifestUrl"]
        return response
    if "adaptiveFormats" not in streaming:
        raise DecodeError("missing field `adaptiveFormats`", "streamingData")
    response.formats = [adaptive_format(f) for f in get_list(streaming, "adaptiveFormats")]
    return response
