"""Map FFprobe container descriptions onto MIME types."""

from __future__ import annotations

from typing import Any, Optional

_MP4_FAMILY = "mov,mp4,m4a,3gp,3g2,mj2"
_MATROSKA_FAMILY = "matroska,webm"

_WEBM_VIDEO_CODECS = {"vp8", "vp9", "av1"}
_WEBM_AUDIO_CODECS = {"opus", "vorbis"}

_SIMPLE_FORMATS = {
    "avi": "video/x-msvideo",
    "asf": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "mpeg": "video/mpeg",
    "mpegts": "video/mp2ts",
    "mp3": "audio/mpeg",
    "wav": "audio/x-wav",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "amr": "audio/amr",
}

_EXTENSIONS = {
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/3gpp": "3gp",
    "video/quicktime": "mov",
    "video/x-msvideo": "avi",
    "video/x-matroska": "mkv",
    "video/x-ms-wmv": "wmv",
    "video/x-flv": "flv",
    "video/mpeg": "mpg",
}


def _codecs(metadata: dict[str, Any], codec_type: str) -> set[str]:
    return {
        stream.get("codec_name", "")
        for stream in metadata.get("streams", [])
        if stream.get("codec_type") == codec_type
    }


def _mp4_family_mime(metadata: dict[str, Any]) -> str:
    tags = metadata.get("format", {}).get("tags") or {}
    brand = str(tags.get("major_brand", "")).strip().lower()
    if brand.startswith("qt"):
        return "video/quicktime"
    if brand.startswith("3g2"):
        return "video/3gpp2"
    if brand.startswith("3gp"):
        return "video/3gpp"
    if not _codecs(metadata, "video"):
        return "audio/mp4"
    return "video/mp4"


def _matroska_family_mime(metadata: dict[str, Any]) -> str:
    video = _codecs(metadata, "video")
    audio = _codecs(metadata, "audio")
    if video <= _WEBM_VIDEO_CODECS and audio <= _WEBM_AUDIO_CODECS and (video or audio):
        return "video/webm" if video else "audio/webm"
    return "video/x-matroska"


def mime_type_for(metadata: dict[str, Any]) -> Optional[str]:
    """Return the MIME type for an FFprobe ``-show_format -show_streams`` result.

    FFprobe reports demuxer names rather than MIME types, and several
    demuxers cover more than one container. Those are resolved using the
    brand tag or the stream codecs. Unrecognised containers yield ``None``.
    """

    format_name = metadata.get("format", {}).get("format_name")
    if not format_name:
        return None
    if format_name == _MP4_FAMILY:
        return _mp4_family_mime(metadata)
    if format_name == _MATROSKA_FAMILY:
        return _matroska_family_mime(metadata)
    if format_name == "ogg":
        return "video/ogg" if _codecs(metadata, "video") else "audio/ogg"

    for name in format_name.split(","):
        mime_type = _SIMPLE_FORMATS.get(name)
        if mime_type:
            return mime_type
    return None


def extension_for_mime_type(mime_type: Optional[str]) -> str:
    """File extension used for temp files of the given MIME type (defaults to mp4)."""

    if not mime_type:
        return "mp4"
    return _EXTENSIONS.get(mime_type.split(";", 1)[0].strip().lower(), "mp4")
