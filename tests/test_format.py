import pytest

from mediafetch.core.errors import ParseFailure
from mediafetch.models.internal import RawFormat
from mediafetch.services.format import FormatNormalizer, quality_label, quality_value
from mediafetch.utils.duration import format_duration


def fmt(format_id, height=None, vcodec="avc1", note=None, ext="mp4"):
    record = {"format_id": format_id, "ext": ext, "vcodec": vcodec}
    if height is not None:
        record["height"] = height
    if note is not None:
        record["format_note"] = note
    return record


def test_audio_only_records_are_dropped():
    formats = FormatNormalizer.normalize([
        fmt("140", vcodec="none", note="medium"),
        fmt("18", height=360),
    ])
    assert [f.format_id for f in formats] == ["18"]


def test_duplicates_and_order():
    formats = FormatNormalizer.normalize([
        fmt("160", height=144),
        fmt("278", height=144, ext="webm"),
        fmt("136", height=720),
        fmt("sb", vcodec="images"),
    ])
    assert [f.quality for f in formats] == ["720p", "144p", "Unknown"]
    # First record seen for a quality wins
    assert formats[1].format_id == "160"
    assert formats[1].ext == "mp4"


def test_quality_labels_are_unique():
    formats = FormatNormalizer.normalize([
        fmt(str(i), height=h) for i, h in enumerate([1080, 720, 1080, 480, 720, 480, 240])
    ])
    labels = [f.quality for f in formats]
    assert len(labels) == len(set(labels))
    assert labels == ["1080p", "720p", "480p", "240p"]


def test_format_note_fallback_sorts_last():
    formats = FormatNormalizer.normalize([
        fmt("a", note="DASH video"),
        fmt("b", height=480),
        fmt("c"),
        fmt("d", height=2160),
    ])
    assert [f.quality for f in formats] == ["2160p", "480p", "DASH video", "Unknown"]


def test_float_height_and_ignored_bad_types():
    formats = FormatNormalizer.normalize([
        fmt("a", height=720.0),
        {"format_id": "b", "ext": "mp4", "vcodec": "avc1", "height": "1080", "format_note": 5},
    ])
    assert [f.quality for f in formats] == ["720p", "Unknown"]


def test_missing_format_id_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        FormatNormalizer.normalize([{"ext": "mp4", "vcodec": "avc1", "height": 360}])


def test_non_object_record_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        FormatNormalizer.normalize(["not-a-record"])


def test_empty_input():
    assert FormatNormalizer.normalize([]) == []


@pytest.mark.parametrize("label, value", [
    ("720p", 720),
    ("1080p60", 1080),
    ("Unknown", 0),
    ("DASH video", 0),
    ("360", 0),
    ("", 0),
])
def test_quality_value(label, value):
    assert quality_value(label) == value


def test_quality_label_prefers_height():
    record = RawFormat(format_id="1", ext="mp4", height=480, format_note="480p HD")
    assert quality_label(record) == "480p"


@pytest.mark.parametrize("seconds, expected", [
    (125, "2:05"),
    (59, "0:59"),
    (3600, "60:00"),
    (0, "0:00"),
    (61.9, "1:01"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.mark.parametrize("height", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_height_is_a_parse_failure(height):
    with pytest.raises(ParseFailure):
        FormatNormalizer.normalize([fmt("a", height=height)])
