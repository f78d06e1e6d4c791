import pytest

from src.snapshot_service.youtube.youtube_ids import extract_video_id

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ?si=share", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ#comments", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("youtube.com/watch?v=abc", "abc"),
    ],
)
def test_recognised_urls(url: str, expected: str) -> None:
    assert extract_video_id(url) == expected


@pytest.mark.parametrize(
    "url",
    ["", "https://vimeo.com/12345", "https://www.youtube.com/watch", "https://www.youtube.com/channel/UC123", "not a url"],
)
def test_unrecognised_urls(url: str) -> None:
    assert extract_video_id(url) is None
