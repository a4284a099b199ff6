"""
Tests for the playlist rotation cursors
"""

from concurrent.futures import ThreadPoolExecutor

from eink_hub.rotation import RotationCursorTable


def test_rotation_sequence_wraps():
    rotation = RotationCursorTable()
    images = ["a", "b", "c"]

    served = [rotation.select("DEV123", images, "default") for _ in range(4)]

    assert served == ["a", "b", "c", "a"]


def test_rotation_empty_playlist_uses_default():
    rotation = RotationCursorTable()

    assert rotation.select("DEV123", [], "default") == "default"
    assert rotation.advance("DEV123", 0) is None
    assert rotation.peek("DEV123") == 0


def test_rotation_cursor_per_device():
    rotation = RotationCursorTable()

    assert rotation.select("AAAAAA", ["a", "b"], "default") == "a"
    assert rotation.select("BBBBBB", ["x", "y"], "default") == "x"
    assert rotation.select("AAAAAA", ["a", "b"], "default") == "b"


def test_rotation_shorter_playlist_wraps():
    rotation = RotationCursorTable()
    rotation.advance("DEV123", 3)
    rotation.advance("DEV123", 3)
    assert rotation.peek("DEV123") == 2

    # 2 mod 2 == 0
    assert rotation.select("DEV123", ["x", "y"], "default") == "x"
    assert rotation.select("DEV123", ["x", "y"], "default") == "y"


def test_rotation_concurrent_advances_are_distinct():
    """Parallel check-ins each observe their own index."""
    rotation = RotationCursorTable()
    requests = 50

    with ThreadPoolExecutor(max_workers=16) as pool:
        indices = list(pool.map(lambda _: rotation.advance("DEV123", 100), range(requests)))

    assert sorted(indices) == list(range(requests))
    assert rotation.peek("DEV123") == requests
