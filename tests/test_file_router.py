"""Tests for request routing — precedence, path decoding, error mapping."""

import random
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from rfs.errors import EmptySetError, FileIOError, NotFoundError
from rfs.schemas.files import FileEntry
from rfs.services.file_cache import FileCache
from rfs.services.file_router import (
    FileReply,
    FileRouter,
    ListingReply,
    NoReply,
    decode_file_path,
    parse_page,
)
from rfs.services.selector import Selector


@pytest.fixture
def cache(files_dir, clock):
    return FileCache(files_dir, ttl=300, clock=clock)


@pytest.fixture
def router(cache):
    return FileRouter(cache, Selector(rng=random.Random(7)), listing_path="/list/")


@pytest.fixture
def plain_router(cache):
    """Listing disabled: everything but the favicon is random."""
    return FileRouter(cache, Selector(rng=random.Random(8)))


class TestHelpers:
    def test_decode_spaces(self):
        assert decode_file_path("files/my%20cat.png") == "files/my cat.png"

    def test_decode_drops_plus(self):
        assert decode_file_path("files/a+b.png") == "files/ab.png"

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("", 1),
            ("page=3", 3),
            ("sort=x&page=2", 2),
            ("page=abc", 1),
            ("page=", 1),
            ("page=-4", -4),
        ],
    )
    def test_parse_page(self, query, expected):
        assert parse_page(query) == expected


class TestPrecedence:
    def test_favicon_ignored(self, router, plain_router):
        assert router.handle("/favicon.ico") == NoReply(reason="favicon")
        assert plain_router.handle("/favicon.ico?v=2") == NoReply(reason="favicon")

    def test_random_by_default(self, router):
        reply = router.handle("/")
        assert isinstance(reply, FileReply)
        assert reply.entry.path.startswith("files/img")
        assert reply.stat.st_size == reply.entry.size

    def test_any_other_path_is_random(self, router):
        assert isinstance(router.handle("/whatever/else"), FileReply)

    def test_listing_route(self, router):
        reply = router.handle("/list", "page=1")
        assert isinstance(reply, ListingReply)
        assert "3 total files" in reply.html

    def test_listing_route_ignores_slashes(self, router):
        assert isinstance(router.handle("/list/"), ListingReply)

    def test_listing_page_clamped(self, router):
        reply = router.handle("/list", "page=0")
        assert '<a class="current">1</a>' in reply.html

    def test_explicit_file(self, router):
        reply = router.handle("/files/img2.png")
        assert isinstance(reply, FileReply)
        assert reply.entry.path == "files/img2.png"

    def test_listing_disabled_means_random(self, plain_router):
        assert not plain_router.listing_enabled
        assert isinstance(plain_router.handle("/list"), FileReply)
        reply = plain_router.handle("/files/does-not-exist.png")
        assert isinstance(reply, FileReply)


class TestExplicitDecoding:
    def test_percent_space(self, router, files_dir):
        (files_dir / "my cat.png").write_bytes(b"meow")
        router.cache.refresh()
        reply = router.handle("/files/my%20cat.png")
        assert reply.entry.path == "files/my cat.png"

    def test_plus_is_removed_not_a_space(self, router, files_dir):
        (files_dir / "a+b.png").write_bytes(b"plus")
        (files_dir / "ab.png").write_bytes(b"joined")
        (files_dir / "a b.png").write_bytes(b"space")
        router.cache.refresh()

        reply = router.handle("/files/a+b.png")
        assert reply.entry.path == "files/ab.png"

    def test_plus_named_file_unreachable(self, router, files_dir):
        (files_dir / "x+y.png").write_bytes(b"plus")
        router.cache.refresh()
        with pytest.raises(NotFoundError):
            router.handle("/files/x+y.png")


class TestErrors:
    def test_not_found(self, router):
        with pytest.raises(NotFoundError):
            router.handle("/files/missing.png")
        assert router.dispatch("/files/missing.png") == NoReply(reason="not_found")

    def test_empty_directory(self, tmp_path, clock):
        empty = tmp_path / "files"
        empty.mkdir()
        router = FileRouter(FileCache(empty, clock=clock), Selector(), listing_path="list")

        with pytest.raises(EmptySetError):
            router.handle("/")
        assert router.dispatch("/") == NoReply(reason="empty")
        assert router.dispatch("/list") == NoReply(reason="empty")
        assert router.dispatch("/files/img1.png") == NoReply(reason="empty")

    def test_file_deleted_after_scan(self, tmp_path, clock):
        directory = tmp_path / "files"
        directory.mkdir()
        (directory / "only.txt").write_text("hi")
        router = FileRouter(FileCache(directory, clock=clock), Selector())
        router.cache.snapshot()

        (directory / "only.txt").unlink()
        with pytest.raises(FileIOError):
            router.handle("/")
        assert router.dispatch("/") == NoReply(reason="io")

    def test_dispatch_logs_errors(self, router, caplog):
        with caplog.at_level("ERROR"):
            router.dispatch("/files/missing.png")
        assert "Error while processing request" in caplog.text


class TestNonRepeatThroughRouter:
    def test_round_covers_all_files(self, cache):
        router = FileRouter(cache, Selector(non_repeat=True, rng=random.Random(9)))
        served = [router.handle("/").entry.path for _ in range(3)]
        assert sorted(served) == ["files/img1.png", "files/img10.png", "files/img2.png"]


class RecordingSelector(Selector):
    """Selector that logs the order picks were made in."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.picked = []

    def pick(self, snapshot):
        entry = super().pick(snapshot)
        self.picked.append(entry.path)
        return entry


class TestConcurrentRequests:
    def test_rounds_stay_complete_and_scan_once(self, files_dir, clock):
        real_from_disk = FileEntry.from_disk
        selector = RecordingSelector(non_repeat=True, rng=random.Random(10))
        files = 3
        rounds = 40

        with patch("rfs.services.file_cache.FileEntry") as mock_entry:
            mock_entry.from_disk.side_effect = real_from_disk
            router = FileRouter(FileCache(files_dir, ttl=300, clock=clock), selector)

            with ThreadPoolExecutor(max_workers=8) as pool:
                replies = list(pool.map(lambda _: router.dispatch("/"), range(files * rounds)))

        assert all(isinstance(reply, FileReply) for reply in replies)
        # One directory scan within the TTL, one from_disk call per file
        assert mock_entry.from_disk.call_count == files

        picked = selector.picked
        assert len(picked) == files * rounds
        for start in range(0, len(picked), files):
            assert sorted(picked[start:start + files]) == [
                "files/img1.png",
                "files/img10.png",
                "files/img2.png",
            ]
