import random
import threading

import pytest

from scrapbox_tabs import NotFound, Session, SessionRegistry


def test_locate_returns_latest_uri(registry):
    registry.open("a", "https://scrapbox.io/p/One")
    registry.navigate("a", "https://scrapbox.io/p/Two")
    assert registry.locate("a") == "https://scrapbox.io/p/Two"


def test_open_overwrites(registry):
    registry.open("a", "https://scrapbox.io/p/One", title="One")
    registry.open("a", "https://scrapbox.io/p/Two")
    assert registry.get("a") == Session("a", "https://scrapbox.io/p/Two")
    assert len(registry) == 1


def test_close_then_locate_is_not_found(registry):
    registry.open("a", "https://scrapbox.io/p")
    assert registry.close("a") is True
    with pytest.raises(NotFound):
        registry.locate("a")


def test_close_unknown_is_noop(registry):
    registry.open("a", "https://scrapbox.io/p")
    assert registry.close("zzz") is False
    assert registry.keys() == ["a"]


def test_navigate_unknown_changes_nothing(registry):
    registry.open("a", "https://scrapbox.io/p")
    with pytest.raises(NotFound) as exc:
        registry.navigate("b", "https://scrapbox.io/q")
    assert exc.value.key == "b"
    assert list(registry.list()) == [("a", "https://scrapbox.io/p")]


def test_list_is_a_snapshot_in_open_order(registry):
    registry.open("b", "u-b")
    registry.open("a", "u-a")
    listing = registry.list()
    registry.close("b")
    assert list(listing) == [("b", "u-b"), ("a", "u-a")]


def test_navigate_drops_title_only_when_uri_changes(registry):
    registry.open("a", "https://scrapbox.io/p/One", title="One")
    registry.navigate("a", "https://scrapbox.io/p/One")
    assert registry.get("a").title == "One"
    registry.navigate("a", "https://scrapbox.io/p/Two")
    assert registry.get("a").title is None


def test_record_ignores_closed_sessions(registry):
    assert registry.record("a", "https://scrapbox.io/p", "P") is False
    assert "a" not in registry
    registry.open("a", "https://scrapbox.io/p")
    assert registry.record("a", "https://scrapbox.io/p/X", "X") is True
    assert registry.get("a") == Session("a", "https://scrapbox.io/p/X", "X")


@pytest.mark.parametrize("uri,expected", [
    ("https://scrapbox.io/help/Hello_World", "Hello World"),
    ("https://scrapbox.io/help/%E3%83%98%E3%83%AB%E3%83%97", "ヘルプ"),
    ("https://scrapbox.io/help/", "help"),
    ("https://scrapbox.io/", "scrapbox.io"),
])
def test_display_title_fallback(uri, expected):
    assert Session("a", uri).display_title == expected
    assert Session("a", uri, title="  ").display_title == expected
    assert Session("a", uri, title="Given").display_title == "Given"


def test_replayed_history_matches_last_write():
    registry = SessionRegistry()
    expected: dict[str, str] = {}
    rng = random.Random(7)
    for i in range(500):
        key = rng.choice("abcd")
        op = rng.choice(["open", "close", "navigate"])
        uri = f"https://scrapbox.io/p/{i}"
        if op == "open":
            registry.open(key, uri)
            expected[key] = uri
        elif op == "close":
            registry.close(key)
            expected.pop(key, None)
        elif key in expected:
            registry.navigate(key, uri)
            expected[key] = uri
        else:
            with pytest.raises(NotFound):
                registry.navigate(key, uri)
    for key in "abcd":
        if key in expected:
            assert registry.locate(key) == expected[key]
        else:
            with pytest.raises(NotFound):
                registry.locate(key)


def test_concurrent_opens_all_land():
    registry = SessionRegistry()
    keys = [f"tab-{i}" for i in range(32)]
    threads = [threading.Thread(target=registry.open, args=(k, f"https://scrapbox.io/{k}")) for k in keys]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(k for k, _ in registry.list()) == sorted(keys)


def test_concurrent_navigates_leave_one_whole_value():
    registry = SessionRegistry()
    registry.open("a", "start")
    uris = {f"https://scrapbox.io/p/{i}" for i in range(2)}
    barrier = threading.Barrier(len(uris))

    def _navigate(uri: str) -> None:
        barrier.wait()
        for _ in range(200):
            registry.navigate("a", uri)

    threads = [threading.Thread(target=_navigate, args=(u,)) for u in uris]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert registry.locate("a") in uris
