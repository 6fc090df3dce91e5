import threading
from concurrent.futures import ThreadPoolExecutor

from filedrop.services.registry import KeyPathRegistry, new_key


def test_lookup_of_unknown_key_is_none():
    reg = KeyPathRegistry()
    assert reg.lookup("nope") is None
    assert "nope" not in reg
    assert len(reg) == 0


def test_insert_then_lookup_sees_own_write():
    reg = KeyPathRegistry()
    reg.insert("k", "uploads/a.txt")
    assert reg.lookup("k") == "uploads/a.txt"
    assert "k" in reg


def test_later_insert_overwrites():
    reg = KeyPathRegistry()
    reg.insert("k", "uploads/a.txt")
    reg.insert("k", "uploads/b.txt")
    assert reg.lookup("k") == "uploads/b.txt"
    assert len(reg) == 1


def test_repeated_lookup_is_stable():
    reg = KeyPathRegistry()
    reg.insert("k", "uploads/a.txt")
    assert {reg.lookup("k") for _ in range(100)} == {"uploads/a.txt"}
    assert {reg.lookup("missing") for _ in range(100)} == {None}


def test_keys_returns_a_snapshot():
    reg = KeyPathRegistry()
    reg.insert("a", "1")
    snapshot = reg.keys()
    reg.insert("b", "2")
    assert snapshot == ["a"]
    assert sorted(reg.keys()) == ["a", "b"]


def test_concurrent_inserts_on_disjoint_keys():
    reg = KeyPathRegistry()

    def worker(n: int):
        mine = {f"t{n}-{i}": f"/data/t{n}/{i}" for i in range(200)}
        for k, p in mine.items():
            reg.insert(k, p)
        return mine

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(worker, range(16)))

    assert len(reg) == 16 * 200
    for mine in results:
        for k, p in mine.items():
            assert reg.lookup(k) == p


def test_readers_never_see_partial_entries():
    reg = KeyPathRegistry()
    stop = threading.Event()
    seen = []

    def reader():
        while not stop.is_set():
            for i in range(50):
                value = reg.lookup(f"k{i}")
                if value is not None:
                    seen.append(value)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    for i in range(50):
        reg.insert(f"k{i}", f"/data/file-{i}")
    stop.set()
    for t in readers:
        t.join()

    valid = {f"/data/file-{i}" for i in range(50)}
    assert set(seen) <= valid


def test_new_key_is_hex_and_unique():
    keys = {new_key() for _ in range(1000)}
    assert len(keys) == 1000
    for k in keys:
        assert len(k) == 32
        int(k, 16)
