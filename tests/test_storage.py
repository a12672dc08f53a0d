from dailypuzzles.utils.storage import JsonFileStore, MemoryStore


def test_memory_store_copies_values():
    store = MemoryStore()
    state = {"grid": [1, 2, None]}
    store.save("daily_15_20251018", state)
    state["grid"].append(3)

    loaded = store.load("daily_15_20251018")
    assert loaded == {"grid": [1, 2, None]}
    loaded["grid"].clear()
    assert store.load("daily_15_20251018") == {"grid": [1, 2, None]}
    assert store.load("daily_15_20251019") is None


def test_json_store_round_trip(tmp_path):
    store = JsonFileStore(str(tmp_path / "state"))
    store.save("daily_15_20251018", {"moves": 3, "grid": [None, 1]})
    assert store.load("daily_15_20251018") == {"moves": 3, "grid": [None, 1]}
    assert (tmp_path / "state" / "daily_15_20251018.json").exists()


def test_json_store_last_write_wins(tmp_path):
    store = JsonFileStore(str(tmp_path))
    store.save("key", {"moves": 1})
    store.save("key", {"moves": 2})
    assert store.load("key") == {"moves": 2}


def test_json_store_missing_and_corrupt(tmp_path):
    store = JsonFileStore(str(tmp_path))
    assert store.load("absent") is None
    (tmp_path / "broken.json").write_text("{not json")
    assert store.load("broken") is None
    (tmp_path / "listy.json").write_text("[1, 2]")
    assert store.load("listy") is None


def test_json_store_sanitizes_keys(tmp_path):
    store = JsonFileStore(str(tmp_path))
    store.save("../escape/key", {"ok": True})
    assert store.load("../escape/key") == {"ok": True}
    assert not (tmp_path.parent / "escape").exists()
