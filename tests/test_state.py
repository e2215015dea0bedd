import random

from statusdog.catalog import HTTP_CODES
from statusdog.models import SavedList
from statusdog.state import Mutation, SavedListCache, TempSelectionStore
from statusdog.storage import SAVED_LIST_KEY, TEMP_LIST_KEY


class TestTempSelectionStore:
    def test_no_duplicates_after_any_sequence(self):
        rng = random.Random(1234)
        for _ in range(200):
            store = TempSelectionStore()
            for _ in range(rng.randint(1, 15)):
                if rng.random() < 0.5:
                    store.add(rng.choice(HTTP_CODES))
                else:
                    store.add_all(rng.choices(HTTP_CODES, k=rng.randint(0, 6)))
            assert len(store.codes) == len(set(store.codes))

    def test_add_is_idempotent(self):
        store = TempSelectionStore()
        assert store.add("200") is True
        assert store.add("200") is False
        assert store.codes == ["200"]

    def test_add_all_keeps_first_seen_order(self):
        store = TempSelectionStore(["404"])
        assert store.add_all(["200", "404", "201", "200"]) == 2
        assert store.codes == ["404", "200", "201"]

    def test_remove(self):
        store = TempSelectionStore(["200", "404"])
        assert store.remove("200") is True
        assert store.remove("500") is False
        assert store.codes == ["404"]
        assert "404" in store and "200" not in store

    def test_remove_all_needs_confirmation(self):
        store = TempSelectionStore(["200", "404"])
        assert store.remove_all(lambda: False) is False
        assert store.codes == ["200", "404"]
        assert store.remove_all(lambda: True) is True
        assert store.codes == []

    def test_listeners_get_tagged_snapshots(self):
        store = TempSelectionStore()
        seen = []
        store.subscribe(lambda mutation, codes: seen.append((mutation, codes)))
        store.add("200")
        store.add("200")                 # no-op, no notification
        store.remove_all(lambda: False)  # declined, no notification
        store.clear()
        assert seen == [(Mutation.LOCAL_ONLY, ["200"]), (Mutation.SERVER_CONFIRMED, [])]

    def test_unsubscribe(self):
        store = TempSelectionStore()
        seen = []
        unsubscribe = store.subscribe(lambda mutation, codes: seen.append(codes))
        unsubscribe()
        store.add("200")
        assert seen == []

    def test_restore_reproduces_the_persisted_sequence(self, storage):
        store = TempSelectionStore.restore(storage)
        store.add_all(["503", "200", "404"])
        store.remove("200")
        store.add("101")

        reloaded = TempSelectionStore.restore(storage)
        assert reloaded.codes == ["503", "404", "101"]
        assert storage.get(TEMP_LIST_KEY) == ["503", "404", "101"]

    def test_restore_drops_stored_duplicates_and_garbage(self, storage):
        storage.set(TEMP_LIST_KEY, ["200", "200", "404"])
        assert TempSelectionStore.restore(storage).codes == ["200", "404"]
        storage.set(TEMP_LIST_KEY, {"not": "a list"})
        assert TempSelectionStore.restore(storage).codes == []


def _lists():
    return [
        SavedList("a", "First", ["200", "404"], "2026-10-01T08:00:00.000Z"),
        SavedList("b", "Second", ["500"], "2026-10-02T08:00:00.000Z"),
    ]


class TestSavedListCache:
    def test_remove_list(self):
        cache = SavedListCache(_lists())
        cache.remove_list("a")
        assert [saved.id for saved in cache.lists] == ["b"]
        assert cache.get("a") is None

    def test_remove_item(self):
        cache = SavedListCache(_lists())
        cache.remove_item("a", "404")
        assert cache.get("a").codes == ["200"]
        assert cache.get("b").codes == ["500"]

    def test_remove_item_prefers_backend_copy(self):
        cache = SavedListCache(_lists())
        updated = SavedList("a", "First (renamed)", ["200"])
        cache.remove_item("a", "404", updated)
        assert cache.get("a").name == "First (renamed)"

    def test_replace_swaps_the_whole_set(self):
        cache = SavedListCache(_lists())
        cache.replace([SavedList("c", "Third", ["301"])])
        assert [saved.id for saved in cache.lists] == ["c"]
        assert cache.get("a") is None

    def test_changes_are_persisted_and_restored(self, storage):
        cache = SavedListCache.restore(storage)
        cache.replace(_lists())
        cache.remove_item("a", "404")

        assert storage.get(SAVED_LIST_KEY)[0]["codes"] == ["200"]
        reloaded = SavedListCache.restore(storage)
        assert [saved.codes for saved in reloaded.lists] == [["200"], ["500"]]

    def test_server_mutations_are_tagged(self):
        cache = SavedListCache(_lists())
        seen = []
        cache.subscribe(lambda mutation, data: seen.append(mutation))
        cache.remove_list("b")
        cache.clear()
        assert seen == [Mutation.SERVER_CONFIRMED, Mutation.LOCAL_ONLY]
