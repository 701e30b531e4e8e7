# src/e2e/test_prefix_index.py
import pytest

from rtrie.DB.index import PrefixIndex
from rtrie.errors import InvalidArgument, StoreError

pytestmark = pytest.mark.asyncio


async def test_add_then_search_returns_value(index):
    await index.add("cat", {"name": "Cat"}, "1", 5)
    assert await index.search("cat") == [{"name": "Cat"}]
    assert await index.search("ca") == [{"name": "Cat"}]
    assert await index.search("c") == [{"name": "Cat"}]


async def test_add_writes_every_prefix_and_one_metadata_record(index, store):
    parts = await index.add("cat", {"n": 1}, "1", 2)
    assert parts == ["c", "ca", "cat"]
    for p in parts:
        assert store.zscore("trie:index:" + p, "1") == 2
    assert store.hget("trie:metadata", "1") == '{"n": 1}'
    assert store.keys() == ["trie:index:c", "trie:index:ca", "trie:index:cat", "trie:metadata"]


async def test_each_call_is_one_batch(index, store):
    await index.add("new york", "x", "1")
    assert store.batches == 1
    await index.delete("new york", "1")
    assert store.batches == 2


async def test_results_ordered_by_priority_desc(index):
    await index.add("key", "A", "a", 3)
    await index.add("key", "B", "b", 1)
    await index.add("key", "C", "c", 2)
    assert await index.search("key", limit=3) == ["A", "C", "B"]


async def test_limit_returns_highest_priorities(index):
    for i in range(30):
        await index.add("item", {"i": i}, f"id{i}", i)
    rows = await index.search("item", limit=10)
    assert len(rows) == 10
    assert [r["i"] for r in rows] == list(range(29, 19, -1))


async def test_default_limit_is_20(index):
    for i in range(25):
        await index.add("item", i, str(i), i)
    assert len(await index.search("it")) == 20
    assert len(await index.search("it", limit=0)) == 20


async def test_readd_overwrites_priority_and_value(index, store):
    await index.add("dog", {"v": 1}, "d", 1)
    await index.add("dog", {"v": 2}, "d", 9)
    for p in ("d", "do", "dog"):
        assert await store.zrevrange("trie:index:" + p, 0, -1) == ["d"]
        assert store.zscore("trie:index:" + p, "d") == 9
    assert await index.search("do") == [{"v": 2}]


async def test_delete_removes_entries_and_metadata(index, store):
    await index.add("cat", {"n": 1}, "1")
    await index.add("car", {"n": 2}, "2")
    await index.delete("cat", "1")
    assert await index.search("ca") == [{"n": 2}]
    assert await index.search("cat") == []
    assert store.hget("trie:metadata", "1") is None
    assert "trie:index:cat" not in store.keys()


async def test_delete_drops_metadata_even_with_other_memberships(index):
    # id 1 is still a member of "car", but its metadata is gone
    await index.add("car", {"n": 1}, "1")
    await index.add("cat", {"n": 1}, "1")
    await index.delete("cat", "1")
    assert await index.search("car") == [None]


async def test_dangling_reference_is_none_in_place(index):
    await index.add("apple", "A", "a", 2)
    await index.add("apricot", "B", "b", 1)
    await index.delete("zzz", "a")  # removes metadata only
    assert await index.search("ap") == [None, "B"]


async def test_empty_result_skips_metadata_fetch(index, store):
    assert await index.search("nothing") == []
    assert store.calls == ["zrevrange"]


async def test_search_fetches_metadata_after_rank_query(index, store):
    await index.add("cat", 1, "1")
    await index.search("cat")
    assert store.calls == ["zrevrange", "hmget"]


async def test_multi_word_terms_are_found_by_any_word(index):
    await index.add("New York", "NY", "nyc")
    assert await index.search("new") == ["NY"]
    assert await index.search("yo") == ["NY"]
    # the lookup key is never split
    assert await index.search("new yo") == []


async def test_search_is_case_and_accent_insensitive(index):
    await index.add("Zürich", {"city": "Zürich"}, "zrh")
    assert await index.search("zur") == [{"city": "Zürich"}]
    assert await index.search("  ZÜRICH ") == [{"city": "Zürich"}]


async def test_ids_are_stored_as_strings(index, store):
    await index.add("one", "1", 1)
    assert store.zscore("trie:index:one", "1") == 0
    await index.delete("one", 1)
    assert await index.search("one") == []


async def test_zero_id_is_valid(index):
    await index.add("zero", "z", 0)
    assert await index.search("zero") == ["z"]
    await index.delete("zero", 0)
    assert await index.search("zero") == []


async def test_priority_none_defaults_to_zero(index, store):
    await index.add("k", "v", "1", None)
    assert store.zscore("trie:index:k", "1") == 0


async def test_empty_key_only_sets_metadata(index, store):
    assert await index.add("", {"x": 1}, "1") == []
    assert store.keys() == ["trie:metadata"]


async def test_custom_key_layout(store):
    idx = PrefixIndex(store, trie_key="t:", metadata_key="meta")
    await idx.add("ab", "v", "1")
    assert store.keys() == ["meta", "t:a", "t:ab"]
    assert await idx.search("a") == ["v"]


async def test_add_without_id_is_invalid(index, store):
    with pytest.raises(InvalidArgument):
        await index.add("key", {"v": 1})
    with pytest.raises(InvalidArgument):
        await index.add("key")
    assert store.batches == 0


async def test_delete_with_empty_id_or_key_is_invalid(index, store):
    with pytest.raises(InvalidArgument):
        await index.delete("key", "")
    with pytest.raises(InvalidArgument):
        await index.delete("", "1")
    with pytest.raises(InvalidArgument):
        await index.delete("key")
    assert store.batches == 0


async def test_search_with_empty_key_is_invalid(index, store):
    with pytest.raises(InvalidArgument):
        await index.search("")
    with pytest.raises(InvalidArgument):
        await index.search()
    assert store.calls == []


async def test_negative_limit_is_invalid(index):
    with pytest.raises(InvalidArgument):
        await index.search("a", limit=-1)


async def test_invalid_argument_is_a_value_error(index):
    with pytest.raises(ValueError):
        await index.search("")


async def test_unserializable_value_writes_nothing(index, store):
    cyclic: list = []
    cyclic.append(cyclic)
    with pytest.raises(StoreError):
        await index.add("loop", cyclic, "1")
    with pytest.raises(StoreError):
        await index.add("obj", object(), "2")
    assert store.batches == 0
    assert store.keys() == []


async def test_corrupt_metadata_raises_store_error(index, store):
    await index.add("bad", "ok", "1")
    store._hset("trie:metadata", "1", "{not json")
    with pytest.raises(StoreError):
        await index.search("bad")
