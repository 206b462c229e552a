import numpy as np
import pandas as pd
import suite
from kollect import Collection, collect, K, times, wrap, unwrap, empty, ItemNotFoundError

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

sample_numbers = [1, 2, 3, 4, 5]


# --- construction ---

@test("construction from lists, dicts and scalars")
def test_construction_shapes():
    assert_that(Collection([1, 2, 3]).all() == [1, 2, 3], "list source")
    assert_that(Collection({'a': 1, 'b': 2}).all() == {'a': 1, 'b': 2}, "dict source")
    assert_that(Collection().all() == [], "no source gives an empty collection")
    assert_that(Collection('abc').all() == ['abc'], "strings are scalars")
    assert_that(Collection(5).all() == [5], "scalars are wrapped")
    assert_that(Collection(x * 2 for x in range(3)).all() == [0, 2, 4], "generators are consumed")


@test("construction from numpy and pandas")
def test_construction_numpy_pandas():
    assert_that(Collection(np.array([1, 2, 3])).all() == [1, 2, 3], "numpy array source")
    df = pd.DataFrame({'name': ['ann', 'bob'], 'age': [30, 25]})
    records = Collection(df).all()
    assert_that(records == [{'name': 'ann', 'age': 30}, {'name': 'bob', 'age': 25}], f"dataframe records: {records}")
    series = pd.Series([10, 20], index=['x', 'y'])
    assert_that(Collection(series).all() == {'x': 10, 'y': 20}, "series keeps its index")


@test("collections copy their source")
def test_construction_copies():
    source = [1, 2]
    c = Collection(source)
    c.push(3)
    assert_that(source == [1, 2], "the source list must not change")
    other = Collection(c)
    other.push(4)
    assert_that(c.all() == [1, 2, 3], "copying a collection must not alias it")


@test("all returns a dict once keys are not 0..n-1")
def test_all_shape():
    filtered = Collection([1, 2, 3]).filter(lambda v: v != 2)
    assert_that(filtered.all() == {0: 1, 2: 3}, f"keys are preserved: {filtered.all()}")
    assert_that(filtered.values().all() == [1, 3], "values() re-keys")


@test("factory functions")
def test_factories():
    assert_that(collect([1]).all() == [1] and K([2]).all() == [2], "collect and K")
    assert_that(times(3).all() == [1, 2, 3], "times without callback")
    assert_that(times(3, lambda n: n * n).all() == [1, 4, 9], "times with callback")
    assert_that(times(0).all() == [], "times(0) is empty")
    c = Collection([1])
    assert_that(wrap(c) is c and wrap([1]).all() == [1], "wrap")
    assert_that(unwrap(c) == [1] and unwrap('x') == 'x', "unwrap")
    assert_that(empty().is_empty(), "empty")


# --- python protocols ---

@test("len, in, indexing and equality")
def test_protocols():
    c = Collection(sample_numbers)
    assert_that(len(c) == 5, "len")
    assert_that(3 in c and 9 not in c, "value membership")
    assert_that(c[0] == 1 and c[1:3] == [2, 3], "indexing and slicing")
    assert_that(list(c) == sample_numbers, "iteration yields values")
    assert_that(c == Collection(sample_numbers), "collections compare by items")
    assert_that(Collection({'a': 1}) == {'a': 1}, "collections compare to dicts")
    c[5] = 6
    del c[0]
    assert_that(c.all() == {1: 2, 2: 3, 3: 4, 4: 5, 5: 6}, "set and delete items")


# --- key access and mutation ---

@test("put, set and push")
def test_put_push():
    c = Collection({'a': 1}).put('b', 2).set('c', 3)
    assert_that(c.all() == {'a': 1, 'b': 2, 'c': 3}, "put and set")
    numbers = Collection([1, 2]).push(3, 4)
    assert_that(numbers.all() == [1, 2, 3, 4], "push appends")
    mixed = Collection({'x': 'a', 5: 'b'}).push('c')
    assert_that(mixed.all() == {'x': 'a', 5: 'b', 6: 'c'}, "push uses the next integer key")


@test("prepend renumbers integer keys")
def test_prepend():
    assert_that(Collection([2, 3]).prepend(1).all() == [1, 2, 3], "prepend without key")
    keyed = Collection({'b': 2}).prepend(1, 'a')
    assert_that(list(keyed.keys()) == ['a', 'b'], "prepend with key goes first")


@test("pop removes from the end")
def test_pop():
    c = Collection(sample_numbers)
    assert_that(c.pop() == 5, "pop returns the last value")
    assert_that(c.pop(2).all() == [4, 3], "pop(2) returns the last two, most recent first")
    assert_that(c.all() == [1, 2], "popped values are removed")
    assert_that(Collection().pop() is None, "pop on empty gives None")
    assert_that(Collection().pop(3).all() == [], "pop(3) on empty gives an empty collection")


@test("shift removes from the front")
def test_shift():
    c = Collection(['a', 'b', 'c', 'd'])
    assert_that(c.shift() == 'a', "shift returns the first value")
    assert_that(c.all() == ['b', 'c', 'd'], "remaining keys are renumbered")
    assert_that(c.shift(2).all() == ['b', 'c'], "shift(2)")
    assert_that(Collection().shift() is None, "shift on empty gives None")
    assert_that(Collection().shift(2).all() == [], "shift(2) on empty gives an empty collection")


@test("pull, forget, except_ and only")
def test_removal():
    c = Collection({'a': 1, 'b': 2, 'c': 3})
    assert_that(c.pull('a') == 1 and 'a' not in c.all(), "pull removes the key")
    assert_that(c.pull('zzz', 'none') == 'none', "pull default")
    assert_that(c.except_('b').all() == {'c': 3}, "except_")
    assert_that(c.only('b').all() == {'b': 2}, "only")
    assert_that(c.forget('b', 'missing').all() == {'c': 3}, "forget ignores unknown keys")


@test("insert, remove and transform")
def test_insert_remove_transform():
    c = Collection([1, 2, 4]).insert(2, 3)
    assert_that(c.all() == [1, 2, 3, 4], f"insert: {c.all()}")
    assert_that(Collection([1, 2]).insert(-1, 9).all() == [1, 9, 2], "negative positions")
    assert_that(Collection([1, 2, 1]).remove(1).all() == {1: 2, 2: 1}, "remove deletes the first match")
    assert_that(Collection([1, 2]).transform(lambda v: v * 10).all() == [10, 20], "transform")


# --- higher order operations ---

@test("map, filter and reject pass the key when asked")
def test_map_filter_reject():
    c = Collection({'a': 1, 'b': 2, 'c': 3})
    assert_that(c.map(lambda v: v * 2).all() == {'a': 2, 'b': 4, 'c': 6}, "map keeps keys")
    assert_that(c.map(lambda v, k: f"{k}{v}").all() == {'a': 'a1', 'b': 'b2', 'c': 'c3'}, "map with key")
    assert_that(c.filter(lambda v: v > 1).all() == {'b': 2, 'c': 3}, "filter")
    assert_that(c.filter(lambda v, k: k == 'a').all() == {'a': 1}, "filter with key")
    assert_that(c.reject(lambda v: v > 1).all() == {'a': 1}, "reject")
    assert_that(Collection([0, 1, '', 'x', None]).filter().values().all() == [1, 'x'], "filter without callback")


@test("reduce folds with an initial value")
def test_reduce():
    assert_that(Collection(sample_numbers).reduce(lambda carry, v: carry + v, 0) == 15, "sum by reduce")
    keyed = Collection({'a': 1, 'b': 2}).reduce(lambda carry, v, k: carry + k * v, '')
    assert_that(keyed == 'abb', f"reduce with key: {keyed}")


@test("each stops when the callback returns False")
def test_each():
    seen = []
    Collection(sample_numbers).each(lambda v: seen.append(v) if v < 3 else False)
    assert_that(seen == [1, 2], f"each should stop at 3: {seen}")


@test("first, first_or_fail and last")
def test_first_last():
    c = Collection(sample_numbers)
    assert_that(c.first() == 1 and c.last() == 5, "first and last")
    assert_that(c.first(lambda v: v > 3) == 4 and c.last(lambda v: v < 3) == 2, "with callbacks")
    assert_that(c.first(lambda v: v > 10, 'none') == 'none', "first default")
    assert_that(c.first(lambda v: v > 10, lambda: 'lazy') == 'lazy', "callable default")
    assert_that(Collection([0, False]).first_or_fail() == 0, "a falsy first element is still found")
    assert_raises(ItemNotFoundError, c.first_or_fail, lambda v: v > 10)
    assert_raises(LookupError, Collection().first_or_fail)


@test("search and contains")
def test_search_contains():
    c = Collection({'a': 1, 'b': '2'})
    assert_that(c.search(2) == 'b', "search is loose by default")
    assert_that(c.search(2, strict=True) is None, "strict search")
    assert_that(c.search(lambda v: v == 1) == 'a', "search with a callback")
    assert_that(c.contains(2) and not c.contains_strict(2), "contains loose and strict")
    users = Collection([{'name': 'ann'}, {'name': 'bob'}])
    assert_that(users.contains('name', 'bob'), "contains by path")
    assert_that(users.contains(lambda u: u['name'] == 'ann'), "contains by callback")


@test("unique keeps the first occurrence")
def test_unique():
    c = Collection([1, '1', 2, 2, 3])
    assert_that(c.unique().all() == {0: 1, 2: 2, 4: 3}, f"loose unique: {c.unique().all()}")
    assert_that(c.unique_strict().all() == {0: 1, 1: '1', 2: 2, 4: 3}, "strict unique")
    users = Collection([{'role': 'a', 'id': 1}, {'role': 'b', 'id': 2}, {'role': 'a', 'id': 3}])
    assert_that(users.unique('role').pluck('id').all() == [1, 2], "unique by path")
    assert_that(users.unique(lambda u: u['id'] % 2).pluck('id').all() == [1, 2], "unique by callback")


@test("chunk keeps keys inside each chunk")
def test_chunk():
    chunks = Collection(sample_numbers).chunk(2)
    assert_that([chunk.values().all() for chunk in chunks] == [[1, 2], [3, 4], [5]], "chunk values")
    assert_that(chunks.all()[1].all() == {2: 3, 3: 4}, "keys inside a chunk are preserved")
    assert_that(Collection(sample_numbers).chunk(0).all() == [], "non positive sizes give nothing")


@test("take, skip and their conditional forms")
def test_take_skip():
    c = Collection(sample_numbers)
    assert_that(c.take(2).all() == [1, 2], "take")
    assert_that(c.take(-2).all() == {3: 4, 4: 5}, "take from the end")
    assert_that(c.skip(3).values().all() == [4, 5], "skip")
    assert_that(c.take_while(lambda v: v < 3).all() == [1, 2], "take_while")
    assert_that(c.take_until(lambda v: v == 4).all() == [1, 2, 3], "take_until")
    assert_that(c.skip_while(lambda v: v < 4).values().all() == [4, 5], "skip_while")
    assert_that(c.nth(2).all() == [1, 3, 5] and c.nth(2, 1).all() == [2, 4], "nth")
    assert_raises(ValueError, c.nth, 0)


@test("keys, values and concat")
def test_keys_values_concat():
    c = Collection({'a': 1, 'b': 2})
    assert_that(c.keys().all() == ['a', 'b'], "keys")
    assert_that(c.values().all() == [1, 2], "values")
    assert_that(c.concat([3]).all() == {'a': 1, 'b': 2, 0: 3}, "concat uses push keys")
    assert_that(Collection([1]).concat([2, 3]).all() == [1, 2, 3], "concat on a list")


@test("every checks callbacks or path comparisons")
def test_every():
    users = Collection([{'age': 20}, {'age': 30}, {'name': 'no age'}])
    assert_that(users.every('age', 18, '>='), "items without the path are ignored")
    assert_that(not users.every('age', 25, '>'), "a failing item")
    assert_that(Collection(sample_numbers).every(lambda v: v > 0), "every with a callback")


@test("when, unless and pipe")
def test_flow_helpers():
    c = Collection([1])
    assert_that(c.when(True, lambda col: col.push(2)).all() == [1, 2], "when true runs the callback")
    assert_that(c.when(False, lambda col: col.push(3)).all() == [1, 2], "when false returns self")
    assert_that(c.unless(False, lambda col: 'changed') == 'changed', "unless runs on false")
    assert_that(c.when(False, lambda col: 'a', lambda col: 'b') == 'b', "default callback")
    assert_that(Collection().when_empty(lambda col: col.push('x')).all() == ['x'], "when_empty")
    assert_that(c.pipe(lambda col: len(col)) == 2, "pipe returns the callback result")


@test("tap_each sees every item without changing it")
def test_tap_each():
    seen = []
    result = Collection({'a': 1, 'b': 2}).tap_each(lambda v, k: seen.append(k))
    assert_that(seen == ['a', 'b'] and result.all() == {'a': 1, 'b': 2}, "tap_each")


@test("range builds inclusive sequences")
def test_range():
    assert_that(Collection.range(1, 5).all() == [1, 2, 3, 4, 5], "ascending")
    assert_that(Collection.range(5, 1, 2).all() == [5, 3, 1], "descending")
    assert_that(Collection.range('a', 'e', 2).all() == ['a', 'c', 'e'], "letters")
    assert_raises(ValueError, Collection.range, 1, None)


if __name__ == "__main__":
    suite.main(title="kollect core operations test")
