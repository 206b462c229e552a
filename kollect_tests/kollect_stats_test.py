import suite
from dgen import from_schema
from kollect import Collection, LazyCollection

test = suite.test
assert_that = suite.assert_that

sample_numbers = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]

staff = [
    {'name': 'ann', 'role': 'admin', 'pay': {'base': 300}},
    {'name': 'bob', 'role': 'user', 'pay': {'base': 100}},
    {'name': 'cy', 'role': 'admin', 'pay': {'base': 200}},
    {'name': 'dee', 'role': 'user'},
]


@test("sum without selector")
def test_sum_basic():
    result = Collection(sample_numbers).stats.sum()
    assert_that(result == 55, f"basic sum failed: {result}")
    assert_that(isinstance(result, int), f"numpy scalars are unboxed: {type(result)}")


@test("sum with a path or a callback")
def test_sum_with_selector():
    assert_that(Collection(staff).stats.sum('pay.base') == 600, "sum by path skips missing paths")
    assert_that(Collection(staff).stats.sum(lambda s: len(s['name'])) == 11, "sum by callback")
    assert_that(Collection(['1', 2, 'x']).stats.sum() == 3, "numeric strings count, other values do not")
    assert_that(Collection().stats.sum() == 0, "empty sum is zero")


@test("integer sums do not overflow")
def test_sum_big_integers():
    result = Collection([2 ** 62, 2 ** 62]).stats.sum()
    assert_that(result == 2 ** 63, f"sum wrapped around: {result}")
    assert_that(Collection([10 ** 20, 1]).stats.sum() == 10 ** 20 + 1, "beyond int64")
    assert_that(Collection([1, 2.5]).stats.sum() == 3.5, "mixed data still sums as floats")


@test("average calculation")
def test_average():
    assert_that(abs(Collection(sample_numbers).stats.avg() - 5.5) < 0.001, "average")
    assert_that(Collection(staff).stats.average('pay.base') == 200, "average by path")
    assert_that(Collection().stats.avg() is None, "empty average is None")


@test("median of odd and even counts")
def test_median():
    assert_that(Collection([1, 2, 3]).stats.median() == 2, "odd count")
    assert_that(Collection([1, 2, 3, 4]).stats.median() == 2.5, "even count")
    assert_that(Collection([3, 1, 2]).stats.median() == 2, "values are sorted first")
    assert_that(Collection(staff).stats.median('pay.base') == 200, "median of extracted values")
    assert_that(Collection().stats.median() is None, "empty median is None")


@test("mode returns every value tied for the top count")
def test_mode():
    assert_that(Collection([1, 1, 2, 2, 3]).stats.mode() == [1, 2], "two modes")
    assert_that(Collection([4, 4, 5]).stats.mode() == [4], "single mode")
    assert_that(Collection(staff).stats.mode('role') == ['admin', 'user'], "mode by path")
    assert_that(Collection().stats.mode() is None, "empty mode is None")


@test("mode and count_by accept records")
def test_mode_records():
    records = Collection([{'a': 1}, {'a': 1}, {'a': 2}])
    assert_that(records.stats.mode() == [{'a': 1}], f"record mode: {records.stats.mode()}")
    tally = records.stats.count_by().all()
    assert_that(tally == {'{"a": 1}': 2, '{"a": 2}': 1}, f"records keyed by json text: {tally}")
    lists = Collection([[1, 2], [3], [1, 2]]).stats.mode()
    assert_that(lists == [[1, 2]], f"list values: {lists}")
    mixed = Collection(['x', [1], 'x', [1], 5]).stats.mode()
    assert_that(mixed == ['x', [1]], f"hashable and unhashable values together: {mixed}")


@test("min and max")
def test_min_max():
    assert_that(Collection([3, None, 1, 2]).stats.min() == 1, "None is ignored by min")
    assert_that(Collection([3, None, 1, 2]).stats.max() == 3, "max")
    assert_that(Collection(staff).stats.max('pay.base') == 300, "max by path")
    assert_that(Collection(['b', 'a']).stats.min() == 'a', "strings")
    assert_that(Collection().stats.max() is None, "empty max is None")


@test("count with nothing, a callback or a path")
def test_count():
    c = Collection(staff)
    assert_that(c.stats.count() == 4, "plain count")
    assert_that(c.stats.count(lambda s: s['role'] == 'admin') == 2, "count by callback")
    assert_that(c.stats.count('pay.base') == 3, "count where the path resolves")


@test("count_by tallies values in first seen order")
def test_count_by():
    assert_that(Collection(['a', 'b', 'a']).stats.count_by().all() == {'a': 2, 'b': 1}, "count_by values")
    assert_that(Collection(staff).stats.count_by('role').all() == {'admin': 2, 'user': 2}, "count_by path")
    by_length = Collection(staff).stats.count_by(lambda s: len(s['name']))
    assert_that(by_length.all() == {3: 3, 2: 1}, f"count_by callback: {by_length.all()}")


@test("aggregates consume lazy collections")
def test_lazy_aggregates():
    numbers = LazyCollection.range(1, 4)
    assert_that(numbers.stats.sum() == 10, "lazy sum")
    assert_that(numbers.stats.median() == 2.5, "lazy median")
    counted = numbers.map(lambda v: v % 2).stats.count_by()
    assert_that(isinstance(counted, LazyCollection), "count_by stays lazy")
    assert_that(counted.all() == {1: 2, 0: 2}, "lazy count_by")


@test("aggregates over generated data agree with plain python")
def test_generated_aggregates():
    schema = {'score': {'_gen_provider': 'int', 'between': (0, 100)}}
    rows = from_schema(schema, seed=3).take(50)
    scores = [row['score'] for row in rows]
    assert_that(rows.stats.sum('score') == sum(scores), "sum")
    assert_that(rows.stats.max('score') == max(scores), "max")
    assert_that(abs(rows.stats.avg('score') - sum(scores) / len(scores)) < 1e-9, "avg")


if __name__ == "__main__":
    suite.main(title="kollect stats test")
