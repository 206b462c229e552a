import suite
from dgen import from_schema, Generator
from kollect import Collection, LazyCollection

# --- setup ---
test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

# --- test data generation schemas ---

# schema for simple records used in many tests
record_schema = {
    'id': ('pyint', {'min_value': 1, 'max_value': 100}),
    'name': 'word',
    'score': {'_gen_provider': 'int', 'between': (0, 10)},
    'category': {'_gen_provider': 'choice', 'from': ['a', 'b', 'c']},
}

# schema with nested values and references
profile_schema = {
    'first': 'first_name',
    'greeting': {'_gen_provider': 'ref', 'key': 'first', 'format': 'hi {}'},
    'address': {'city': 'city', 'zip': 'postcode'},
    'tags': [{'_gen_items': 'word', '_gen_count': (1, 3)}],
    'nick': {'_gen_provider': 'maybe', 'value': 'user_name', 'null_rate': 1.0},
}


@test("take returns an eager collection of records")
def test_take():
    rows = from_schema(record_schema, seed=1).take(20)
    assert_that(isinstance(rows, Collection), "take gives a collection")
    assert_that(rows.stats.count() == 20, "twenty rows")
    assert_that(rows.where_between('score', 0, 10).stats.count() == 20, "scores in range")
    assert_that(rows.where_in('category', ['a', 'b', 'c']).stats.count() == 20, "categories from the choice")


@test("seeded schemas are reproducible")
def test_seeded():
    first = from_schema(record_schema, seed=42).take(5).to.list()
    second = from_schema(record_schema, seed=42).take(5).to.list()
    assert_that(first == second, "same seed, same records")


@test("references and nested schemas")
def test_nested_schema():
    rows = from_schema(profile_schema, seed=5).take(5)
    for row in rows:
        assert_that(row['greeting'] == f"hi {row['first']}", f"ref provider: {row['greeting']}")
        assert_that(1 <= len(row['tags']) <= 3, f"tag count: {row['tags']}")
    assert_that(rows.where_null('nick').stats.count() == 5, "null_rate 1.0 always gives None")
    assert_that(rows.pluck('address.city').stats.count() == 5, "nested paths resolve")


@test("stream returns a restartable lazy collection")
def test_stream():
    stream = from_schema(record_schema, seed=9).stream(4)
    assert_that(isinstance(stream, LazyCollection), "stream gives a lazy collection")
    assert_that(stream.all() == stream.all(), "every pass replays the same records")
    endless = from_schema(record_schema, seed=9).stream()
    assert_that(endless.take(3).stats.count() == 3, "endless streams can be limited")


@test("unknown providers are rejected")
def test_unknown_provider():
    generator = Generator(seed=1)
    assert_raises(ValueError, generator.create, {'_gen_provider': 'nope'})
    assert_raises(ValueError, generator.create, ('no_such_faker_method', {}))


if __name__ == "__main__":
    suite.main(title="dgen schema generator test")
