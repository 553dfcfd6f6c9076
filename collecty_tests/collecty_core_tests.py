import suite
from dgen import from_schema
from collecty import C, Collection

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal

users = [
    {'name': 'alice', 'email': 'alice@example.com', 'address': {'city': 'paris'}},
    {'name': 'bob', 'email': 'bob@example.com', 'address': {'city': 'oslo'}},
    {'name': 'carol', 'email': 'carol@example.com', 'address': {'city': 'paris'}},
]

scores = [{'v': 1}, {'v': 2}, {'v': 3}, {'v': '3'}, {'v': 4}]


# --- projection ---

@test("map applies callback and keeps keys")
def test_map_keeps_keys():
    result = C({'a': 1, 'b': 2}).map(lambda v: v * 2)
    assert_equal(result.to_dict(), {'a': 2, 'b': 4})

    labelled = C({'a': 1, 'b': 2}).map(lambda v, k: f"{k}{v}")
    assert_equal(labelled.all(), {'a': 'a1', 'b': 'b2'})


@test("map on sparse integer keys does not renumber")
def test_map_sparse_keys():
    source = C({3: 'x', 7: 'y'})
    result = source.map(str.upper)
    assert_equal(result.keys().all(), source.keys().all())
    assert_equal(result.to_list(), ['X', 'Y'])


@test("map returns the same collection subclass")
def test_map_subclass():
    class Names(Collection):
        pass

    result = Names(['a']).map(lambda v: v + '!')
    assert_that(type(result) is Names, f"expected Names, got {type(result).__name__}")


@test("flat_map collapses one level of mapped lists")
def test_flat_map():
    result = C([{'tags': [1, 2]}, {'tags': [3]}]).flat_map(lambda v: v['tags'])
    assert_equal(result.all(), [1, 2, 3])


@test("map_with_keys merges returned mappings")
def test_map_with_keys():
    people = C([{'id': 1, 'name': 'ann'}, {'id': 2, 'name': 'ben'}])
    result = people.map_with_keys(lambda v: {v['name']: v['id']})
    assert_equal(result.to_dict(), {'ann': 1, 'ben': 2})


@test("transform replaces items in place")
def test_transform():
    source = C([1, 2])
    result = source.transform(lambda v: v * 10)
    assert_that(result is source, "transform should return the same instance")
    assert_equal(source.all(), [10, 20])


@test("pluck reads dot-paths and optional key paths")
def test_pluck():
    assert_equal(C(users).pluck('name').all(), ['alice', 'bob', 'carol'])
    assert_equal(C(users).pluck('address.city').all(), ['paris', 'oslo', 'paris'])
    assert_equal(C(users).pluck('name', 'email').to_dict(), {
        'alice@example.com': 'alice',
        'bob@example.com': 'bob',
        'carol@example.com': 'carol',
    })
    assert_equal(C(users).pluck('address.zip').all(), [None, None, None])


@test("pluck wildcard fans out over nested lists")
def test_pluck_wildcard():
    posts = C([
        {'comments': [{'by': 'x'}, {'by': 'y'}]},
        {'comments': [{'by': 'z'}]},
    ])
    plucked = posts.pluck('comments.*.by')
    assert_equal(plucked.all(), [['x', 'y'], ['z']])
    assert_equal(plucked.collapse().all(), ['x', 'y', 'z'])


@test("pluck reads attributes of plain objects")
def test_pluck_attributes():
    class Point:
        def __init__(self, x):
            self.x = x

    assert_equal(C([Point(1), Point(2)]).pluck('x').all(), [1, 2])


@test("values, keys, flip and reverse")
def test_values_keys_flip_reverse():
    source = C({'a': 1, 'b': 2})
    assert_equal(source.values().all(), [1, 2])
    assert_equal(source.keys().all(), ['a', 'b'])
    assert_equal(source.flip().to_dict(), {1: 'a', 2: 'b'})
    assert_equal(list(source.reverse().to_dict()), ['b', 'a'])


@test("values is idempotent")
def test_values_idempotent():
    source = C({'x': 1, 5: 2, 'y': 3})
    assert_that(source.values().values() == source.values(), "values(values(c)) should equal values(c)")


@test("flatten respects depth")
def test_flatten_depth():
    nested = C([['#foo', ['#bar', ['#baz']]], '#zap'])
    assert_equal(nested.flatten().all(), ['#foo', '#bar', '#baz', '#zap'])
    assert_equal(nested.flatten(1).all(), ['#foo', ['#bar', ['#baz']], '#zap'])
    assert_equal(nested.flatten(2).all(), ['#foo', '#bar', ['#baz'], '#zap'])


@test("flatten opens mappings and nested collections")
def test_flatten_mappings():
    assert_equal(C({'a': {'x': 1, 'y': 2}, 'b': 3}).flatten().all(), [1, 2, 3])
    assert_equal(C([C([1, 2]), [3]]).flatten().all(), [1, 2, 3])


@test("collapse merges one level and skips scalars")
def test_collapse():
    assert_equal(C([[1, 2], [3, 4], 5]).collapse().all(), [1, 2, 3, 4])
    assert_equal(C([C(['a']), ['b']]).collapse().all(), ['a', 'b'])


@test("zip pairs values by position and pads with None")
def test_zip():
    zipped = C([1, 2, 3]).zip(['a', 'b'], C({'x': True}))
    assert_equal(zipped.count(), 3)
    assert_equal(zipped.map(lambda row: row.all()).all(), [
        [1, 'a', True],
        [2, 'b', None],
        [3, None, None],
    ])
    assert_that(isinstance(zipped[0], Collection), "zip rows should be collections")


# --- filtering ---

@test("filter without callback drops falsy values, keys kept")
def test_filter_truthy():
    result = C([1, 0, None, '', 2, False, []]).filter()
    assert_equal(result.to_dict(), {0: 1, 4: 2})


@test("filter callback receives key then value")
def test_filter_callback():
    source = C({'a': 1, 'b': 2, 'c': 3})
    assert_equal(source.filter(lambda k, v: v > 1).to_dict(), {'b': 2, 'c': 3})
    assert_equal(source.filter(lambda k: k != 'a').to_dict(), {'b': 2, 'c': 3})


@test("reject with callback and with plain value")
def test_reject():
    assert_equal(C([1, 2, 3, 4]).reject(lambda v: v % 2 == 0).to_dict(), {0: 1, 2: 3})
    assert_equal(C([1, 2, '2', 3]).reject(2).values().all(), [1, 3])


@test("where uses loose equality by default")
def test_where_default():
    result = C(scores).where('v', 3)
    assert_equal(result.to_dict(), {2: {'v': 3}, 3: {'v': '3'}})


@test("where supports comparison operators")
def test_where_operators():
    source = C(scores)
    assert_equal(source.where('v', '===', 3).values().all(), [{'v': 3}])
    assert_equal(source.where('v', '!==', 3).count(), 4)
    assert_equal(source.where('v', '>', 2).count(), 3)
    assert_equal(source.where('v', '<>', 3).pluck('v').all(), [1, 2, 4])
    assert_equal(source.where('v', '<=', 2).pluck('v').all(), [1, 2])
    assert_equal(source.where('v', 'like', 3).count(), 2)


@test("where_strict and where_in variants")
def test_where_strict_in():
    source = C(scores)
    assert_equal(source.where_strict('v', '3').pluck('v').all(), ['3'])
    assert_equal(source.where_in('v', [1, 3]).pluck('v').all(), [1, 3, '3'])
    assert_equal(source.where_in_strict('v', [1, 3]).pluck('v').all(), [1, 3])


@test("filter, map, unique and where keep relative order")
def test_order_preserved():
    records = from_schema({
        'id': {'_gen': 'int', 'min': 0, 'max': 1000},
        'group': {'_gen': 'choice', 'from': ['red', 'blue', 'green']},
    }, seed=11).take(40)

    def in_order(result):
        keys = result.keys().all()
        return keys == sorted(keys)

    assert_that(in_order(records.filter(lambda k, v: v['id'] % 2 == 0)), "filter reordered entries")
    assert_that(in_order(records.map(lambda v: v)), "map reordered entries")
    assert_that(in_order(records.unique('group')), "unique reordered entries")
    assert_that(in_order(records.where('group', 'blue')), "where reordered entries")
    assert_equal(records.unique('group').count(), 3)


# --- positional ---

@test("slice keeps keys and supports negative offsets")
def test_slice():
    source = C([1, 2, 3, 4, 5])
    assert_equal(source.slice(1, 2).to_dict(), {1: 2, 2: 3})
    assert_equal(source.slice(-2).to_dict(), {3: 4, 4: 5})
    assert_equal(source.slice(1, -1).to_list(), [2, 3, 4])


@test("take from the front and from the end")
def test_take():
    source = C([1, 2, 3, 4, 5])
    assert_equal(source.take(2).all(), [1, 2])
    assert_equal(source.take(-2).to_dict(), {3: 4, 4: 5})
    assert_equal(source.take(0).count(), 0)


@test("for_page returns one page")
def test_for_page():
    source = C(range(1, 10))
    assert_equal(source.for_page(2, 3).to_list(), [4, 5, 6])
    assert_equal(source.for_page(4, 3).count(), 0)


@test("splice removes, inserts and returns removed values")
def test_splice():
    source = C([1, 2, 3, 4, 5])
    removed = source.splice(1, 2, ['x'])
    assert_equal(removed.all(), [2, 3])
    assert_equal(source.all(), [1, 'x', 4, 5])

    tail = C([1, 2, 3, 4]).splice(2)
    assert_equal(tail.all(), [3, 4])

    source = C([1, 2, 3, 4])
    source.splice(-2, 1)
    assert_equal(source.all(), [1, 2, 4])


@test("append returns a new collection")
def test_append():
    source = C([1, 2])
    result = source.append(3)
    assert_equal(source.all(), [1, 2])
    assert_equal(result.all(), [1, 2, 3])
    assert_equal(C({'a': 1}).append(2, 'b').to_dict(), {'a': 1, 'b': 2})


# --- in-place mutation ---

@test("prepend renumbers integer keys or inserts a named key")
def test_prepend():
    assert_equal(C([1, 2]).prepend(0).all(), [0, 1, 2])

    named = C({'a': 1}).prepend(0, 'z')
    assert_equal(list(named.to_dict()), ['z', 'a'])
    assert_equal(named.to_dict(), {'z': 0, 'a': 1})


@test("push, pop and shift mutate in place")
def test_push_pop_shift():
    source = C([1])
    assert_that(source.push(2, 3) is source, "push should return self")
    assert_equal(source.all(), [1, 2, 3])
    assert_equal(source.pop(), 3)
    assert_equal(source.all(), [1, 2])
    assert_equal(source.shift(), 1)
    assert_equal(source.all(), [2])
    assert_that(C().pop() is None, "pop on empty should give None")
    assert_that(C().shift() is None, "shift on empty should give None")


@test("shift renumbers remaining integer keys")
def test_shift_renumbers():
    source = C({0: 'a', 1: 'b', 'x': 'c', 2: 'd'})
    source.shift()
    assert_equal(source.to_dict(), {0: 'b', 'x': 'c', 1: 'd'})


@test("pull, put and forget")
def test_pull_put_forget():
    source = C({'a': 1, 'b': 2})
    assert_equal(source.pull('a'), 1)
    assert_equal(source.to_dict(), {'b': 2})
    assert_equal(source.pull('zz', 'fallback'), 'fallback')
    assert_equal(source.pull('zz', lambda: 'lazy'), 'lazy')

    assert_that(source.put('c', 3) is source, "put should return self")
    assert_equal(source.to_dict(), {'b': 2, 'c': 3})

    assert_equal(C({'a': 1, 'b': 2, 'c': 3}).forget(['a', 'c']).to_dict(), {'b': 2})
    assert_equal(C({'a': 1, 'b': 2}).forget('a').to_dict(), {'b': 2})
    assert_equal(C({'a': 1}).forget('missing').to_dict(), {'a': 1})


# --- iteration helpers ---

@test("each visits in order and stops on False")
def test_each():
    seen = []

    def visit(value, key):
        seen.append((key, value))
        if value == 2:
            return False

    source = C([1, 2, 3])
    assert_that(source.each(visit) is source, "each should return self")
    assert_equal(seen, [(0, 1), (1, 2)])


@test("reduce folds left with or without an initial value")
def test_reduce():
    assert_equal(C([1, 2, 3]).reduce(lambda carry, v: carry + v, 0), 6)
    assert_equal(C([1, 2, 3]).reduce(lambda carry, v: carry + v), 6)
    assert_equal(C(['a', 'b']).reduce(lambda carry, v: carry + v, '>'), '>ab')
    assert_that(C().reduce(lambda carry, v: carry + v) is None, "empty reduce without initial should be None")


@test("pipe returns the function result verbatim")
def test_pipe():
    assert_equal(C([1, 2, 3]).pipe(lambda c: c.sum()), 6)
    assert_equal(C([1, 2]).pipe(lambda c, n: c.count() * n, 10), 20)


if __name__ == "__main__":
    suite.run(title="collecty core operations test")
