import suite
from dgen import from_schema
from collecty import C

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal

colors = {'a': ['red', 3], 'b': ['green', 2], 'c': ['blue', 2], 'd': ['yellow', 1]}


@test("sort ascending keeps keys")
def test_sort_default():
    source = C([5, 3, 1, 2, 4])
    assert_equal(source.sort().values().all(), [1, 2, 3, 4, 5])
    assert_equal(list(C([3, 1]).sort().to_dict()), [1, 0])


@test("sort compares numeric strings as numbers and puts None first")
def test_sort_mixed():
    assert_equal(C(['10', '9', '2']).sort().values().all(), ['2', '9', '10'])
    assert_equal(C([3, None, 1]).sort().values().all(), [None, 1, 3])


@test("sort with a comparator")
def test_sort_comparator():
    assert_equal(C([5, 3, 1, 2, 4]).sort(lambda a, b: b - a).values().all(), [5, 4, 3, 2, 1])


@test("comparator sorts are stable")
def test_sort_stable_comparator():
    result = C(colors).uasort(lambda x, y: x[1] - y[1])
    assert_equal(result.keys().all(), ['d', 'b', 'c', 'a'])

    always_equal = C(['x', 'y', 'z']).sort(lambda a, b: 0)
    assert_equal(always_equal.all(), ['x', 'y', 'z'])


@test("sort_by is stable in both directions")
def test_sort_by_stable():
    assert_equal(C(colors).sort_by(lambda v: v[1]).keys().all(), ['d', 'b', 'c', 'a'])
    assert_equal(C(colors).sort_by('1').keys().all(), ['d', 'b', 'c', 'a'])
    assert_equal(C(colors).sort_by_desc('1').keys().all(), ['a', 'b', 'c', 'd'])
    assert_equal(C(colors).sort_by('1', descending=True).keys().all(), ['a', 'b', 'c', 'd'])


@test("sort_by on generated records")
def test_sort_by_generated():
    people = from_schema({
        'name': 'first_name',
        'age': {'_gen': 'int', 'min': 18, 'max': 30},
    }, seed=5).take(25)
    ordered = people.sort_by('age')
    ages = ordered.pluck('age').all()
    assert_equal(ages, sorted(ages))

    # equal ages keep their original key order
    for age, group in ordered.group_by('age', preserve_keys=True):
        keys = group.keys().all()
        assert_that(keys == sorted(keys), f"unstable order for age {age}: {keys}")


@test("sort is idempotent")
def test_sort_idempotent():
    source = C({'x': 3, 'y': 1, 'z': 2, 'w': 1})
    assert_that(source.sort().sort() == source.sort(), "sort(sort(c)) should equal sort(c)")


@test("asort and arsort order by value with keys kept")
def test_asort_arsort():
    source = C({'a': 3, 'b': 1, 'c': 2})
    assert_equal(source.asort().keys().all(), ['b', 'c', 'a'])
    assert_equal(source.arsort().keys().all(), ['a', 'c', 'b'])


@test("ksort and krsort order by key")
def test_ksort_krsort():
    source = C({'b': 1, 'a': 2, 'c': 0})
    assert_equal(source.ksort().keys().all(), ['a', 'b', 'c'])
    assert_equal(source.krsort().keys().all(), ['c', 'b', 'a'])


@test("natural order sorts")
def test_natural_sorts():
    files = C(['img12.png', 'img10.png', 'img2.png', 'img1.png'])
    assert_equal(files.natsort().values().all(), ['img1.png', 'img2.png', 'img10.png', 'img12.png'])
    assert_equal(files.asort(natural=True).values().all(), ['img1.png', 'img2.png', 'img10.png', 'img12.png'])
    assert_equal(files.arsort(natural=True).values().all(), ['img12.png', 'img10.png', 'img2.png', 'img1.png'])

    mixed = C(['IMG2', 'img10', 'Img1'])
    assert_equal(mixed.natcasesort().values().all(), ['Img1', 'IMG2', 'img10'])
    assert_equal(mixed.natsort().values().all(), ['IMG2', 'Img1', 'img10'])


@test("uksort and usort")
def test_uksort_usort():
    assert_equal(C({'b': 1, 'a': 2}).uksort(lambda x, y: (x > y) - (x < y)).keys().all(), ['a', 'b'])
    assert_equal(C({'x': 3, 'y': 1}).usort(lambda a, b: a - b).all(), [1, 3])


@test("shuffle is a seeded permutation")
def test_shuffle():
    source = C(range(20))
    first = source.shuffle(seed=42)
    second = source.shuffle(seed=42)
    assert_equal(first.all(), second.all())
    assert_equal(sorted(first.all()), list(range(20)))
    assert_equal(first.keys().all(), list(range(20)))


if __name__ == "__main__":
    suite.run(title="collecty sorting test")
