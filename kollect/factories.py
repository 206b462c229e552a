import typing
from .types import *

if typing.TYPE_CHECKING:
    from .collection import Collection
    from .lazy import LazyCollection

def collect(items: Any = None) -> 'Collection[Any]':
    """create an eager collection from a list, dict, iterable, dataframe or scalar"""
    from .collection import Collection
    return Collection(items)

def lazy_collect(source: Any = None) -> 'LazyCollection[Any]':
    """create a lazy collection from a zero-argument producer, a mapping or another lazy collection"""
    from .lazy import LazyCollection
    return LazyCollection(source)

def times(count: int, callback: Optional[Callable[[int], T]] = None) -> 'Collection[T]':
    """collection of callback(1) .. callback(count); the numbers themselves without a callback"""
    from .collection import Collection
    if count < 1:
        return Collection()
    numbers = Collection.range(1, count)
    return numbers if callback is None else numbers.map(callback)

def wrap(value: Any) -> 'Collection[Any]':
    """a collection as is, anything else collected"""
    from .collection import Collection
    return value if isinstance(value, Collection) else Collection(value)

def unwrap(value: Any) -> Any:
    """the plain items of a collection, anything else unchanged"""
    from .collection import BaseCollection
    return value.all() if isinstance(value, BaseCollection) else value

def empty() -> 'Collection[Any]':
    """create empty collection"""
    from .collection import Collection
    return Collection()

# --- aliases ---
kollect = collect
K = collect
k = collect
