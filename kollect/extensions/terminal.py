from __future__ import annotations
import json as _json
import typing
from collections.abc import Mapping
import numpy as np
import pandas as pd
from .. import arr
from ..types import *

if typing.TYPE_CHECKING:
    from ..collection import BaseCollection


def to_plain(value: Any) -> Any:
    """recursively replace collections with plain lists and dicts"""
    from ..collection import BaseCollection
    if isinstance(value, BaseCollection):
        items = {key: to_plain(item) for key, item in value.items()}
        return arr.export(items)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


class TerminalAccessor(Generic[T]):
    """conversions out of a collection. lazy collections are consumed in full."""

    def __init__(self, collection_instance: 'BaseCollection[T]'):
        self._collection = collection_instance

    def list(self) -> List[T]:
        """the values as a list (top level only)"""
        return [value for _, value in self._collection.items()]

    def dict(self) -> Dict[Key, T]:
        """the items as a dict (top level only)"""
        return dict(self._collection.items())

    def array(self) -> Union[List[Any], Dict[Key, Any]]:
        """nested plain structure: lists for list-shaped levels, dicts otherwise"""
        return to_plain(self._collection)

    def json(self, **kwargs: Any) -> str:
        """encode array() as json; kwargs go to json.dumps"""
        return _json.dumps(self.array(), **kwargs)

    def numpy(self) -> np.ndarray:
        """convert values to numpy array"""
        return np.array(self.list())

    def series(self) -> pd.Series:
        """convert to pandas series indexed by the collection keys"""
        items = self.dict()
        return pd.Series(list(items.values()), index=list(items.keys()))

    def df(self) -> pd.DataFrame:
        """convert record-shaped values to a pandas dataframe"""
        return pd.DataFrame(to_plain(self.list()))
