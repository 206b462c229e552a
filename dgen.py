"""
seeded fixture records for the kollect tests.

a schema is plain data: dicts become records, `[item]` a list of generated
items, strings naming a faker provider are generated (other strings are
literals), `(provider, kwargs)` tuples call faker with arguments, and dicts
carrying `_gen_provider` pick one of the built-in providers below.
"""

import numpy as np
from faker import Faker
from kollect import collect, lazy_collect, Collection, LazyCollection
from typing import Any, Callable, Dict, Optional

DEFAULT_LIST_SIZE = 5


class Generator:
    """schema interpreter. seeded generators produce the same records every time."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)
        self._providers: Dict[str, Callable[[Dict, Dict], Any]] = {
            'ref': self._ref,
            'choice': self._choice,
            'int': self._int,
            'maybe': self._maybe,
            'literal': self._literal,
        }

    # --- providers ---

    def _ref(self, config: Dict, context: Dict) -> Any:
        """a field generated earlier in the same record, optionally formatted"""
        if config['key'] not in context:
            raise ValueError(f"ref '{config['key']}' points at no earlier field")
        value = context[config['key']]
        return config['format'].format(value) if 'format' in config else value

    def _choice(self, config: Dict, context: Dict) -> Any:
        picked = self._rng.choice(config['from'])
        return picked.item() if hasattr(picked, 'item') else picked

    def _int(self, config: Dict, context: Dict) -> int:
        low, high = config.get('between', (0, 100))
        return int(self._rng.integers(low, high, endpoint=True))

    def _maybe(self, config: Dict, context: Dict) -> Any:
        """None with probability null_rate, else the nested schema"""
        if self._rng.random() < config.get('null_rate', 0.5):
            return None
        return self.create(config['value'], context)

    def _literal(self, config: Dict, context: Dict) -> Any:
        if 'value' not in config:
            raise ValueError("the literal provider needs a 'value'")
        return config['value']

    def _faker(self, name: str, kwargs: Optional[Dict] = None) -> Any:
        provider = getattr(self._fake, name, None)
        if provider is None:
            raise ValueError(f"faker has no provider '{name}'")
        return provider(**(kwargs or {}))

    # --- schema walking ---

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}
        if isinstance(schema, dict):
            if '_gen_provider' in schema:
                name = schema['_gen_provider']
                if name not in self._providers:
                    raise ValueError(f"unknown _gen_provider '{name}'")
                return self._providers[name](schema, context)
            return self._record(schema, context)
        if isinstance(schema, list):
            return self._list(schema, context)
        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])
        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)
        return schema

    def _record(self, schema: Dict, context: Dict) -> Dict:
        # fields are built in order so refs can see the ones before them
        record: Dict[str, Any] = {}
        for field, field_schema in schema.items():
            record[field] = self.create(field_schema, {**context, **record})
        return record

    def _list(self, schema: list, context: Dict) -> list:
        if not schema:
            return []
        spec = schema[0]
        item = spec.get('_gen_items', spec) if isinstance(spec, dict) else spec
        return [self.create(item, context) for _ in range(self._size(spec))]

    def _size(self, spec: Any) -> int:
        size = spec.get('_gen_count', DEFAULT_LIST_SIZE) if isinstance(spec, dict) else DEFAULT_LIST_SIZE
        if isinstance(size, (list, tuple)):
            low, high = size
            return int(self._rng.integers(low, high, endpoint=True))
        return size


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._seed = seed

    def take(self, count: int) -> Collection:
        """an eager collection of `count` generated records"""
        generator = Generator(self._seed)
        return collect([generator.create(self._schema) for _ in range(count)])

    def stream(self, count: Optional[int] = None) -> LazyCollection:
        """
        a lazy collection of generated records; endless without a count.
        with a seed every pass yields the same records.
        """
        def produce():
            generator = Generator(self._seed)
            produced = 0
            while count is None or produced < count:
                yield generator.create(self._schema)
                produced += 1

        return lazy_collect(produce)


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
