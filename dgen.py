'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
'''

import numpy as np
from faker import Faker
from collecty import Collection
from typing import Any, Dict, Optional

# keys that mark a schema node as a provider rather than a nested record
PROVIDER = "_gen"
ITEMS = "_items"
COUNT = "_count"


class Generator:
    """
    schema interpreter.

    a schema is a nested structure:
      - dict: a record, each field generated in order (later fields can ref earlier ones)
      - dict with "_gen": a provider (ref, choice, int, maybe, literal)
      - list: [item_schema] or [{"_items": item_schema, "_count": n or (low, high)}]
      - str: a faker provider name when faker has one, otherwise a literal
      - (name, kwargs): a faker provider called with kwargs
      - callable: called with the record built so far
    """

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _faker(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, method_name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _provider(self, config: Dict, context: Dict) -> Any:
        provider = config[PROVIDER]
        if provider == "ref":
            key = config["key"]
            if key not in context:
                raise ValueError(f"reference to '{key}' not found in current context.")
            value = context[key]
            return config["format"].format(value) if "format" in config else value

        if provider == "choice":
            # numpy scalars become plain python values
            picked = config["from"][int(self._rng.integers(len(config["from"])))]
            return picked.item() if isinstance(picked, np.generic) else picked

        if provider == "int":
            return int(self._rng.integers(config.get("min", 0), config.get("max", 100), endpoint=True))

        if provider == "maybe":
            # value or None, for exercising null handling
            if self._rng.random() < config.get("null_rate", 0.5):
                return None
            return self.create(config["value"], context)

        if provider == "literal":
            if "value" not in config:
                raise ValueError("provider 'literal' requires a 'value' key.")
            return config["value"]

        raise ValueError(f"unknown provider: '{provider}'")

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}

        if isinstance(schema, dict):
            if PROVIDER in schema:
                return self._provider(schema, context)
            record = {}
            for key, field in schema.items():
                # refs see the parent record and the fields generated so far
                record[key] = self.create(field, {**context, **record})
            return record

        if isinstance(schema, list):
            if not schema:
                return []
            item_schema = schema[0]
            count = self._count(item_schema)
            if isinstance(item_schema, dict) and ITEMS in item_schema:
                item_schema = item_schema[ITEMS]
            return [self.create(item_schema, context) for _ in range(count)]

        if isinstance(schema, str):
            return self._faker(schema) if hasattr(self._fake, schema) else schema

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])

        if callable(schema):
            return schema(context)

        return schema

    def _count(self, item_schema: Any) -> int:
        if not (isinstance(item_schema, dict) and COUNT in item_schema):
            return 3
        count = item_schema[COUNT]
        if isinstance(count, (list, tuple)) and len(count) == 2:
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return int(count)


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> Collection:
        """count generated records as a collection keyed 0..count-1"""
        return Collection([self._generator.create(self._schema) for _ in range(count)])


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
