"""Serializer policy for objects that have no source text.

Decoded host objects (blocks, items, ...) are dumped by walking their public
fields. Field names are converted to camelCase and compared case-insensitively
so that two members that only differ by case (or by naming style) are written
once, keeping the first one.
"""

import dataclasses
import json
import re
from enum import Enum
from typing import Any


def camel_case(name: str) -> str:
    """Convert ``snake_case`` or ``PascalCase`` names to ``camelCase``."""
    parts = [p for p in re.split(r'_+', name) if p]
    if not parts:
        return name
    head = parts[0]
    # Lower the leading run of capitals ("URLPath" -> "urlPath")
    match = re.match(r'[A-Z]+(?=[A-Z][a-z]|$|\d)', head)
    if match:
        head = match.group(0).lower() + head[match.end():]
    else:
        head = head[:1].lower() + head[1:]
    return head + ''.join(p[:1].upper() + p[1:] for p in parts[1:])


class DuplicateFieldSerializer:
    """Turns arbitrary objects into canonical JSON text.

    Attributes:
        indent: Spaces per indentation level
        camel_case_names: Rename every field with camel_case()
        include_private: Also serialize attributes starting with an underscore
    """

    def __init__(self, indent: int = 2, camel_case_names: bool = True, include_private: bool = False):
        self.indent = indent
        self.camel_case_names = camel_case_names
        self.include_private = include_private

    def serialize(self, obj: Any) -> str:
        return json.dumps(self.to_tree(obj), indent=self.indent, ensure_ascii=False)

    def to_tree(self, obj: Any) -> Any:
        """Convert an object graph into JSON-compatible values."""
        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        if isinstance(obj, Enum):
            return self.to_tree(obj.value)
        if isinstance(obj, bytes):
            return obj.decode('utf-8', errors='replace')
        if isinstance(obj, dict):
            return self._members(obj.items(), rename=False)
        if isinstance(obj, (list, tuple, set, frozenset)):
            items = sorted(obj, key=repr) if isinstance(obj, (set, frozenset)) else obj
            return [self.to_tree(item) for item in items]
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            fields = ((f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj))
            return self._members(fields, rename=True)
        if hasattr(obj, '__dict__'):
            return self._members(vars(obj).items(), rename=True)
        raise TypeError(f"Object of type {type(obj).__name__} is not serializable")

    def _members(self, items, rename: bool) -> dict:
        # Mapping keys are data and kept verbatim; only object fields are deduplicated
        seen: set[str] = set()
        result = {}
        for name, value in items:
            name = str(name)
            if rename:
                if name.startswith('_') and not self.include_private:
                    continue
                if self.camel_case_names:
                    name = camel_case(name)
                folded = name.casefold()
                if folded in seen:
                    continue
                seen.add(folded)
            result[name] = self.to_tree(value)
        return result
