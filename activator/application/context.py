from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _present(value: Any) -> bool:
    return value is not None and value != ""


@dataclass
class RequestContext:
    """
    Field accessor over one in-flight request.

    `state` holds values attached by an upstream stage (request.state.activator);
    `params` holds the raw request input (path, JSON body, query). A value in
    `state` wins over the same name in `params`.
    """

    state: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        value = self.state.get(name)
        if _present(value):
            return value
        value = self.params.get(name)
        if _present(value):
            return value
        return default

    def first(self, *names: str) -> Any:
        for name in names:
            value = self.get(name)
            if value is not None:
                return value
        return None

    def as_dict(self) -> dict[str, Any]:
        merged = {k: v for k, v in self.params.items() if _present(v)}
        merged.update({k: v for k, v in self.state.items() if _present(v)})
        return merged
