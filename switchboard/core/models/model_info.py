"""Model descriptors and the merged model catalog.

A ModelDescriptor describes one model offered by one provider. The Catalog is
the deduplicated, ordered set of descriptors built from every provider's
``list_models()`` response.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ModelPricing:
    input_cost_per_1m_tokens: float | None = None
    output_cost_per_1m_tokens: float | None = None
    unit: str = "USD"

    def to_dict(self) -> dict[str, Any]:
        pricing: dict[str, Any] = {"unit": self.unit}
        if self.input_cost_per_1m_tokens is not None:
            pricing["input_cost_per_1m_tokens"] = self.input_cost_per_1m_tokens
        if self.output_cost_per_1m_tokens is not None:
            pricing["output_cost_per_1m_tokens"] = self.output_cost_per_1m_tokens
        return pricing


@dataclass(frozen=True, slots=True)
class ModelDescriptor:
    """One model offered by one provider.

    Frozen: ``id`` and ``provider_name`` never change after creation.
    ``is_default`` is provider-local, several providers may each mark one
    of their models as default.

    Attributes:
        id: Model identifier, unique within a merged Catalog
        display_name: Human-friendly name for selection UIs
        provider_name: Name of the provider that serves this model
        description: Optional free-form description
        context_window_tokens: Maximum context window, if known
        is_default: Whether the provider marks this as its default model
        input_modalities: Supported input types (e.g. "text", "image")
        output_modalities: Supported output types
        pricing: Optional per-million-token pricing
        metadata: Provider-specific extras (e.g. ``owned_by``)
    """

    id: str
    display_name: str
    provider_name: str
    description: str | None = None
    context_window_tokens: int | None = None
    is_default: bool = False
    input_modalities: tuple[str, ...] = ("text",)
    output_modalities: tuple[str, ...] = ("text",)
    pricing: ModelPricing | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Model id is required")
        if not self.provider_name:
            raise ValueError(f"Provider name is required for model '{self.id}'")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "display_name": self.display_name,
            "provider_name": self.provider_name,
            "description": self.description,
            "context_window_tokens": self.context_window_tokens,
            "is_default": self.is_default,
            "input_modalities": list(self.input_modalities),
            "output_modalities": list(self.output_modalities),
            "pricing": self.pricing.to_dict() if self.pricing else None,
        }
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data


class Catalog:
    """Ordered, id-keyed set of ModelDescriptors.

    Insertion order is kept for display; lookups by id are O(1). A Catalog is
    never patched in place: a refresh builds a new one and swaps it in.
    """

    __slots__ = ("_models", "_index")

    def __init__(self, models: Iterable[ModelDescriptor] = ()) -> None:
        index: dict[str, ModelDescriptor] = {}
        for model in models:
            # First writer for an id wins
            if model.id not in index:
                index[model.id] = model
        self._index = index
        self._models = tuple(index.values())

    @classmethod
    def empty(cls) -> Catalog:
        return cls()

    def get(self, model_id: str) -> ModelDescriptor | None:
        return self._index.get(model_id)

    def providers(self) -> list[str]:
        """Provider names contributing to this catalog, in first-seen order."""
        return list(dict.fromkeys(m.provider_name for m in self._models))

    def by_provider(self, provider_name: str) -> tuple[ModelDescriptor, ...]:
        return tuple(m for m in self._models if m.provider_name == provider_name)

    def to_list(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self._models]

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._index

    def __iter__(self) -> Iterator[ModelDescriptor]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __bool__(self) -> bool:
        return bool(self._models)

    def __getitem__(self, position: int) -> ModelDescriptor:
        return self._models[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._models == other._models

    def __repr__(self) -> str:
        return f"Catalog({len(self._models)} models from {self.providers()})"
