"""Ordered heuristics for guessing a provider from a model id.

Used by ProviderRegistry.resolve() when the catalog does not know the id
(cold cache, or a model released after the last refresh). Rules are tried in
order and the first match wins, even if the matched provider turns out not
to be registered.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional


@dataclass(frozen=True, slots=True)
class FallbackRule:
    """Maps model ids satisfying ``predicate`` to ``provider_name``."""

    description: str
    predicate: Callable[[str], bool]
    provider_name: str

    def matches(self, model_id: str) -> bool:
        return self.predicate(model_id)


def prefix(value: str) -> Callable[[str], bool]:
    return lambda model_id: model_id.startswith(value)


def contains(value: str) -> Callable[[str], bool]:
    return lambda model_id: value in model_id


DEFAULT_FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("starts with 'gpt-'", prefix("gpt-"), "openai"),
    FallbackRule("contains 'openai'", contains("openai"), "openai"),
    FallbackRule("starts with 'claude-'", prefix("claude-"), "anthropic"),
    FallbackRule("starts with 'gemini-'", prefix("gemini-"), "google"),
    FallbackRule("starts with 'qwen'", prefix("qwen"), "alibaba"),
)


def infer_provider(
    model_id: str, rules: Iterable[FallbackRule] = DEFAULT_FALLBACK_RULES
) -> Optional[FallbackRule]:
    """Return the first rule matching ``model_id``, or None."""
    for rule in rules:
        if rule.matches(model_id):
            return rule
    return None
