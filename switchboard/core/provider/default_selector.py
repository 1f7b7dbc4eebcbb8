"""Default model selection over a catalog."""

import logging
from typing import Optional

from switchboard.core.models.model_info import Catalog, ModelDescriptor

logger = logging.getLogger(__name__)


class DefaultModelSelector:
    """Picks the model a client should use when it did not choose one.

    Responsibilities:
    - Prefer the default model of the configured preferred provider
    - Fall back to the first model flagged ``is_default``
    - Fall back to the first model in catalog order

    ``is_default`` is provider-local, so several models may carry it. Catalog
    order is registration order, which makes the choice deterministic.
    """

    def __init__(self, preferred_provider: Optional[str] = None) -> None:
        self._preferred = preferred_provider.lower() if preferred_provider else None

    @property
    def preferred_provider(self) -> Optional[str]:
        return self._preferred

    def select(self, catalog: Catalog) -> Optional[ModelDescriptor]:
        """Return the default descriptor, or None for an empty catalog."""
        if not catalog:
            return None

        if self._preferred:
            for model in catalog.by_provider(self._preferred):
                if model.is_default:
                    return model
            logger.debug(
                f"Preferred provider '{self._preferred}' has no default model in the catalog"
            )

        for model in catalog:
            if model.is_default:
                return model

        return catalog[0]
