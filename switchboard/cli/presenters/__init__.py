from switchboard.cli.presenters.models import CatalogPresenter, HealthPresenter

__all__ = ["CatalogPresenter", "HealthPresenter"]
