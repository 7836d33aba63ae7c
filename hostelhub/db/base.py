"""SQLAlchemy Base class and model registry."""
from hostelhub.models.base.base_model import Base


def import_models() -> None:
    """Import all models so their tables are registered on ``Base.metadata``."""
    import hostelhub.models  # noqa: F401


__all__ = ["Base", "import_models"]
