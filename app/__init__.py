# Import all models to ensure they are registered with SQLModel
from app.models import history, volunteer

__all__ = [
    "history",
    "volunteer",
]
