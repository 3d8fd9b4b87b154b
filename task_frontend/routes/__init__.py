from .tasks import router

__all__ = ["router"]
