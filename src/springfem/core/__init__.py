from .material import Material

__all__ = ["Material"]
