from .sequence import ItemSequence

__all__ = ["ItemSequence"]
