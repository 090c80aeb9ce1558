from .cd import CD
from .track import Track

__all__ = ["CD", "Track"]
