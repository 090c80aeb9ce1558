from .cd_mapper import CDMapper

__all__ = ["CDMapper"]
