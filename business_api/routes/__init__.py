from . import business, elastic, internal, staff

__all__ = ["business", "elastic", "internal", "staff"]
