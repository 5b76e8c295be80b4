from .RegionRewriter import RegionRewriter


__all__ = ["RegionRewriter"]
