from .loose_json import extract, LooseJsonExtractor

__all__ = ["extract", "LooseJsonExtractor"]
