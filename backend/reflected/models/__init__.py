from .insight import InsightReport

__all__ = [
    "InsightReport",
]
