"""FinZen personal finance tracker."""

__version__ = "1.0.0"
