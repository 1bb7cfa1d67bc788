"""Element aggregate persistence with interchangeable relational and document stores."""

__version__ = "0.1.0"
