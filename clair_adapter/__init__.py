"""Harbor scanner adapter for the Clair vulnerability engine."""

__version__ = "0.1.0"
