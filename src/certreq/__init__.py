"""certreq: certificate request validation and normalization."""

__version__ = "1.0.0"
