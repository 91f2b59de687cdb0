"""B2B marketplace shipping charge estimator."""

__version__ = "0.1.0"
