"""Repository and service layers for warehouse products, batches, sections, price records and record reports."""

__version__ = "0.1.0"