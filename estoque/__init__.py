"""Estoque - stock control for sectors, custom tables and a product catalog."""

__version__ = "0.1.0"
