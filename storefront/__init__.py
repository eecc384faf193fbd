"""Order-and-payment backend for a garment storefront."""

__version__ = "1.0.0"
