"""anigrid: hexagonal mosaic of a ranked image collection."""

__version__ = "0.1.0"
