"""raginfo - a local knowledge base for document question answering."""

__version__ = "0.1.0"
