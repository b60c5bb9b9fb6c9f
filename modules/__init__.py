"""Helper modules for the PrintShop Desk application."""

__all__ = [
    "pdf_render",
    "pricing",
    "validation",
]
