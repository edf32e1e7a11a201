"""
Service Interfaces Module - Define contracts for services.

This module provides interfaces following the Interface Segregation Principle.
Each interface is in its own file for better organization and maintainability.
"""
from .idocument_text_service import IDocumentTextService
from .itoken_supplier import ITokenSupplier

__all__ = [
    "IDocumentTextService",
    "ITokenSupplier",
]
