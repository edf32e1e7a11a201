"""
Repository layer - contracts for data access to the remote drive.
"""
from .interfaces import IDriveRepository

__all__ = ["IDriveRepository"]
