"""
Token Supplier Interface.

Defines the contract for obtaining the bearer credential used by the
drive repository.
"""
from abc import ABC, abstractmethod


class ITokenSupplier(ABC):
    """
    Interface for bearer-token providers.
    
    Implementations refresh an expired credential on demand; the extraction
    core itself never needs one.
    """
    
    @abstractmethod
    def require_token(self) -> str:
        """
        Get a currently valid bearer token.
        
        Returns:
            Bearer token string
            
        Raises:
            TokenUnavailableError: If no token is stored and none can be refreshed
        """
        pass
