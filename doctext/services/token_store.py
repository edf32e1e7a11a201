"""
Token Store

Holds the bearer token used against the drive API. The store is created
at startup and passed explicitly to whoever needs it; there is no
module-level token state.
"""
import time
from typing import Callable, Optional, Tuple

from .interfaces import ITokenSupplier
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Returns a fresh (token, expires_in_seconds) pair
TokenRefresher = Callable[[], Tuple[str, Optional[int]]]


class TokenUnavailableError(Exception):
    """Raised when no valid token is stored and none can be refreshed."""
    pass


class TokenStore(ITokenSupplier):
    """
    Lifecycle-scoped bearer token storage with expiry.
    
    Features:
    - Optional expiry in seconds
    - Expired tokens are cleared on read
    - Optional refresh callable used by require_token()
    """
    
    def __init__(
        self,
        refresh: Optional[TokenRefresher] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize token store.
        
        Args:
            refresh: Callable returning a new (token, expires_in) pair
            clock: Time source in seconds
        """
        self._refresh = refresh
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None
    
    def set_token(self, token: str, expires_in_seconds: Optional[int] = None) -> None:
        """Store a token, optionally expiring after the given number of seconds."""
        self._token = token
        if expires_in_seconds:
            self._expires_at = self._clock() + expires_in_seconds
        else:
            self._expires_at = None
    
    def get_token(self) -> Optional[str]:
        """
        Get the stored token.
        
        Returns:
            The token, or None if none is stored or it has expired
        """
        if not self._token:
            return None
        
        if self._expires_at is not None and self._clock() >= self._expires_at:
            logger.debug("Stored token expired")
            self.clear()
            return None
        
        return self._token
    
    def clear(self) -> None:
        """Forget the stored token (logout or expiry)."""
        self._token = None
        self._expires_at = None
    
    def has_token(self) -> bool:
        return self.get_token() is not None
    
    def require_token(self) -> str:
        token = self.get_token()
        if token is not None:
            return token
        
        if self._refresh is None:
            raise TokenUnavailableError("No access token available")
        
        logger.info("Refreshing access token")
        new_token, expires_in = self._refresh()
        if not new_token:
            raise TokenUnavailableError("Token refresh returned no token")
        self.set_token(new_token, expires_in)
        return new_token
