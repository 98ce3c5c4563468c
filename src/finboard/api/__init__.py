"""Client for the PHP REST backend."""

from finboard.api.client import ApiClient, BackendError, unwrap_envelope
from finboard.api.resources import Backend

__all__ = ["ApiClient", "BackendError", "Backend", "unwrap_envelope"]
