from .base import IdentityProvider, DataBackend
from .mock import MockIdentityProvider, MockDataBackend
from .supabase_adapter import SupabaseIdentityProvider, SupabaseDataBackend
from .factory import create_backend, get_backend

__all__ = [
    "IdentityProvider",
    "DataBackend",
    "MockIdentityProvider",
    "MockDataBackend",
    "SupabaseIdentityProvider",
    "SupabaseDataBackend",
    "create_backend",
    "get_backend",
]
