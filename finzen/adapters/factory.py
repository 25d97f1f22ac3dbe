"""Factory for creating backend adapters."""
import logging
from typing import Optional, Tuple
from finzen.adapters.base import DataBackend, IdentityProvider
from finzen.adapters.mock import MockDataBackend, MockIdentityProvider
from finzen.adapters.supabase_adapter import SupabaseDataBackend, SupabaseIdentityProvider
from finzen.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Global instances
_identity: Optional[IdentityProvider] = None
_data: Optional[DataBackend] = None


def create_backend(config: Optional[Settings] = None) -> Tuple[IdentityProvider, DataBackend]:
    """
    Create the identity provider and data backend described by the settings.

    Args:
        config: Settings to read; the module-level settings by default

    Returns:
        (identity provider, data backend) pair. The in-memory mock pair is
        returned when ``backend`` is "mock" or no Supabase URL is configured.
    """
    config = config or default_settings
    if config.use_mock_backend:
        logger.info("Using in-memory mock backend")
        return MockIdentityProvider(), MockDataBackend()

    kwargs = {
        "url": config.supabase_url,
        "anon_key": config.supabase_anon_key,
        "timeout": config.request_timeout,
    }
    logger.info("Using Supabase backend at %s", config.supabase_url)
    return SupabaseIdentityProvider(**kwargs), SupabaseDataBackend(**kwargs)


def get_backend() -> Tuple[IdentityProvider, DataBackend]:
    """Get the shared adapter instances, creating them on first use."""
    global _identity, _data
    if _identity is None or _data is None:
        _identity, _data = create_backend()
    return _identity, _data

