"""Tests for backend selection."""
from finzen.adapters.factory import create_backend
from finzen.adapters.mock import MockDataBackend, MockIdentityProvider
from finzen.adapters.supabase_adapter import SupabaseDataBackend, SupabaseIdentityProvider
from finzen.config import Settings


def test_mock_backend_without_url():
    identity, data = create_backend(Settings(supabase_url="", backend="supabase"))
    assert isinstance(identity, MockIdentityProvider)
    assert isinstance(data, MockDataBackend)


def test_mock_backend_forced():
    identity, data = create_backend(Settings(supabase_url="https://demo.supabase.co", supabase_anon_key="k", backend="mock"))
    assert isinstance(data, MockDataBackend)


def test_supabase_backend():
    config = Settings(
        supabase_url="https://demo.supabase.co/",
        supabase_anon_key="anon",
        request_timeout=3.0,
    )
    identity, data = create_backend(config)

    assert isinstance(identity, SupabaseIdentityProvider)
    assert isinstance(data, SupabaseDataBackend)
    assert data.url == "https://demo.supabase.co"
    assert data.timeout == 3.0
