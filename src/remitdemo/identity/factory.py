"""Factory for the configured identity proxies."""

from remitdemo.config import get_settings
from remitdemo.identity.base import IdentityProxy, LvAuthProxy
from remitdemo.identity.mock import MockIdentityProxy, MockLvAuthProxy
from remitdemo.identity.upstream import HttpLvAuthProxy, MoldovaIdentityProxy

# Singleton instances
_identity_proxy: IdentityProxy | None = None
_lv_auth_proxy: LvAuthProxy | None = None


def get_identity_proxy() -> IdentityProxy:
    """Get the Moldova identity proxy.

    Falls back to canned mock responses when MOLDOVA_BASE_URL is empty.
    """
    global _identity_proxy

    if _identity_proxy is not None:
        return _identity_proxy

    settings = get_settings()
    if settings.moldova_mock:
        _identity_proxy = MockIdentityProxy()
    else:
        _identity_proxy = MoldovaIdentityProxy(
            base_url=settings.moldova_base_url,
            api_prefix=settings.moldova_api_prefix,
            api_key=settings.moldova_api_key,
            timeout=settings.upstream_timeout,
        )

    return _identity_proxy


def get_lv_auth_proxy() -> LvAuthProxy:
    """Get the LV Auth proxy (mock when MOCK_LV_AUTH=1 or no base URL)."""
    global _lv_auth_proxy

    if _lv_auth_proxy is not None:
        return _lv_auth_proxy

    settings = get_settings()
    if settings.lv_auth_mock:
        _lv_auth_proxy = MockLvAuthProxy()
    else:
        _lv_auth_proxy = HttpLvAuthProxy(
            base_url=settings.lv_auth_base_url,
            api_key=settings.lv_auth_api_key,
            register_path=settings.lv_auth_register_path,
            find_path=settings.lv_auth_find_path,
            delete_path=settings.lv_auth_delete_path,
            timeout=settings.upstream_timeout,
        )

    return _lv_auth_proxy


def set_identity_proxy(proxy: IdentityProxy | None) -> None:
    """Override the identity proxy (useful for testing)."""
    global _identity_proxy
    _identity_proxy = proxy


def set_lv_auth_proxy(proxy: LvAuthProxy | None) -> None:
    """Override the LV Auth proxy (useful for testing)."""
    global _lv_auth_proxy
    _lv_auth_proxy = proxy


def reset_proxies() -> None:
    """Reset proxy instances (useful for testing)."""
    global _identity_proxy, _lv_auth_proxy
    _identity_proxy = None
    _lv_auth_proxy = None
