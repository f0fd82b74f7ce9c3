"""Steam storefront adapter."""

from __future__ import annotations

from .client import SteamClient, parse_steam_appid

__all__ = ["SteamClient", "parse_steam_appid"]
