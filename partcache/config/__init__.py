"""Configuration for partcache."""

from partcache.config.settings import AppSettings, get_settings, load_config

__all__ = ["AppSettings", "get_settings", "load_config"]
