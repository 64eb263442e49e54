from vdbexport.config.settings import Settings, get_settings, load_config
from vdbexport.config.whitelist import load_whitelist

__all__ = ["Settings", "get_settings", "load_config", "load_whitelist"]
