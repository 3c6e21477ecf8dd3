from droponoff.services.config_manager import ConfigManager

__all__ = ["ConfigManager"]
