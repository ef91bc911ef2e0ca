from .loader import DEFAULT_CONFIG, GateConfig, load_config

__all__ = ["DEFAULT_CONFIG", "GateConfig", "load_config"]
