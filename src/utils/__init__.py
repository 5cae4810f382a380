from .config import ConfigError, GeneratorSettings, load_settings
