from vesti.config.settings import FitSettings, get_settings
