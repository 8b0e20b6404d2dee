from linkshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config, RegistryConfig
from linkshortener.utils.helpers import utc_now, calendar_date, day_before, require_environment
from linkshortener.utils.shortener import generate_shortcode
from linkshortener.utils.validators import is_absolute_url, is_blank, is_valid_alias
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'RegistryConfig',
    'utc_now',
    'calendar_date',
    'day_before',
    'require_environment',
    'is_absolute_url',
    'is_blank',
    'is_valid_alias',
    'initialize_logging',
]
