"""Environment configuration module."""

from .env_loader import EnvLoader, get_env, is_feature_enabled, public_env, reset_env
from .env_schema import PublicSiteEnv, SiteEnv
from .errors import EnvIssue, SchemaValidationError, StartupAbortedError
from .features import FeatureFlag

__all__ = [
    "EnvLoader",
    "get_env",
    "is_feature_enabled",
    "public_env",
    "reset_env",
    "PublicSiteEnv",
    "SiteEnv",
    "EnvIssue",
    "SchemaValidationError",
    "StartupAbortedError",
    "FeatureFlag",
]
