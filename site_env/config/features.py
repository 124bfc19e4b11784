"""Feature flags derived from the validated environment."""

from enum import Enum
from typing import Callable, Dict, List, Union

from .env_schema import SiteEnv


class FeatureFlag(str, Enum):
    ANALYTICS = "analytics"
    SOCIAL = "social"
    BLOG = "blog"
    CONTACT = "contact"


_PREDICATES: Dict[FeatureFlag, Callable[[SiteEnv], bool]] = {
    FeatureFlag.ANALYTICS: lambda env: bool(env.gtm_id) or bool(env.ahrefs_key),
    FeatureFlag.SOCIAL: lambda env: bool(env.github_url or env.twitter_url or env.linkedin_url),
    FeatureFlag.BLOG: lambda env: bool(env.hashnode_publication_id) and bool(env.hashnode_api_key),
    FeatureFlag.CONTACT: lambda env: bool(env.contact_email) and bool(env.resend_api_key),
}


def evaluate_flag(env: SiteEnv, flag: Union[FeatureFlag, str]) -> bool:
    """
    Check whether enough configuration is present to enable a feature.

    Args:
        env: Validated site configuration
        flag: Feature flag or its name

    Returns:
        True if the feature is enabled, False otherwise (unknown flags included)
    """
    try:
        flag = FeatureFlag(flag)
    except ValueError:
        return False
    return _PREDICATES[flag](env)


def enabled_flags(env: SiteEnv) -> List[FeatureFlag]:
    """List every feature flag enabled by the given configuration."""
    return [flag for flag in FeatureFlag if _PREDICATES[flag](env)]
