"""Environment loader with a process-wide validated cache."""

import json
import logging
import os
import threading
from typing import List, Mapping, Optional, Union

from pydantic import ValidationError

from .env_schema import PublicSiteEnv, SiteEnv
from .errors import SchemaValidationError, StartupAbortedError
from .features import FeatureFlag, enabled_flags, evaluate_flag

logger = logging.getLogger(__name__)


class EnvLoader:
    """Validate environment variables once and serve the cached result."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the environment loader.

        Args:
            environ: Mapping to validate. If None, os.environ is read on first load.
        """
        self._environ = environ
        self._lock = threading.Lock()
        self._env: Optional[SiteEnv] = None
        self._public: Optional[PublicSiteEnv] = None

    def load(self, environ: Optional[Mapping[str, str]] = None) -> SiteEnv:
        """
        Load and validate the environment, once per loader.

        Later calls return the cached object and ignore ``environ``.

        Args:
            environ: Mapping to validate instead of the loader's default source

        Returns:
            Validated SiteEnv

        Raises:
            StartupAbortedError: If NODE_ENV is production and required variables are missing
            SchemaValidationError: If validation fails otherwise
        """
        env = self._env
        if env is not None:
            return env

        with self._lock:
            if self._env is None:
                source = self._resolve_source(environ)
                parsed = self._parse(source)
                self._public = PublicSiteEnv.from_env(parsed)
                self._env = parsed
            return self._env

    @staticmethod
    def validate(environ: Mapping[str, str]) -> SiteEnv:
        """
        Validate a mapping without caching or logging.

        Args:
            environ: Environment mapping

        Returns:
            Validated SiteEnv

        Raises:
            SchemaValidationError: If any variable is missing or invalid
        """
        try:
            return SiteEnv.model_validate(dict(environ))
        except ValidationError as e:
            raise SchemaValidationError.from_validation_error(e, environ) from e

    def is_loaded(self) -> bool:
        return self._env is not None

    def reset(self) -> None:
        """Drop the cached configuration so the next load validates again."""
        with self._lock:
            self._env = None
            self._public = None

    def public_view(self) -> PublicSiteEnv:
        self.load()
        return self._public

    def is_feature_enabled(self, flag: Union[FeatureFlag, str]) -> bool:
        return evaluate_flag(self.load(), flag)

    def enabled_features(self) -> List[FeatureFlag]:
        return enabled_flags(self.load())

    def _resolve_source(self, environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
        if environ is not None:
            return environ
        if self._environ is not None:
            return self._environ
        return os.environ

    def _parse(self, source: Mapping[str, str]) -> SiteEnv:
        try:
            env = self.validate(source)
        except SchemaValidationError as e:
            self._report(e)
            if source.get("NODE_ENV") == "production" and e.missing_fields:
                raise StartupAbortedError(e.issues) from e
            # Non-production runs stop here as well.
            raise

        logger.debug(f"Environment validated (NODE_ENV={env.node_env})")
        return env

    @staticmethod
    def _report(error: SchemaValidationError) -> None:
        missing = list(error.missing_fields)

        logger.error("✗ Environment validation failed")
        logger.error(f"Missing or invalid variables: {missing}")
        logger.error("Add these to your .env.local file:")
        for name in missing:
            logger.error(f"  {name}=")
        details = json.dumps([issue.to_dict() for issue in error.issues], indent=2)
        logger.error(f"Full error details: {details}")


_default_loader = EnvLoader()


def get_env() -> SiteEnv:
    """
    Convenience function to load the process environment.

    Returns:
        Validated SiteEnv, cached for the life of the process
    """
    return _default_loader.load()


def is_feature_enabled(flag: Union[FeatureFlag, str]) -> bool:
    return _default_loader.is_feature_enabled(flag)


def public_env() -> PublicSiteEnv:
    return _default_loader.public_view()


def reset_env() -> None:
    _default_loader.reset()
