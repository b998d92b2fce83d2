from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.catalog_api.runtime.config.config_data import ConfigData
from src.catalog_api.runtime.config.config_template import load_templated_yaml
from src.catalog_api.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_config(settings: EnvironmentVariables | None = None) -> ConfigData:
    """Load the configuration file named by the environment.

    Falls back to built-in defaults when the file does not exist so the
    service can start from a bare checkout.
    """
    settings = settings or EnvironmentVariables()
    path = Path(settings.config_file)
    if not path.exists():
        logger.warning("Config file {} not found; using defaults", path)
        config = ConfigData()
        config.app.environment = settings.environment
        if settings.log_level:
            config.logging.level = settings.log_level
        return config
    return load_templated_yaml(path, env_mode=settings.environment)


# Global configuration instance
_default_context = AppContext(config=load_config())


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context."""
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _dump_explicit_fields(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, at any nesting depth.

    A nested model is included whole when any of its own fields were set,
    even if the parent never marked the nested attribute as set.
    """
    result = {}
    for field_name in model.__class__.model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            nested = _dump_explicit_fields(value)
            if nested:
                result[field_name] = nested
            elif field_name in model.model_fields_set:
                result[field_name] = value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    result = base_dict.copy()
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value
    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge explicitly set values of ``override_config`` over ``base_config``."""
    merged = _recursive_dict_merge(
        base_config.model_dump(), _dump_explicit_fields(override_config)
    )
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Context manager for temporarily overriding the application context.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the parent context.

    Example:
        override = ConfigData()
        override.pagination.max_limit = 5
        with with_context(override):
            assert get_config().pagination.max_limit == 5
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
