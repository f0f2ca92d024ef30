"""Core shared configuration and logging utilities."""

from core.structured_logging import (
    configure_structured_logging,
    file_scope,
    get_run_id,
    get_source_file,
    set_run_id,
)
from core.tags_config import (
    ConfigValidationError,
    TagsConfig,
    load_tags_config,
    resolve_strict_config_validation,
)

__all__ = [
    "configure_structured_logging",
    "file_scope",
    "get_run_id",
    "get_source_file",
    "set_run_id",
    "ConfigValidationError",
    "TagsConfig",
    "load_tags_config",
    "resolve_strict_config_validation",
]
