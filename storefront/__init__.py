"""Configuration and startup-time file handling for the storefront."""

from storefront.config import Config, ConfigError, get_config
from storefront.file_pipeline import FilePipelineError, PipelinePaths, run_startup_pipeline

__all__ = [
    'Config',
    'ConfigError',
    'get_config',
    'FilePipelineError',
    'PipelinePaths',
    'run_startup_pipeline',
]
