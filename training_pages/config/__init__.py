"""Load and validate the training site configuration YAML.

This subpackage parses ``training.yaml``, resolves the content root and output
paths relative to the file, and produces dataclasses (:class:`SiteConfig`,
:class:`CategoryConfig`, :class:`SampleProjectConfig`) that the loader, the
navigation builder, and the CLI consume.

Examples
--------
>>> from pathlib import Path
>>> from training_pages.config import load_site_config
>>> site = load_site_config(Path("config/training.yaml"))  # doctest: +SKIP
>>> site.get_category("features").label  # doctest: +SKIP
'Framework Features'
"""

from .loader import load_site_config
from .models import (
    DEFAULT_REQUIRED_SECTIONS,
    CategoryConfig,
    SampleProjectConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "DEFAULT_REQUIRED_SECTIONS",
    "CategoryConfig",
    "SampleProjectConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]
