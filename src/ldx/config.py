"""Loading the rule set from the project's ldx_config.py.

The config file is ordinary Python so transforms can be written inline:

```python
# ldx_config.py
RULES = {
    "Compiled successfully": "✅ compiled",
    "webpack": lambda line: line.split("webpack", 1)[1].strip(),
    "DEBUG": "",  # suppress
}
```
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from ldx.rules import RuleSet

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "ldx_config.py"
RULES_ATTRIBUTE = "RULES"


class ConfigError(Exception):
    """Raised when the config file is missing or cannot be turned into rules."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def config_path(directory: Path | None = None) -> Path:
    """Location of the config file for ``directory`` (default: the working directory)."""
    base = directory if directory is not None else Path.cwd()
    return base / CONFIG_FILE_NAME


def load_rules(directory: Path | None = None) -> RuleSet:
    """Import ``ldx_config.py`` from ``directory`` and return its RULES.

    Raises:
        ConfigError: The file is absent, fails to import, has no RULES, or
            RULES is not a mapping / list of (pattern, action) pairs.
    """
    path = config_path(directory)
    if not path.is_file():
        raise ConfigError(path, "file not found")

    spec = importlib.util.spec_from_file_location("ldx_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError(path, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:  # noqa: BLE001
        raise ConfigError(path, f"failed to import: {e}") from e

    if not hasattr(module, RULES_ATTRIBUTE):
        raise ConfigError(path, f"no {RULES_ATTRIBUTE} defined")

    try:
        rules = RuleSet.coerce(getattr(module, RULES_ATTRIBUTE))
    except (TypeError, ValueError) as e:
        raise ConfigError(path, f"invalid {RULES_ATTRIBUTE}: {e}") from e

    logger.debug("Loaded %d rules from %s", len(rules), path)
    return rules
