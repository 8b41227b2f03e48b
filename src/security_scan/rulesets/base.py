"""YAML-backed ruleset base class."""

import logging
import sys
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import ValidationError

from security_scan.errors import RulesetError
from security_scan.rulesets.types import SecurityRule, SecurityRulesetData

logger = logging.getLogger(__name__)


class YAMLRuleset:
    """Base class for YAML-backed rulesets.

    Subclasses need only define the ClassVars. The YAML file is expected at:
        {subclass_module_dir}/data/{version}/{name}.yaml

    Rules are loaded lazily on first access and then kept as an immutable
    tuple, so one ruleset instance can be shared by concurrent scans.
    """

    ruleset_name: ClassVar[str]
    ruleset_version: ClassVar[str]

    def __init__(self) -> None:
        """Initialise the YAML-backed ruleset."""
        self._data_cache: SecurityRulesetData | None = None
        self._rules_cache: tuple[SecurityRule, ...] | None = None
        logger.debug(f"Initialised {self.ruleset_name} ruleset v{self.ruleset_version}")

    @property
    def name(self) -> str:
        """Get the canonical name of this ruleset."""
        return self.ruleset_name

    @property
    def version(self) -> str:
        """Get the version of this ruleset."""
        return self.ruleset_version

    def _get_data_file_path(self) -> Path:
        """Get the path to the YAML data file next to the subclass module."""
        module_file = sys.modules[self.__class__.__module__].__file__
        if module_file is None:
            msg = f"Cannot determine file path for module {self.__class__.__module__}"
            raise RulesetError(msg)
        return (
            Path(module_file).parent
            / "data"
            / self.ruleset_version
            / f"{self.ruleset_name}.yaml"
        )

    def _load_data(self) -> SecurityRulesetData:
        """Load, validate and cache the ruleset data.

        Raises:
            RulesetError: If the file is missing, unparseable or invalid

        """
        if self._data_cache is None:
            yaml_file = self._get_data_file_path()
            try:
                with yaml_file.open("r", encoding="utf-8") as f:
                    raw_data = yaml.safe_load(f)
                self._data_cache = SecurityRulesetData.model_validate(raw_data)
            except (OSError, yaml.YAMLError, ValidationError) as e:
                raise RulesetError(
                    f"Failed to load ruleset {self.name} v{self.version} "
                    f"from {yaml_file}: {e}"
                ) from e
            logger.debug(f"Loaded {len(self._data_cache.rules)} rules from {self.name}")
        return self._data_cache

    def get_rules(self) -> tuple[SecurityRule, ...]:
        """Get the rules defined by this ruleset.

        Returns:
            Immutable tuple of rules loaded from the YAML file.

        """
        if self._rules_cache is None:
            self._rules_cache = tuple(self._load_data().rules)
        return self._rules_cache
