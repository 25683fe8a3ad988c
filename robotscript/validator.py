# Copyright 2025 Ralph Lemke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""RobotScript semantic validator.

Validates a program AST before it is handed to the runtime. Stages run in
a fixed order and the first failing stage decides the verdict:
- area geometry
- instance declarations
- initialization (areas, inventory, origins)
- procedures
- robot types
"""

import logging

from .ast import Program
from .bindings import validate_instances
from .config import RobotScriptConfig
from .declarations import validate_procedures, validate_robot_types
from .geometry import validate_areas
from .resources import validate_inits
from .results import ValidationResult

logger = logging.getLogger(__name__)


class RobotScriptValidator:
    """Validates RobotScript ASTs for semantic correctness.

    The validator keeps no state between calls: the same program always
    gets the same verdict.
    """

    def __init__(self, config: RobotScriptConfig | None = None):
        self.config = config if config is not None else RobotScriptConfig()

    def validate(self, program: Program) -> ValidationResult:
        """Validate a program AST.

        Args:
            program: The Program AST to validate

        Returns:
            ValidationResult holding the first error found, if any
        """
        stages = (
            ("areas", self._validate_areas),
            ("instances", self._validate_instances),
            ("inits", self._validate_inits),
            ("procedures", self._validate_procedures),
            ("robot types", self._validate_robot_types),
        )

        for stage, check in stages:
            logger.debug("Validating %s of program '%s'", stage, program.name)
            result = check(program)
            if result.is_internal:
                logger.warning("Malformed AST reached the %s stage: %s", stage, result.context)
                return result
            if result.has_error:
                logger.info("Validation failed in %s stage: %s", stage, result.error)
                return result

        logger.debug("Program '%s' is valid", program.name)
        return ValidationResult.success()

    def _validate_areas(self, program: Program) -> ValidationResult:
        grid = self.config.grid
        return validate_areas(program.areas, grid.min_coordinate, grid.max_coordinate)

    def _validate_instances(self, program: Program) -> ValidationResult:
        return validate_instances(program.instances, program.robot_types)

    def _validate_inits(self, program: Program) -> ValidationResult:
        return validate_inits(
            program.init, program.instances, program.areas, self.config.validator.item_kinds
        )

    def _validate_procedures(self, program: Program) -> ValidationResult:
        settings = self.config.validator
        return validate_procedures(
            program.procedures,
            _instance_names(program),
            settings.broadcast_target,
            settings.reject_shadowed_parameters,
        )

    def _validate_robot_types(self, program: Program) -> ValidationResult:
        return validate_robot_types(
            program.robot_types,
            program.procedures,
            _instance_names(program),
            self.config.validator.broadcast_target,
        )


def _instance_names(program: Program) -> frozenset[str]:
    return frozenset(instance.name for instance in program.instances)


def validate(program: Program, config: RobotScriptConfig | None = None) -> ValidationResult:
    """Validate a program AST.

    Args:
        program: The Program AST to validate
        config: Optional configuration (defaults apply when omitted)

    Returns:
        ValidationResult holding the first error found, if any
    """
    validator = RobotScriptValidator(config)
    return validator.validate(program)
