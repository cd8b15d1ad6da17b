# Copyright 2025 TIER IV, inc.
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

"""Validation of course directories."""

from .report import Message, Severity, ValidationResult
from .course_validator import CourseValidator, validate_course
from .stage_validator import StageValidator

__all__ = [
    'CourseValidator',
    'StageValidator',
    'ValidationResult',
    'Message',
    'Severity',
    'validate_course',
]
