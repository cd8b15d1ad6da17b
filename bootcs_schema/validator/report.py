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

"""Result reporting for course validation."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_PREFIXES = {
    Severity.ERROR: "❌ ",
    Severity.WARNING: "⚠️  ",
    Severity.INFO: "✅ ",
}


@dataclass(frozen=True)
class Message:
    severity: Severity
    text: str

    def __str__(self) -> str:
        return f"{_PREFIXES[self.severity]}{self.text}"


class ValidationResult:
    """Outcome of one full validation run over a course directory."""

    def __init__(self, course_dir: Optional[Path] = None):
        """Initialize validation result.

        Args:
            course_dir: Course directory being validated
        """
        self.course_dir = course_dir
        self.error_count = 0
        self.stage_count = 0
        self.entries: List[Message] = []

    @property
    def valid(self) -> bool:
        return self.error_count == 0

    @property
    def messages(self) -> List[str]:
        """All findings as display strings, in discovery order."""
        return [str(entry) for entry in self.entries]

    @property
    def errors(self) -> List[str]:
        return [e.text for e in self.entries if e.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[str]:
        return [e.text for e in self.entries if e.severity is Severity.WARNING]

    @property
    def infos(self) -> List[str]:
        return [e.text for e in self.entries if e.severity is Severity.INFO]

    def add_error(self, message: str):
        """Add an error message; any error makes the result invalid."""
        self.error_count += 1
        self.entries.append(Message(Severity.ERROR, message))

    def add_warning(self, message: str):
        self.entries.append(Message(Severity.WARNING, message))

    def add_info(self, message: str):
        self.entries.append(Message(Severity.INFO, message))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'course_dir': str(self.course_dir) if self.course_dir is not None else None,
            'valid': self.valid,
            'error_count': self.error_count,
            'stage_count': self.stage_count,
            'messages': [
                {'severity': entry.severity.value, 'message': entry.text}
                for entry in self.entries
            ],
        }
