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

"""Result reporting for the command line tool."""

from pathlib import Path
from typing import List, Dict, Any, Optional


class ValidationReport:
    """Container for validation results for a single data file."""

    def __init__(self, file_path: Path):
        """Initialize the report.

        Args:
            file_path: Path to the data file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, message: str, property: Optional[str] = None):
        """Add an error message.

        Args:
            message: Error message
            property: Top-level schema member that failed, when known
        """
        error = {'message': message}
        if property is not None:
            error['property'] = property
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {'file': str(self.file_path), 'errors': self.errors}
