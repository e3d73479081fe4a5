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

"""YAML/JSON schema description parser with caching support."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union

from ...config import config
from ...exceptions import SchemaDefinitionError

logger = logging.getLogger(__name__)


class SchemaFileParser:
    """Parser for schema description documents and data payload files.

    JSON is a subset of YAML, so ``yaml.safe_load`` reads both formats.
    """

    def __init__(self, cache_enabled: bool = None):
        """Initialize the parser.

        Args:
            cache_enabled: Whether to cache parsed files by path. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else config.cache_enabled
        self._cache: Dict[Path, Any] = {}

    def load_document(self, file_path: Union[str, Path]) -> Any:
        """Load a YAML or JSON document.

        Args:
            file_path: Path to the document

        Returns:
            Parsed content (an empty document loads as an empty dict)

        Raises:
            SchemaDefinitionError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise SchemaDefinitionError(f"File not found: {path}")

        if not path.is_file():
            raise SchemaDefinitionError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[path]

        try:
            logger.debug(f"Loading document: {path}")
            with open(path, 'r', encoding='utf-8') as stream:
                document = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise SchemaDefinitionError(f"Failed to parse file {path}: {exc}") from exc
        except OSError as exc:
            raise SchemaDefinitionError(f"Failed to read file {path}: {exc}") from exc

        if document is None:
            document = {}

        if self.cache_enabled:
            self._cache[path] = document

        return document

    def load_document_from_string(self, content: str) -> Any:
        """Load a YAML or JSON document from string content.

        Raises:
            SchemaDefinitionError: If content cannot be parsed
        """
        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SchemaDefinitionError(f"Failed to parse content: {exc}") from exc

        if document is None:
            document = {}
        return document

    def clear_cache(self):
        """Clear the document cache."""
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
schema_parser = SchemaFileParser()
