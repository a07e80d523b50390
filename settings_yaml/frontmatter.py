# Copyright 2025 Roger Cibrian
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

"""Markdown documents with YAML frontmatter.

Settings files are markdown documents whose metadata lives in a YAML block
delimited by ``---`` lines:

    ---
    colors:
      primary: "#f00"
    ---

    Optional markdown body.

A document without a frontmatter block has empty metadata and the whole
text as its body. An empty block (``---`` directly followed by ``---``) is
empty metadata as well.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Any

import yaml

from settings_yaml.exceptions import FrontmatterError

__all__ = ["ParsedDocument", "FrontmatterParser", "parse_frontmatter"]

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)(.*)\Z",
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class ParsedDocument:
    """Metadata and body of one settings document."""

    metadata: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_frontmatter(text: str, source: str | Path | None = None) -> ParsedDocument:
    """
    Split a document into YAML metadata and markdown body.

    Args:
        text: Raw document text.
        source: File the text came from, used in error messages.

    Returns:
        ParsedDocument with the metadata mapping and the stripped body.

    Raises:
        FrontmatterError: If the block is not valid YAML or not a mapping.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    match = _FRONTMATTER_RE.match(text)
    if not match:
        return ParsedDocument({}, text.strip())

    where = f" in {source}" if source is not None else ""
    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as err:
        raise FrontmatterError(f"Invalid YAML in frontmatter{where}: {err}") from err

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping{where}, got {type(metadata).__name__}"
        )

    return ParsedDocument(metadata, match.group(2).strip())


class FrontmatterParser:
    """Parses settings documents from text or from disk."""

    encoding = "utf-8"

    def parse(self, text: str, source: str | Path | None = None) -> ParsedDocument:
        return parse_frontmatter(text, source)

    def parse_file(self, path: Path) -> ParsedDocument:
        return self.parse(path.read_text(encoding=self.encoding), path)
