"""YAML frontmatter parsing and generation for markdown documents.

Frontmatter is a flat mapping of string keys to scalar values fenced by
``---`` lines at the very start of the document. It travels beside the ADF
tree rather than inside it; callers use it to recover page identity
(pageId, title, spaceKey) for update workflows.

String values that YAML would otherwise read back as another type, such as
an all-digit page ID, are emitted double-quoted so they stay strings.
"""

import datetime
import logging
import re
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import FrontmatterError
from .models import Metadata

logger = logging.getLogger(__name__)

_STR_TAG = 'tag:yaml.org,2002:str'
_ALL_DIGITS = re.compile(r'[0-9]+')


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper that double-quotes strings which would not read back as strings."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if _ALL_DIGITS.fullmatch(data) or dumper.resolve(yaml.ScalarNode, data, (True, False)) != _STR_TAG:
        return dumper.represent_scalar(_STR_TAG, data, style='"')
    return dumper.represent_str(data)


_FrontmatterDumper.add_representer(str, _represent_str)


class FrontmatterHandler:
    """Handles YAML frontmatter operations for markdown documents.

    Frontmatter format:
        ---
        pageId: "123"
        title: Test Page
        spaceKey: TEST
        ---

    The closing fence must be followed by a newline; a trailing --- that ends
    the input is a rule, not a fence.
    """

    # Opening fence, lazily-matched body, closing fence on its own line
    FRONTMATTER_PATTERN = re.compile(r'\A---\n(.*?)\n---\n', re.DOTALL)

    SCALAR_TYPES = (str, int, float, bool, datetime.date, type(None))

    PAGE_ID_KEY = 'pageId'

    @classmethod
    def split(cls, content: str, source: str = "<markdown>") -> Tuple[Optional[Metadata], str]:
        """Separate frontmatter from the markdown body.

        Args:
            content: Full markdown text, newlines already normalised to \\n
            source: Name of the input used in error messages

        Returns:
            Tuple of (metadata, body). Metadata is None when the input has no
            frontmatter or an empty block; the body is trimmed when
            frontmatter was present and returned unchanged otherwise.

        Raises:
            FrontmatterError: If the block is not valid YAML or not a flat mapping
        """
        match = cls.FRONTMATTER_PATTERN.match(content)
        if not match:
            return None, content

        metadata = cls.decode(match.group(1), source)
        return metadata, content[match.end():].strip()

    @classmethod
    def decode(cls, frontmatter_str: str, source: str = "<markdown>") -> Optional[Metadata]:
        """Decode the text between the fences into a flat mapping.

        Raises:
            FrontmatterError: If YAML is invalid, not a mapping, or nested
        """
        try:
            frontmatter = yaml.safe_load(frontmatter_str)
        except yaml.YAMLError as e:
            raise FrontmatterError(
                source,
                f"Invalid YAML syntax: {str(e)}"
            )

        if frontmatter is None:
            logger.debug(f"Empty frontmatter block in {source}")
            return None

        if not isinstance(frontmatter, dict):
            raise FrontmatterError(
                source,
                f"Frontmatter must be a YAML dictionary, got {type(frontmatter).__name__}"
            )

        cls._validate_flat(frontmatter, source)
        return frontmatter

    @classmethod
    def generate(cls, metadata: Optional[Metadata], sort_keys: bool = False) -> str:
        """Render metadata as a fenced frontmatter block.

        Args:
            metadata: Flat mapping to emit; None or empty emits nothing
            sort_keys: Emit keys sorted instead of in insertion order

        Returns:
            ``---\\n<yaml>---\\n\\n`` or an empty string

        Raises:
            FrontmatterError: If metadata is not a flat mapping of scalars
        """
        if not metadata:
            return ""

        cls._validate_flat(metadata, "<metadata>")

        yaml_str = yaml.dump(
            metadata,
            Dumper=_FrontmatterDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=sort_keys,
            width=float("inf"),
        )
        return f"---\n{yaml_str}---\n\n"

    @classmethod
    def get_page_id(cls, content: str) -> Optional[str]:
        """Extract the page ID from frontmatter, if present.

        Args:
            content: Full markdown content including frontmatter

        Returns:
            Page ID string, or None if there is no usable frontmatter
        """
        try:
            metadata, _ = cls.split(content)
        except FrontmatterError:
            return None

        if metadata and metadata.get(cls.PAGE_ID_KEY) is not None:
            return str(metadata[cls.PAGE_ID_KEY])
        return None

    @classmethod
    def _validate_flat(cls, mapping: Dict[Any, Any], source: str) -> None:
        for key, value in mapping.items():
            if not isinstance(key, str):
                raise FrontmatterError(
                    source,
                    f"Frontmatter keys must be strings, got {type(key).__name__} ({key!r})"
                )
            if not isinstance(value, cls.SCALAR_TYPES):
                raise FrontmatterError(
                    source,
                    f"Frontmatter value for '{key}' must be a scalar, got {type(value).__name__}"
                )
