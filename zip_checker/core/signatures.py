# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Content type hints from static magic byte signatures.

Every rule is an (offset, pattern, label) triple tested independently against
the entry content. Rules never short-circuit each other, so one buffer can
collect several hints; the label order follows the rule order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .exceptions import SignatureRuleError
from .models import SignatureRule

if TYPE_CHECKING:
    from ..config.config import Config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Built-in signature table
# ---------------------------------------------------------------------------

# The ZIP, MS-Office and Apple Disk Image entries are single-offset heuristics,
# not format validators. "koly" is really a DMG trailer but is checked at 0.
BUILTIN_SIGNATURES: tuple[SignatureRule, ...] = (
    SignatureRule(0, b"%PDF", "PDF"),
    SignatureRule(0, b"MZ", "Windows Executable"),
    SignatureRule(0, b"\x7fELF", "ELF Executable"),
    SignatureRule(0, b"PK\x03", "ZIP"),
    SignatureRule(0, b"PK\x04", "ZIP"),
    SignatureRule(0, b"PK\x05", "ZIP"),
    SignatureRule(0, b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "MS-Office"),
    SignatureRule(0, b"koly", "Apple Disk Image"),
)


def match_signature(data: bytes, rule: SignatureRule) -> bool:
    """Check whether ``rule.pattern`` appears in ``data`` at ``rule.offset``.

    Buffers shorter than the rule's span never match.
    """
    if len(data) < rule.span:
        return False
    return data[rule.offset : rule.span] == rule.pattern


def classify(content: bytes, rules: tuple[SignatureRule, ...] | None = None) -> list[str]:
    """
    Collect the labels of every rule that matches ``content``.

    Args:
        content: Entry bytes (may be empty)
        rules: Rule table to evaluate, defaults to the built-in signatures

    Returns:
        Labels in rule order; empty when nothing matches
    """
    table = BUILTIN_SIGNATURES if rules is None else rules
    return [rule.label for rule in table if match_signature(content, rule)]


# ---------------------------------------------------------------------------
# Extra rules from YAML
# ---------------------------------------------------------------------------


def _rule_from_mapping(item: Any, index: int, source: Path) -> SignatureRule:
    """Build a SignatureRule from one YAML list item."""
    if not isinstance(item, dict):
        raise SignatureRuleError(f"{source}: signature #{index} must be a mapping")

    label = item.get("label")
    if not isinstance(label, str) or not label.strip():
        raise SignatureRuleError(f"{source}: signature #{index} is missing a label")

    offset = item.get("offset", 0)
    has_hex = "hex" in item
    has_ascii = "ascii" in item
    if has_hex == has_ascii:
        raise SignatureRuleError(f"{source}: signature '{label}' needs exactly one of 'hex' or 'ascii'")

    try:
        if has_hex:
            pattern = bytes.fromhex(str(item["hex"]))
        else:
            pattern = str(item["ascii"]).encode("ascii")
    except (ValueError, UnicodeEncodeError) as e:
        raise SignatureRuleError(f"{source}: signature '{label}' has an invalid pattern: {e}") from e

    return SignatureRule(offset=offset, pattern=pattern, label=label.strip())


def load_signature_rules(path: str | Path) -> tuple[SignatureRule, ...]:
    """
    Load additional signature rules from a YAML file.

    Expected layout::

        signatures:
          - label: PNG Image
            offset: 0
            hex: "89 50 4E 47 0D 0A 1A 0A"
          - label: RAR Archive
            ascii: "Rar!"

    Args:
        path: Path to the YAML file

    Returns:
        Rules in file order

    Raises:
        SignatureRuleError: If the file is missing or malformed
    """
    source = Path(path)
    try:
        with open(source, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SignatureRuleError(f"Cannot read signatures file {source}: {e}") from e
    except yaml.YAMLError as e:
        raise SignatureRuleError(f"Invalid YAML in signatures file {source}: {e}") from e

    if data is None:
        return ()
    if not isinstance(data, dict) or not isinstance(data.get("signatures", []), list):
        raise SignatureRuleError(f"{source}: expected a top-level 'signatures' list")

    rules = tuple(_rule_from_mapping(item, i, source) for i, item in enumerate(data.get("signatures") or []))
    logger.debug("Loaded %d signature rules from %s", len(rules), source)
    return rules


# ---------------------------------------------------------------------------
# Process-wide rule table
# ---------------------------------------------------------------------------

_rule_table: tuple[SignatureRule, ...] | None = None


def get_signature_rules(config: Config | None = None) -> tuple[SignatureRule, ...]:
    """Return the shared rule table, building it on first call.

    The table is the built-in signatures followed by any extra rules from
    ``Config.signatures_path``. Once built it is never mutated, so concurrent
    scans can read it freely.
    """
    global _rule_table
    if _rule_table is None:
        if config is None:
            from ..config.config import Config

            config = Config()
        extra: tuple[SignatureRule, ...] = ()
        if config.signatures_path:
            extra = load_signature_rules(config.signatures_path)
            logger.info("Using %d extra signature rules from %s", len(extra), config.signatures_path)
        _rule_table = BUILTIN_SIGNATURES + extra
    return _rule_table


def reset_signature_rules() -> None:
    """Drop the cached rule table so the next call rebuilds it."""
    global _rule_table
    _rule_table = None
