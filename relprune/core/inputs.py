"""Run inputs: parsing and validation.

Inputs arrive as raw strings from a key-value source (CLI options,
``INPUT_*`` environment variables, a config file). ``resolve_inputs`` turns
them into a validated ``PruneInputs`` or an ``InputError`` that ends the run
before any API call is made.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "INPUT_NAMES",
    "DEFAULT_KEEP_DAYS",
    "InputError",
    "PruneInputs",
    "env_inputs",
    "merge_inputs",
    "parse_dry_run",
    "parse_keep_days",
    "parse_tag_names",
    "resolve_inputs",
]

TAG_NAMES = "tag_names"
KEEP_DAYS_ASSETS = "keep_days_assets"
TOKEN = "token"
DRY_RUN = "dry_run"

INPUT_NAMES = (TAG_NAMES, KEEP_DAYS_ASSETS, TOKEN, DRY_RUN)

DEFAULT_KEEP_DAYS = 30

_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


@dataclass(frozen=True, slots=True)
class InputError:
    """A required input is missing or unusable."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PruneInputs:
    """Validated inputs for one run.

    Attributes:
        tag_names: Release tags to process, in input order.
        keep_days: Retention window in days. None when the raw value had no
            leading integer (the not-a-number case).
        token: API credential.
        dry_run: Only report what would be deleted.
    """

    tag_names: tuple[str, ...]
    keep_days: int | None
    token: str
    dry_run: bool = False

    @property
    def keep_days_label(self) -> str:
        return "NaN" if self.keep_days is None else str(self.keep_days)


def parse_tag_names(raw: str) -> tuple[str, ...]:
    """Split a comma-separated tag list, dropping blank entries."""
    return tuple(tag for tag in (piece.strip() for piece in raw.split(",")) if tag)


def parse_keep_days(raw: str | None) -> int | None:
    """Parse the retention window the way the Actions runtime always has.

    Empty or missing input means the default. Otherwise the leading integer
    is used and trailing junk ignored (``"12abc"`` is 12). Input without a
    leading integer yields None. A ``0x`` prefix reads the digits after it as
    hexadecimal (``"0x10"`` is 16), and a bare ``"0x"`` yields None.
    """
    text = (raw or "").strip() or str(DEFAULT_KEEP_DAYS)
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    sign, hex_digits, digits = match.groups()
    if hex_digits is not None:
        if not hex_digits:
            return None
        value = int(hex_digits, 16)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def parse_dry_run(raw: str | None) -> bool:
    """Only the exact literal ``"true"`` enables dry run."""
    return (raw or "").strip() == "true"


def _required(raw: Mapping[str, str], name: str) -> Result[str, InputError]:
    value = raw.get(name)
    if value is None:
        return Err(InputError(f"Input required and not supplied: {name}"))
    return Ok(value.strip())


def resolve_inputs(raw: Mapping[str, str]) -> Result[PruneInputs, InputError]:
    """Validate raw input strings.

    Args:
        raw: Input name to raw string value. Missing keys mean "not supplied".

    Returns:
        Ok(PruneInputs), or Err(InputError) for a missing tag list or token,
        or a tag list with no usable entries.
    """
    tags_raw = _required(raw, TAG_NAMES)
    if isinstance(tags_raw, Err):
        return tags_raw

    keep_days = parse_keep_days(raw.get(KEEP_DAYS_ASSETS))

    token = _required(raw, TOKEN)
    if isinstance(token, Err):
        return token
    if not token.value:
        return Err(InputError(f"Input required and not supplied: {TOKEN}"))

    dry_run = parse_dry_run(raw.get(DRY_RUN))

    tag_names = parse_tag_names(tags_raw.value)
    if not tag_names:
        return Err(
            InputError(
                "No valid tag names provided",
                hint="Pass a comma-separated list, e.g. --tags v1.0,nightly",
            )
        )

    return Ok(
        PruneInputs(
            tag_names=tag_names,
            keep_days=keep_days,
            token=token.value,
            dry_run=dry_run,
        )
    )


def env_inputs(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect inputs from ``INPUT_<NAME>`` variables, as the Actions runner sets them."""
    found: dict[str, str] = {}
    for name in INPUT_NAMES:
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        if key in environ:
            found[name] = environ[key]
    return found


def merge_inputs(*layers: Mapping[str, str | None]) -> dict[str, str]:
    """Merge input layers; later layers win, None values are skipped."""
    merged: dict[str, str] = {}
    for layer in layers:
        for name, value in layer.items():
            if value is not None:
                merged[name] = value
    return merged
