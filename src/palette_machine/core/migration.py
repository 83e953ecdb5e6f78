"""
Variable-identifier migration between exports.

Figma keeps a ``com.figma.variableId`` on every variable it imported. When a
document is regenerated, the identifier of the matching variable in the prior
export is copied onto the new leaf so that Figma updates the variable instead
of creating a new one. Renamed hues and remapped shades are handled with
migration maps: target name -> source name in the prior document, or
``"new"`` for "do not look up".

Lookups try an ordered list of candidate paths, covering the current layout
and the older ones (nested palette, legacy ``step`` group, flat shades,
``on-name`` foreground keys).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .ir.analysis import PaletteAnalysis, SemanticAnalysis
from .ir.palettespec import NamingConfig
from .token_paths import LEGACY_SHADE_GROUP, ROOT_KEY
from .token_tree import VARIABLE_ID_KEY

logger = logging.getLogger(__name__)

NEW_SOURCE = "new"

Candidate = tuple[str, ...]

_GRAY_ALIASES = {"gray": "grey", "grey": "gray"}


# =============================================================================
# Migration maps
# =============================================================================


def create_hue_mapping(file_hues: Iterable[str], machine_hues: Iterable[str]) -> dict[str, str]:
    """Map each hue found in a prior file to a palette hue.

    Names match case-insensitively and ``gray``/``grey`` are equivalent.
    File hues without a match map to themselves.
    """
    machine = list(machine_hues)
    mapping: dict[str, str] = {}
    for file_hue in file_hues:
        normalized = file_hue.lower()
        match = next(
            (
                hue
                for hue in machine
                if hue.lower() == normalized or _GRAY_ALIASES.get(normalized) == hue
            ),
            None,
        )
        mapping[file_hue] = match if match is not None else file_hue
    return mapping


def create_shade_source_map(file_shades: Iterable[str], stops: Iterable[str]) -> dict[str, str]:
    """Each stop maps to itself when the prior file has it, else to ``"new"``."""
    present = set(file_shades)
    return {stop: stop if stop in present else NEW_SOURCE for stop in stops}


def theme_shades(analysis: SemanticAnalysis) -> list[str]:
    """Shades used anywhere in a theme document (intents and hues)."""
    if not analysis.ok:
        return []
    return sorted(analysis.all_shades(), key=lambda s: (not s.isdigit(), int(s) if s.isdigit() else 0, s))


def find_duplicate_sources(mapping: Mapping[str, str]) -> dict[str, list[str]]:
    """Sources claimed by two or more targets.

    Sharing a source is allowed; the caller decides whether to warn.
    """
    targets_by_source: dict[str, list[str]] = {}
    for target, source in mapping.items():
        if not source or source == NEW_SOURCE:
            continue
        targets_by_source.setdefault(source, []).append(target)
    return {source: targets for source, targets in targets_by_source.items() if len(targets) > 1}


def resolve_source(mapping: Mapping[str, str] | None, target: str) -> str | None:
    """Source name to look up for ``target``, or None when it is new.

    Targets missing from the map look up their own name.
    """
    if mapping is None:
        return target
    source = mapping.get(target, target)
    if not source or source == NEW_SOURCE:
        return None
    return source


def file_hue_for(hue_mapping: Mapping[str, str] | None, machine_hue: str) -> str:
    """Reverse lookup: the prior file's name for a palette hue."""
    if hue_mapping:
        for file_hue, mapped in hue_mapping.items():
            if mapped == machine_hue:
                return file_hue
    return machine_hue


# =============================================================================
# Prior document
# =============================================================================


class PriorDocument:
    """Read-only view over a previously exported document."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: Mapping[str, Any] = data or {}

    @classmethod
    def from_analysis(cls, analysis: SemanticAnalysis | PaletteAnalysis | None) -> PriorDocument:
        """An erroring or missing analysis gives an empty document."""
        if analysis is None or not analysis.ok:
            return cls()
        return cls(analysis.raw)

    def __bool__(self) -> bool:
        return bool(self._data)

    def node(self, path: Sequence[str]) -> Any | None:
        node: Any = self._data
        for segment in path:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node

    def variable_id(self, candidates: Sequence[Sequence[str]]) -> str | None:
        """Identifier of the first candidate path whose node carries one."""
        for path in candidates:
            node = self.node(path)
            if not isinstance(node, Mapping):
                continue
            extensions = node.get("$extensions")
            if isinstance(extensions, Mapping) and extensions.get(VARIABLE_ID_KEY):
                return extensions[VARIABLE_ID_KEY]
        if self._data:
            logger.debug(f"No prior variable id among {len(candidates)} candidate paths")
        return None


# =============================================================================
# Candidate paths
# =============================================================================


def _dedupe(candidates: Iterable[Candidate]) -> list[Candidate]:
    return list(dict.fromkeys(candidates))


def _hue_variants(file_hue: str) -> list[str]:
    variants = [file_hue]
    if file_hue in _GRAY_ALIASES:
        variants.append(_GRAY_ALIASES[file_hue])
    return variants


def palette_candidates(file_hue: str, source_shade: str) -> list[Candidate]:
    """Nested then flat, then the same two with gray/grey swapped."""
    candidates: list[Candidate] = [
        (file_hue, source_shade),
        (f"--{file_hue}-{source_shade}",),
    ]
    for hue in _hue_variants(file_hue)[1:]:
        candidates.append((hue, source_shade))
    for hue in _hue_variants(file_hue)[1:]:
        candidates.append((f"--{hue}-{source_shade}",))
    return candidates


def palette_alpha_candidates(file_hue: str, source_shade: str, alpha: int) -> list[Candidate]:
    candidates: list[Candidate] = []
    for hue in _hue_variants(file_hue):
        candidates.append((f"--{hue}-{source_shade}/{alpha}",))
        candidates.append((hue, source_shade, str(alpha)))
    return candidates


def _shade_containers(base: Sequence[str], shade_group: str) -> list[Candidate]:
    containers: list[Candidate] = []
    if shade_group:
        containers.append((*base, shade_group))
    containers.append((*base, LEGACY_SHADE_GROUP))
    containers.append(tuple(base))
    return _dedupe(containers)


def shade_candidates(base: Sequence[str], source_shade: str, shade_group: str) -> list[Candidate]:
    """A shade under the shade group, the legacy ``step`` group, or directly
    under ``base``; for each, the ``$root`` of a shade with alphas first."""
    candidates: list[Candidate] = []
    for container in _shade_containers(base, shade_group):
        candidates.append((*container, source_shade, ROOT_KEY))
        candidates.append((*container, source_shade))
    return candidates


def shade_alpha_candidates(
    base: Sequence[str], source_shade: str, alpha: int, shade_group: str
) -> list[Candidate]:
    return [
        (*container, source_shade, str(alpha))
        for container in _shade_containers(base, shade_group)
    ]


def root_candidates(base: Sequence[str]) -> list[Candidate]:
    """A group's own value: the node itself, then its ``$root`` leaf."""
    return [tuple(base), (*base, ROOT_KEY)]


def foreground_bases(name: str, naming: NamingConfig) -> list[Candidate]:
    """Places where the on-color subtree of ``name`` may live.

    The configured layout comes first, then the nested ``on`` group and the
    ``on-name`` / ``on/name`` keys used by earlier exports.
    """
    configured: Candidate
    if naming.on_nested:
        configured = (naming.on_group_name, name)
    else:
        configured = (f"{naming.foreground_modifier}{name}",)
    return _dedupe([configured, ("on", name), (f"on-{name}",), (f"on/{name}",)])


def under(bases: Iterable[Sequence[str]], build) -> list[Candidate]:
    """Apply a candidate builder to each base path, keeping order."""
    candidates: list[Candidate] = []
    for base in bases:
        candidates.extend(build(base))
    return _dedupe(candidates)
