"""
Resolve user-supplied preference codes to canonical catalog names.

A code is the canonical name lowercased with spaces turned into underscores
("Fine Dining" -> "fine_dining"). Alias tables cover codes the rule does not
produce; an alias overrides the derived entry for the same code. Codes that
resolve to nothing are dropped.
"""

from typing import Dict, Iterable, List, Optional


def to_code(name: str) -> str:
    return "_".join(name.strip().lower().split())


def build_code_map(vocabulary: Iterable[str], aliases: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    codes = {to_code(name): name for name in vocabulary}
    if aliases:
        codes.update({to_code(code): name for code, name in aliases.items()})
    return codes


class PreferenceMapper:
    def __init__(self, vocabulary: Iterable[str], aliases: Optional[Dict[str, str]] = None):
        self.vocabulary = list(vocabulary)
        self.aliases = dict(aliases or {})

    def resolve(self, codes: Optional[Iterable[str]]) -> List[str]:
        """Canonical names for `codes`, in request order, without duplicates."""
        if not codes:
            return []
        lookup = build_code_map(self.vocabulary, self.aliases)
        resolved: List[str] = []
        for code in codes:
            name = lookup.get(to_code(code))
            if name and name not in resolved:
                resolved.append(name)
        return resolved
