"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/policy.py
Decides which copy of a duplicate is removed.

A Policy is exactly three rules, one per category (modification time, name length,
path length), evaluated in priority order. The first rule whose attribute differs
between two files decides; if none differs either file may go.

Default order: longname, longpath, new
(delete the longer name, then the longer path, then the newer file).
"""

from typing import Dict, List, Optional, Sequence, Tuple

from dedup.core.errors import ConfigurationError
from dedup.core.grouper import is_safe_pair
from dedup.core.models import DeleteWhich, FileRecord, PolicyCategory, PolicyRule

POLICY_TOKENS: Dict[str, PolicyRule] = {
    "old": PolicyRule(PolicyCategory.MOD_TIME, -1),
    "new": PolicyRule(PolicyCategory.MOD_TIME, 1),
    "shortname": PolicyRule(PolicyCategory.NAME, -1),
    "longname": PolicyRule(PolicyCategory.NAME, 1),
    "shortpath": PolicyRule(PolicyCategory.PATH, -1),
    "longpath": PolicyRule(PolicyCategory.PATH, 1),
}

DEFAULT_RULES: Tuple[PolicyRule, ...] = (
    POLICY_TOKENS["longname"],
    POLICY_TOKENS["longpath"],
    POLICY_TOKENS["new"],
)


def _attribute(file: FileRecord, category: PolicyCategory) -> int:
    if category is PolicyCategory.MOD_TIME:
        return file.mod_time
    if category is PolicyCategory.NAME:
        return len(file.name)
    return len(file.path)


class Policy:
    """Ordered comparator over the three rule categories."""

    def __init__(self, rules: Optional[Sequence[PolicyRule]] = None):
        rules = list(rules) if rules else []
        categories = [rule.category for rule in rules]
        if len(set(categories)) != len(categories):
            raise ConfigurationError("Each policy category may be given only once")

        # Missing categories are appended in default order.
        for rule in DEFAULT_RULES:
            if rule.category not in categories:
                rules.append(rule)
                categories.append(rule.category)

        self.rules: Tuple[PolicyRule, ...] = tuple(rules)

    @classmethod
    def from_spec(cls, spec: str = "") -> "Policy":
        """
        Builds a policy from a comma-separated token list such as "old,shortpath".

        Raises:
            ConfigurationError: for an unknown token or a repeated category
        """
        rules: List[PolicyRule] = []
        if spec and spec.strip():
            for token in spec.lower().split(","):
                token = token.strip()
                rule = POLICY_TOKENS.get(token)
                if rule is None:
                    raise ConfigurationError(
                        f"Invalid policy: '{token}'. Valid options: {', '.join(POLICY_TOKENS)}")
                if any(existing.category is rule.category for existing in rules):
                    raise ConfigurationError(f"Policy category repeated: '{token}'")
                rules.append(rule)
        return cls(rules)

    def delete_which(self, first: FileRecord, second: FileRecord) -> DeleteWhich:
        """Which of two equal-digest files should be removed."""
        if not is_safe_pair(first, second):
            return DeleteWhich.NEITHER

        for rule in self.rules:
            a = _attribute(first, rule.category)
            b = _attribute(second, rule.category)
            if a != b:
                first_is_larger = a > b
                if rule.direction > 0:
                    return DeleteWhich.FIRST if first_is_larger else DeleteWhich.SECOND
                return DeleteWhich.SECOND if first_is_larger else DeleteWhich.FIRST

        return DeleteWhich.EITHER

    def rank(self, files: Sequence[FileRecord]) -> Tuple[Optional[FileRecord], List[FileRecord]]:
        """
        Picks the keeper of a group and the members that may be removed.

        Members that are not safe duplicates of the keeper (same object reached
        through another path, size mismatch) are left out of both.
        On a tie the earlier member is kept.
        """
        if not files:
            return None, []

        keeper = files[0]
        candidates: List[FileRecord] = []
        for other in files[1:]:
            decision = self.delete_which(keeper, other)
            if decision is DeleteWhich.NEITHER:
                continue
            if decision is DeleteWhich.FIRST:
                candidates.append(keeper)
                keeper = other
            else:
                candidates.append(other)

        removable = [f for f in candidates if self.delete_which(keeper, f) is not DeleteWhich.NEITHER]
        return keeper, removable

    def __repr__(self):
        return "<Policy " + ",".join(f"{r.category.value}:{r.direction:+d}" for r in self.rules) + ">"
