"""
Platform rule evaluation for manifest libraries.
"""

import functools
from typing import Sequence

from mclaunch.launch_models import Rule


class RuleEvaluator:
    """
    Decides whether a library applies to a platform from its ordered rule list.
    """

    def __init__(self, platform: str):
        self.platform = platform

    @staticmethod
    def _fold(allowed: bool, rule: Rule, platform: str) -> bool:
        if rule.applies_to(platform):
            return rule.is_allow()
        return allowed

    def is_allowed(self, rules: Sequence[Rule]) -> bool:
        """
        Left fold over the rules in manifest order.

        The fold starts at True only for an empty rule list; with rules present and none
        matching the platform the library is denied. Every rule whose platform is empty
        or equal to ours overwrites the result, so the last matching rule wins, and a
        trailing wildcard rule overrides an earlier platform-specific one.
        """
        return functools.reduce(
            lambda allowed, rule: self._fold(allowed, rule, self.platform),
            rules,
            len(rules) == 0,
        )
