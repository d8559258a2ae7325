"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Turns a duplicate group plus a user decision into deletions.

DECISIONS
---------
  • blank or "y"/"yes"  : keep index 0 (the first-discovered path)
  • an integer K        : keep index K, valid only for 0 <= K < len(paths)
  • anything else       : decline, nothing is touched

DELETION POLICY
---------------
  • CONTINUE (default)  : every non-kept path is attempted, every failure reported
  • ABORT               : the first failure stops the group, later paths stay on disk

Resolution only touches the filesystem. The registry the group came from is
never modified.
"""

import re
import logging

from dupes.core.interfaces import Resolver, Remover
from dupes.core.models import (
    Decision, DecisionKind, DeletionError, DeletionPolicy, DuplicateGroup,
    ResolutionOutcome, ResolutionStatus,
)
from dupes.services.file_service import FileService

logger = logging.getLogger(__name__)

AFFIRMATIVE_RE = re.compile(r"^(y|yes)$", re.IGNORECASE)


def parse_decision(text: str) -> Decision:
    """
    Interprets one line of user input.
    Negative integers are returned as keep decisions so resolve() can reject
    them with a proper error instead of silently declining.
    """
    answer = (text or "").strip()
    if not answer or AFFIRMATIVE_RE.match(answer):
        return Decision.affirmative()
    try:
        return Decision.keep(int(answer))
    except ValueError:
        return Decision.decline()


class ResolverImpl(Resolver):
    """
    Deletes every path of a group except the one the decision keeps.

    Attributes:
        remover: Callable deleting one path; raises on failure
        policy: What to do after a failed deletion
    """

    def __init__(self, remover: Remover = None, policy: DeletionPolicy = DeletionPolicy.CONTINUE):
        self.remover = remover or FileService.remove
        self.policy = policy

    def resolve(self, group: DuplicateGroup, decision: Decision) -> ResolutionOutcome:
        if not group.is_duplicate():
            return ResolutionOutcome(status=ResolutionStatus.SKIPPED)

        if decision.kind == DecisionKind.DECLINE:
            return ResolutionOutcome(status=ResolutionStatus.DECLINED)

        keep = decision.index
        if keep is None or not 0 <= keep < len(group.paths):
            message = f"Invalid index [{keep}] for group of {len(group.paths)} files"
            logger.debug(message)
            return ResolutionOutcome(status=ResolutionStatus.INVALID_INDEX, message=message)

        outcome = ResolutionOutcome(status=ResolutionStatus.KEPT, kept_index=keep)
        for i, path in enumerate(group.paths):
            if i == keep:
                continue
            try:
                self.remover(path)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Failed to remove {path}: {e}")
                outcome.errors.append(DeletionError(path=path, reason=str(e)))
                if self.policy == DeletionPolicy.ABORT:
                    break
            else:
                logger.debug(f"Removed {path}")
                outcome.removed.append(path)

        if outcome.errors:
            outcome.status = ResolutionStatus.DELETION_FAILED
            outcome.message = str(outcome.errors[0])
        return outcome
