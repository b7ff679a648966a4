"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Resolution loop: decides, confirms and deletes the removable members of each group.

Per group: PENDING -> RESOLVED | SKIPPED | ABORTED
- list mode: removable members are only counted as duplicated, nothing changes on disk
- otherwise the confirmation channel is asked unless force mode (or an earlier "All") applies
- a deleted file is dropped from its scanner's cache; a failed deletion keeps both file and record
- the keeper of a group is never deleted and never counted
"""

import logging
from typing import Callable, List, Optional

from dedup.core.interfaces import ConfirmationChannel, Updater
from dedup.core.models import (
    DeduplicationStats, DuplicateGroup, ExitStatus, FileRecord, GroupState, PromptAnswer)
from dedup.core.policy import Policy

logger = logging.getLogger(__name__)


class Resolver:
    """
    Attributes:
        policy: Picks keeper and removable members of each group
        updater: Error counter and cancellation flag
        confirmation: Asked before deleting, unless list_only or force
        delete_file: Deletes one file from disk, raises OSError on failure
        list_only: Report duplicates without deleting anything
        force: Never ask for confirmation
    """

    def __init__(
        self,
        policy: Policy,
        updater: Updater,
        confirmation: Optional[ConfirmationChannel],
        delete_file: Callable[[str], None],
        list_only: bool = False,
        force: bool = False,
    ):
        if confirmation is None and not (list_only or force):
            raise ValueError("A confirmation channel is required unless list_only or force is set")
        self.policy = policy
        self.updater = updater
        self.confirmation = confirmation
        self.delete_file = delete_file
        self.list_only = list_only
        self.force = force

    def resolve(self, groups: List[DuplicateGroup], stats: DeduplicationStats) -> ExitStatus:
        """
        Resolves every group in order.
        Returns ExitStatus.ABORTED if the operator quit or cancellation was requested.
        """
        # "All" answer: stop asking for the rest of this run only.
        ask = not (self.list_only or self.force)

        for group in groups:
            if self.updater.is_cancelled():
                logger.debug("Resolution interrupted")
                return ExitStatus.ABORTED

            state, ask = self._resolve_group(group, stats, ask)
            if state is GroupState.ABORTED:
                return ExitStatus.ABORTED
            if state is GroupState.SKIPPED:
                stats.groups_skipped += 1
            elif state is GroupState.RESOLVED:
                stats.groups_resolved += 1

        return ExitStatus.OK

    def _resolve_group(self, group: DuplicateGroup, stats: DeduplicationStats, ask: bool):
        keeper, removable = self.policy.rank(group.files)
        if keeper is None or not removable:
            return GroupState.SKIPPED, ask

        if self.list_only:
            for file in removable:
                self.updater.log(logging.INFO, "%s is duplicated (%s).", file.path, keeper.path)
                stats.add_removed(file.size)
            return GroupState.RESOLVED, ask

        if ask:
            answer = self.confirmation.ask(keeper, removable)
            if self.updater.is_cancelled():
                answer = PromptAnswer.ABORT

            if answer is PromptAnswer.ABORT:
                return GroupState.ABORTED, ask
            if answer is PromptAnswer.SKIP:
                return GroupState.SKIPPED, ask
            if answer is PromptAnswer.CONFIRM_ALL:
                ask = False

        for file in removable:
            self._delete(group, file, stats)
        return GroupState.RESOLVED, ask

    def _delete(self, group: DuplicateGroup, file: FileRecord, stats: DeduplicationStats) -> None:
        try:
            self.delete_file(file.path)
        except OSError as e:
            self.updater.increase_errors()
            logger.error(f"Could not delete file {file.path} ({e}).")
            return

        owner = group.owner_of(file)
        if owner is not None:
            owner.remove(file.path)
        stats.add_removed(file.size)
        self.updater.log(logging.INFO, "%s was deleted.", file.path)
