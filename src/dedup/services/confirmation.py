"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/confirmation.py
Confirmation channels asked by the resolution loop before deleting a group's duplicates.
"""
import sys
import logging
from typing import Callable, List, Optional, TextIO

from dedup.core.interfaces import ConfirmationChannel
from dedup.core.models import FileRecord, PromptAnswer
from dedup.services.file_service import FileService
from dedup.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

ANSWERS = {
    "y": PromptAnswer.CONFIRM,
    "yes": PromptAnswer.CONFIRM,
    "n": PromptAnswer.SKIP,
    "no": PromptAnswer.SKIP,
    "a": PromptAnswer.CONFIRM_ALL,
    "all": PromptAnswer.CONFIRM_ALL,
    "q": PromptAnswer.ABORT,
    "quit": PromptAnswer.ABORT,
}

VIEW_COMMANDS = ("v", "view")

# Opening these would execute them.
NOT_VIEWABLE_EXTENSIONS = (".bat", ".cmd", ".com", ".dll", ".drv", ".exe", ".msi", ".ps1", ".sys")


class AutoConfirmation(ConfirmationChannel):
    """Non-interactive channel: every group is confirmed."""

    def ask(self, keeper: FileRecord, removable: List[FileRecord]) -> PromptAnswer:
        return PromptAnswer.CONFIRM


class TerminalConfirmation(ConfirmationChannel):
    """
    Interactive channel reading answers from the terminal.
    Supports an extra "view" command that opens the listed files in the system viewer.
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
        viewer: Optional[Callable[[str], None]] = FileService.open_file,
    ):
        self.input_func = input_func
        self.output = output or sys.stdout
        self.viewer = viewer

    def ask(self, keeper: FileRecord, removable: List[FileRecord]) -> PromptAnswer:
        viewable = [f for f in removable if self.can_view(f.path)]
        prompt = (
            f"Delete {len(removable)} file(s)? (Yes,All,No,View,Quit): " if viewable
            else f"Delete {len(removable)} file(s)? (Yes,All,No,Quit): "
        )

        self._print_group(keeper, removable)
        while True:
            try:
                line = self.input_func(prompt)
            except EOFError:
                self._write("")
                return PromptAnswer.ABORT

            answer = line.strip().lower()
            if answer in ANSWERS:
                return ANSWERS[answer]
            if answer in VIEW_COMMANDS and viewable:
                self.view(viewable)
                continue
            if answer:
                self._write(f"Invalid command: {line.strip()}\n")

    def can_view(self, path: str) -> bool:
        return self.viewer is not None and not path.lower().endswith(NOT_VIEWABLE_EXTENSIONS)

    def view(self, files: List[FileRecord]) -> None:
        """Opens every file in the viewer; failures are reported and otherwise ignored."""
        for file in files:
            try:
                self.viewer(file.path)
            except OSError as e:
                logger.warning(f"Could not open {file.path}: {e}")

    def _print_group(self, keeper: FileRecord, removable: List[FileRecord]) -> None:
        self._write(f"\nDuplicate group ({ConvertUtils.bytes_to_human(keeper.size)} each):")
        self._write(f"   [KEEP] {keeper.path}")
        self._write(f"          Modified: {ConvertUtils.ns_to_human(keeper.mod_time)}")
        for file in removable:
            self._write(f"   [DEL]  {file.path}")
            self._write(f"          Modified: {ConvertUtils.ns_to_human(file.mod_time)}")

    def _write(self, text: str) -> None:
        print(text, file=self.output)
