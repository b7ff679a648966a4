from .file_service import FileService
from .confirmation import AutoConfirmation, TerminalConfirmation
from .updater import UpdaterImpl

__all__ = ["FileService", "AutoConfirmation", "TerminalConfirmation", "UpdaterImpl"]
