"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Cross-platform file operations: delete (to trash or permanently) and open in viewer.
"""
import os
import sys
import subprocess
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Cross-platform file operations.
    All failures are raised as OSError subclasses so callers can count them uniformly.
    """

    @staticmethod
    def delete(file_path: str, permanent: bool = False) -> None:
        """Deletes a file: moves it to the system trash unless `permanent` is set."""
        if permanent:
            FileService.remove_permanently(file_path)
        else:
            FileService.move_to_trash(file_path)

    @staticmethod
    def remove_permanently(file_path: str) -> None:
        """Unlinks a file. Raises OSError on failure."""
        os.remove(file_path)

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except OSError:
            raise
        except Exception as e:
            raise OSError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def open_file(file_path: str) -> None:
        """Opens a file with the system default application."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            if sys.platform == 'win32':
                os.startfile(str(path))
            elif sys.platform == 'darwin':
                subprocess.Popen(['open', str(path)])
            else:
                FileService._open_linux(path)
        except OSError:
            raise
        except Exception as e:
            raise OSError(f"Failed to open file: {e}") from e

    @staticmethod
    def _open_linux(path: Path) -> None:
        """Linux: Tries gio, falls back to xdg-open."""
        try:
            subprocess.run(['gio', 'open', str(path)], timeout=5)
            return
        except (FileNotFoundError, subprocess.TimeoutExpired):
            pass  # Fallback to xdg-open

        try:
            subprocess.run(['xdg-open', str(path)], timeout=5)
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise OSError("Cannot open file: no suitable application found") from e
