"""Export layer — launcher JSON output and batch file renaming."""

from slugsmith.export.alfred import build_response, render_response
from slugsmith.export.renamer import ErrorPolicy, FileRenamer, RenameFailure, RenameReport

__all__ = [
    "ErrorPolicy",
    "FileRenamer",
    "RenameFailure",
    "RenameReport",
    "build_response",
    "render_response",
]
