import re
from pathlib import Path
from typing import Optional

INDEX_FILE = "index.html"
STYLE_FILE = "style.css"
SCRIPT_FILE = "script.js"
PROJECT_FILES = (INDEX_FILE, STYLE_FILE, SCRIPT_FILE)

_PROJECT_ID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def is_valid_project_id(value: str) -> bool:
    return isinstance(value, str) and bool(_PROJECT_ID_RE.match(value))


def is_allowed_filename(name: str) -> bool:
    return name in PROJECT_FILES


# --- Helper: join caller-supplied tokens under a root only after allow-listing ---
def _safe_project_path(root: Path, project_id: str, filename: Optional[str] = None) -> Optional[Path]:
    """
    Return root/project_id[/filename] or None when either token fails the
    allow-list. Nothing caller-supplied reaches the filesystem unchecked.
    """
    if not is_valid_project_id(project_id):
        return None
    if filename is None:
        return root / project_id
    if not is_allowed_filename(filename):
        return None
    return root / project_id / filename
