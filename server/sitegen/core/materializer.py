# sitegen/core/materializer.py
"""
Project Materializer
- Owns everything on disk under the projects root:
    <root>/<id>/index.html, style.css, script.js
    <root>/<id>.zip            (written on download, left in place)
- Guarantees the markup links its sibling stylesheet and script.
- Archives are written to a temp file and renamed into place, so a
  concurrent download never sees a half-written zip.
"""
import os
import re
import shutil
import tempfile
import time
import uuid
import logging
import zipfile
from pathlib import Path
from typing import List, Optional

from sitegen.models import CodeBundle
from sitegen.utils.file_helpers import (
    INDEX_FILE,
    SCRIPT_FILE,
    STYLE_FILE,
    _safe_project_path,
    is_valid_project_id,
)

logger = logging.getLogger(__name__)

NO_HTML_PLACEHOLDER = (
    "<!DOCTYPE html>\n"
    "<html lang=\"en\">\n"
    "<head>\n"
    "  <meta charset=\"UTF-8\">\n"
    "</head>\n"
    "<body>\n"
    "  <!-- no HTML generated -->\n"
    "</body>\n"
    "</html>\n"
)
NO_CSS_PLACEHOLDER = "/* no CSS generated */"
NO_JS_PLACEHOLDER = "// no JS generated"

STYLE_REF = 'href="style.css"'
SCRIPT_REF = 'src="script.js"'
STYLE_TAG = '<link rel="stylesheet" href="style.css">'
SCRIPT_TAG = '<script src="script.js"></script>'

_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HEAD_OPEN_RE = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html(?:\s[^>]*)?>", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!doctype[^>]*>", re.IGNORECASE)
_BODY_CLOSE_RE = re.compile(r"</body\s*>", re.IGNORECASE)

TMP_ARCHIVE_SUFFIX = ".zip.tmp"


class ProjectNotFoundError(Exception):
    pass


def new_project_id() -> str:
    return str(uuid.uuid4())


def _insert_before_last(pattern: re.Pattern, html: str, snippet: str) -> Optional[str]:
    matches = list(pattern.finditer(html))
    if not matches:
        return None
    at = matches[-1].start()
    return f"{html[:at]}  {snippet}\n{html[at:]}"


def _insert_after_first(pattern: re.Pattern, html: str, snippet: str) -> Optional[str]:
    match = pattern.search(html)
    if match is None:
        return None
    at = match.end()
    return f"{html[:at]}\n  {snippet}{html[at:]}"


def link_assets(html: str) -> str:
    """
    Make sure the markup references style.css and script.js.

    Detection is a plain substring check on href="style.css" / src="script.js",
    so a reference spelled any other way (single quotes, ./style.css) gets a
    second tag injected next to it.

    The stylesheet goes before </head>, else after <head>, <html> or the
    doctype, and is only prepended when none of those exist. The script goes
    before the last </body>, else at the end. Tag matching ignores case.
    """
    if not html.strip():
        html = NO_HTML_PLACEHOLDER

    if STYLE_REF not in html:
        linked = _insert_before_last(_HEAD_CLOSE_RE, html, STYLE_TAG)
        for pattern in (_HEAD_OPEN_RE, _HTML_OPEN_RE, _DOCTYPE_RE):
            if linked is not None:
                break
            linked = _insert_after_first(pattern, html, STYLE_TAG)
        html = linked if linked is not None else f"{STYLE_TAG}\n{html}"

    if SCRIPT_REF not in html:
        linked = _insert_before_last(_BODY_CLOSE_RE, html, SCRIPT_TAG)
        html = linked if linked is not None else f"{html}\n{SCRIPT_TAG}\n"

    return html


class ProjectStore:
    def __init__(self, root):
        self.root = Path(root)

    # ----------------------------
    # generation path
    # ----------------------------
    def create(self, bundle: CodeBundle) -> str:
        project_id = new_project_id()
        project_dir = self.root / project_id
        project_dir.mkdir(parents=True, exist_ok=True)

        (project_dir / INDEX_FILE).write_text(link_assets(bundle.html), encoding="utf-8")
        (project_dir / STYLE_FILE).write_text(bundle.css or NO_CSS_PLACEHOLDER, encoding="utf-8")
        (project_dir / SCRIPT_FILE).write_text(bundle.js or NO_JS_PLACEHOLDER, encoding="utf-8")
        logger.info("Materialized project %s in %s", project_id, project_dir)
        return project_id

    # ----------------------------
    # preview path
    # ----------------------------
    def resolve_file(self, project_id: str, filename: str = INDEX_FILE) -> Path:
        path = _safe_project_path(self.root, project_id, filename)
        if path is None or not path.is_file():
            raise ProjectNotFoundError(f"{project_id}/{filename}")
        return path

    # ----------------------------
    # download path
    # ----------------------------
    def archive_path(self, project_id: str) -> Path:
        return self.root / f"{project_id}.zip"

    def build_archive(self, project_id: str) -> Path:
        project_dir = _safe_project_path(self.root, project_id)
        if project_dir is None or not project_dir.is_dir():
            raise ProjectNotFoundError(project_id)

        target = self.archive_path(project_id)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{project_id}.", suffix=TMP_ARCHIVE_SUFFIX, dir=self.root)
        try:
            with os.fdopen(fd, "wb") as fh:
                with zipfile.ZipFile(fh, "w", zipfile.ZIP_DEFLATED) as zip_file:
                    for entry in sorted(project_dir.iterdir()):
                        if entry.is_file():
                            zip_file.write(entry, arcname=entry.name)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        return target

    # ----------------------------
    # retention
    # ----------------------------
    def delete(self, project_id: str) -> None:
        project_dir = _safe_project_path(self.root, project_id)
        if project_dir is None:
            raise ProjectNotFoundError(project_id)
        archive = self.archive_path(project_id)
        if not project_dir.is_dir() and not archive.is_file():
            raise ProjectNotFoundError(project_id)
        if project_dir.is_dir():
            shutil.rmtree(project_dir)
        if archive.is_file():
            archive.unlink()
        logger.info("Deleted project %s", project_id)

    def sweep_expired(self, ttl_seconds: int, now: Optional[float] = None) -> List[str]:
        """
        Remove everything under the root last modified more than ttl_seconds
        ago: project directories with their archives, archives whose directory
        is already gone, and temp archives left behind by an interrupted
        download. Returns the removed project ids.
        """
        if not self.root.is_dir():
            return []
        now = time.time() if now is None else now
        removed: List[str] = []
        for entry in list(self.root.iterdir()):
            if not entry.exists() or now - entry.stat().st_mtime <= ttl_seconds:
                continue
            name = entry.name
            if entry.is_dir():
                if is_valid_project_id(name):
                    self.delete(name)
                    removed.append(name)
            elif name.endswith(TMP_ARCHIVE_SUFFIX) and name.startswith("."):
                entry.unlink()
                logger.info("Removed stale temp archive %s", name)
            elif name.endswith(".zip") and is_valid_project_id(name[:-len(".zip")]):
                project_id = name[:-len(".zip")]
                if not (self.root / project_id).is_dir():
                    entry.unlink()
                    removed.append(project_id)
        if removed:
            logger.info("Swept %d expired project(s)", len(removed))
        return removed
