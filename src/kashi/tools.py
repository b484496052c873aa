"""UniDic discovery and installation for the fugashi analyzer."""

from __future__ import annotations

import json
import logging
import os
import shutil
import sys
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path

import requests
from rich.progress import (
    BarColumn,
    DownloadColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
)

__all__ = [
    "DEFAULT_UNIDIC_URL",
    "UNIDIC_DIR_ENV",
    "UNIDIC_VERSION",
    "UniDicInstallError",
    "UniDicStatus",
    "ensure_unidic_installed",
    "get_unidic_dicdir",
    "managed_unidic_root",
    "resolve_managed_unidic",
]

UNIDIC_VERSION = "3.1.1"
DEFAULT_UNIDIC_URL = (
    f"https://clrd.ninjal.ac.jp/unidic_archive/cwj/{UNIDIC_VERSION}/unidic-cwj-{UNIDIC_VERSION}-full.zip"
)
UNIDIC_DIR_ENV = "KASHI_UNIDIC_DIR"
MANIFEST_NAME = "installed.json"

logger = logging.getLogger(__name__)


class UniDicInstallError(RuntimeError):
    """A UniDic archive could not be fetched, unpacked or registered."""


@dataclass(frozen=True)
class UniDicStatus:
    path: Path | None
    version: str | None = None
    managed: bool = False

    @property
    def usable(self) -> bool:
        return self.path is not None and _has_dicrc(self.path)


def _has_dicrc(path: Path) -> bool:
    return (path / "dicrc").is_file()


def managed_unidic_root() -> Path:
    return Path(sys.prefix, "share", "kashi", "unidic")


def _manifest_path() -> Path:
    return managed_unidic_root() / MANIFEST_NAME


def _register(target: Path) -> None:
    manifest = _manifest_path()
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(
        json.dumps({"version": UNIDIC_VERSION, "path": str(target)}, indent=2),
        encoding="utf-8",
    )


def resolve_managed_unidic() -> UniDicStatus:
    """Read the install manifest; ``managed`` is True whenever one exists, even if stale."""
    manifest = _manifest_path()
    try:
        entry = json.loads(manifest.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return UniDicStatus(path=None)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable UniDic manifest at %s", manifest)
        return UniDicStatus(path=None)
    recorded = entry.get("path") if isinstance(entry, dict) else None
    if not recorded or not _has_dicrc(Path(recorded)):
        return UniDicStatus(path=None, managed=True)
    return UniDicStatus(path=Path(recorded), version=entry.get("version"), managed=True)


def _progress(*columns) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        BarColumn(),
        *columns,
        TimeRemainingColumn(),
        transient=True,
    )


def _download(url: str, downloads: Path) -> Path:
    downloads.mkdir(parents=True, exist_ok=True)
    archive = downloads / (Path(url.split("?", 1)[0]).name or "unidic.zip")
    try:
        with requests.get(url, stream=True, timeout=60) as response:
            response.raise_for_status()
            length = response.headers.get("Content-Length", "")
            with archive.open("wb") as handle, _progress(DownloadColumn()) as progress:
                task = progress.add_task(
                    f"Downloading UniDic {UNIDIC_VERSION}",
                    total=int(length) if length.isdigit() else None,
                )
                for chunk in response.iter_content(chunk_size=1 << 20):
                    handle.write(chunk)
                    progress.update(task, advance=len(chunk))
    except requests.RequestException as exc:
        archive.unlink(missing_ok=True)
        raise UniDicInstallError(f"Could not download {url}: {exc}") from exc
    return archive


def _unpack(archive: Path, destination: Path) -> None:
    if not zipfile.is_zipfile(archive):
        raise UniDicInstallError(f"Not a zip archive: {archive}")
    with zipfile.ZipFile(archive) as bundle, _progress(MofNCompleteColumn()) as progress:
        members = bundle.infolist()
        task = progress.add_task(f"Unpacking UniDic {UNIDIC_VERSION}", total=len(members))
        for member in members:
            bundle.extract(member, destination)
            progress.advance(task)


def _find_dictionary_root(staging: Path) -> Path:
    # Shallowest dicrc wins; the full archive nests one top-level folder.
    for dicrc in sorted(staging.rglob("dicrc"), key=lambda p: len(p.parts)):
        if dicrc.is_file():
            return dicrc.parent
    raise UniDicInstallError("The archive has no dicrc; it does not look like a MeCab dictionary.")


def ensure_unidic_installed(
    *,
    url: str | None = DEFAULT_UNIDIC_URL,
    zip_path: str | None = None,
    force: bool = False,
) -> UniDicStatus:
    """
    Install UniDic under ``sys.prefix`` and record it in the manifest.

    A local ``zip_path`` takes precedence over ``url``. An existing install of
    the same version is reused unless ``force`` is set.
    """
    target = managed_unidic_root() / UNIDIC_VERSION
    if _has_dicrc(target) and not force:
        _register(target)
        logger.debug("UniDic %s already present at %s", UNIDIC_VERSION, target)
        return UniDicStatus(path=target, version=UNIDIC_VERSION, managed=True)

    if zip_path:
        archive = Path(zip_path).expanduser()
        if not archive.is_file():
            raise UniDicInstallError(f"Archive not found: {archive}")
    elif url:
        archive = _download(url, managed_unidic_root() / "downloads")
    else:
        raise UniDicInstallError("Provide a UniDic archive path or a download URL.")

    with tempfile.TemporaryDirectory(prefix="kashi-unidic-") as tmp:
        staging = Path(tmp)
        _unpack(archive, staging)
        source = _find_dictionary_root(staging)
        shutil.rmtree(target, ignore_errors=True)
        shutil.copytree(source, target)

    _register(target)
    logger.info("UniDic %s installed at %s", UNIDIC_VERSION, target)
    return UniDicStatus(path=target, version=UNIDIC_VERSION, managed=True)


def _packaged_unidic() -> Path | None:
    try:
        import unidic  # type: ignore
    except ImportError:
        return None
    dicdir = getattr(unidic, "DICDIR", None)
    if dicdir and _has_dicrc(Path(dicdir)):
        return Path(dicdir)
    logger.debug("The unidic package is installed but its dictionary has not been downloaded.")
    return None


def get_unidic_dicdir() -> Path | None:
    """Locate a UniDic directory: ``$KASHI_UNIDIC_DIR``, the managed install, then the ``unidic`` package."""
    override = os.environ.get(UNIDIC_DIR_ENV, "").strip()
    if override:
        candidate = Path(override).expanduser()
        if _has_dicrc(candidate):
            return candidate
        logger.warning("%s=%s has no dicrc; ignoring it.", UNIDIC_DIR_ENV, override)
    managed = resolve_managed_unidic()
    if managed.usable:
        return managed.path
    return _packaged_unidic()
