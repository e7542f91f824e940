"""
File-tree provider for the Pali text library.

Maps URL paths onto the library folder, lists directories for navigation
and reads documents.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ('.htm',)
MAX_FILE_SIZE = 20 * 1024 * 1024  # 20 MB


class LibraryError(Exception):
    """Base class for library lookup failures."""


class PathTraversalError(LibraryError, ValueError):
    """Requested path resolves outside the library root."""


class DocumentTooLargeError(LibraryError):
    def __init__(self, path: Path, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(f"{path} is {size} bytes, limit is {limit} bytes")


def resolve_library_path(library_dir: Union[str, Path], relative_path: str) -> Path:
    """
    Join a URL path onto the library root.
    Raises PathTraversalError when the result escapes the root.
    """
    root = Path(library_dir).resolve()
    full_path = (root / relative_path).resolve()
    try:
        full_path.relative_to(root)
    except ValueError:
        logger.warning(f"Attempted path traversal: {relative_path}")
        raise PathTraversalError(relative_path)
    return full_path


def build_file_tree(dir_path: Union[str, Path], relative_path: str = '',
                    extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> Dict:
    """
    List a directory one level deep.

    Returns a dict with 'name', 'path', 'is_dir' and 'children'. Children are
    subdirectories followed by documents, each group sorted by name. Files
    without an allowed extension are left out.
    """
    dir_path = Path(dir_path)
    extensions = tuple(ext.lower() for ext in extensions)
    root = {
        'name': dir_path.name,
        'path': relative_path,
        'is_dir': True,
        'children': [],
    }

    try:
        entries = list(dir_path.iterdir())
    except OSError as e:
        logger.warning(f"Cannot list directory {dir_path}: {e}")
        return root

    dirs, files = [], []
    for entry in entries:
        child_path = f"{relative_path}/{entry.name}" if relative_path else entry.name
        if entry.is_dir():
            dirs.append({'name': entry.name, 'path': child_path, 'is_dir': True, 'children': []})
        elif entry.name.lower().endswith(extensions):
            files.append({'name': entry.name, 'path': child_path, 'is_dir': False, 'children': []})

    dirs.sort(key=lambda x: x['name'])
    files.sort(key=lambda x: x['name'])
    root['children'] = dirs + files
    return root


def build_breadcrumbs(path: str) -> List[Dict[str, str]]:
    """One crumb per path component, each carrying the cumulative path."""
    breadcrumbs = []
    current = ''
    for part in path.replace('\\', '/').split('/'):
        if not part:
            continue
        current = f"{current}/{part}" if current else part
        breadcrumbs.append({'name': part, 'path': current})
    return breadcrumbs


def document_title(path: Union[str, Path]) -> str:
    return Path(path).stem


def read_document(path: Union[str, Path], max_size: int = MAX_FILE_SIZE) -> str:
    path = Path(path)
    size = path.stat().st_size
    if size > max_size:
        logger.warning(f"File too large: {path} ({size / (1024 * 1024):.2f} MB)")
        raise DocumentTooLargeError(path, size, max_size)

    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        content = f.read()

    logger.info(f"Read document: {path}, size: {len(content)} chars")
    return content
