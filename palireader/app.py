"""
Pali Reader
A Flask application that serves a library of Pali .htm texts and links every word to the Digital Pali Dictionary.
"""

from flask import Flask, render_template, redirect, url_for, abort, jsonify
import logging
from pathlib import Path

from palireader.core.config import load_config, to_flask_config
from palireader.core.library import (
    resolve_library_path,
    build_file_tree,
    build_breadcrumbs,
    document_title,
    read_document,
    PathTraversalError,
    DocumentTooLargeError,
)
from palireader.core.renderer import render_document
from palireader.version_info import __version__ as VERSION

logger = logging.getLogger(__name__)

APP_TITLE = "Pali Reader"

app = Flask(__name__, static_folder='static')
app.config.update(to_flask_config(load_config()))


def is_last_index(index: int, length: int) -> bool:
    return index == length - 1


# Helpers handed to every template render
TEMPLATE_HELPERS = {
    'is_last_index': is_last_index,
}


def render_page(template_name: str, **context):
    return render_template(template_name, version=VERSION, app_title=APP_TITLE, **TEMPLATE_HELPERS, **context)


def library_dir() -> Path:
    return Path(app.config['LIBRARY_DIR'])


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"500 Error: {error}", exc_info=True)
    return getattr(error, 'description', None) or "Internal Server Error", 500


@app.route('/api/version')
def get_version():
    return jsonify({'version': VERSION})


@app.route('/')
def index():
    """Library root listing."""
    files = build_file_tree(library_dir(), '', app.config['ALLOWED_EXTENSIONS'])
    logger.info(f"Index route: Found {len(files['children'])} items")
    return render_page('index.html', title=APP_TITLE, files=files, current_path='', breadcrumbs=[])


@app.route('/read/')
def read_root():
    return redirect(url_for('index'))


@app.route('/read/<path:file_path>')
def read(file_path):
    """Show a directory listing or a single document with linked words."""
    try:
        full_path = resolve_library_path(library_dir(), file_path)
    except PathTraversalError:
        abort(400, description="Invalid path")

    if not full_path.exists():
        logger.info(f"Not found: {file_path}")
        abort(404, description="File not found")

    breadcrumbs = build_breadcrumbs(file_path)

    if full_path.is_dir():
        files = build_file_tree(full_path, file_path.strip('/'), app.config['ALLOWED_EXTENSIONS'])
        return render_page('index.html', title=full_path.name, files=files,
                           current_path=file_path, breadcrumbs=breadcrumbs)

    try:
        raw = read_document(full_path, app.config['MAX_FILE_SIZE'])
    except DocumentTooLargeError:
        abort(413, description="File too large")
    except OSError as e:
        logger.error(f"Error reading file {full_path}: {e}", exc_info=True)
        abort(500, description="Cannot read file")

    content = render_document(raw, app.config)
    logger.info(f"Rendered document: {file_path}, {len(content)} chars output")

    return render_page('reader.html', title=document_title(full_path), content=content,
                       current_path=file_path, breadcrumbs=breadcrumbs)


if __name__ == '__main__':
    app.run(debug=True, host='localhost', port=app.config['PORT'])
