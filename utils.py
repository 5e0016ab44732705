import os
import re
import uuid
from urllib.parse import urlsplit, urlunsplit

from werkzeug.utils import secure_filename

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}

SLUG_PATTERN = r'^[a-z0-9]+(-[a-z0-9]+)*$'

_WHITESPACE = re.compile(r'\s+')
_NOT_SLUG = re.compile(r'[^a-z0-9-]')
_HYPHENS = re.compile(r'-{2,}')


def slugify(text):
    """Lowercase ASCII slug: whitespace becomes '-', anything outside [a-z0-9-] is dropped.

    Running it on its own output returns the same string.
    """
    if not text:
        return ''
    slug = _WHITESPACE.sub('-', text.strip().lower())
    slug = _NOT_SLUG.sub('', slug)
    slug = _HYPHENS.sub('-', slug)
    return slug.strip('-')


def fallback_slug(prefix):
    """Slug for names with no ASCII content at all (e.g. purely Arabic titles)."""
    return f"{slugify(prefix) or 'item'}-{uuid.uuid4().hex[:8]}"


def allowed_file(filename):
    """Check if the file has an allowed extension."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def handle_file_upload(file, upload_folder):
    """Save uploaded file to upload folder and return the stored filename, or None."""
    if file and file.filename and allowed_file(file.filename):
        name, ext = os.path.splitext(secure_filename(file.filename))
        filename = f"{name or 'upload'}-{uuid.uuid4().hex[:8]}{ext.lower()}"
        os.makedirs(upload_folder, exist_ok=True)
        file.save(os.path.join(upload_folder, filename))
        return filename
    return None


LIKE_ESCAPE = '\\'


def like_pattern(keyword):
    """Substring pattern for ``ilike(..., escape=LIKE_ESCAPE)``; ``%`` and ``_`` in ``keyword`` match literally."""
    escaped = keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace('%', '\\%').replace('_', '\\_')
    return f"%{escaped}%"


def safe_redirect_target(target, host=None):
    """Local path to redirect to, or None when ``target`` would leave the site.

    Relative paths are accepted as-is; absolute URLs only when their host is ``host``
    (e.g. a Referer from this site), and come back reduced to path and query.
    """
    if not target or '\\' in target:
        return None
    parts = urlsplit(target)
    if not parts.scheme and not parts.netloc:
        return target if target.startswith('/') and not target.startswith('//') else None
    if host and parts.scheme in ('http', 'https') and parts.netloc == host:
        return urlunsplit(('', '', parts.path or '/', parts.query, ''))
    return None
