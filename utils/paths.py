import os
from typing import Optional

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def resolve_data_file(filename: str) -> Optional[str]:
    """Resolve a data file path across local dev and container (/mount/src) layouts.

    Strategy:
    1. Absolute paths are returned as-is when they exist.
    2. $PORTFOLIO_DATA_DIR/filename when the variable is set.
    3. Project-root relative (data/filename) based on this file location.
    4. cwd + data/filename (app launched from the project root).
    5. /mount/src/data/filename (Streamlit Cloud container pattern).
    Returns first existing path or None.
    """
    if os.path.isabs(filename):
        return filename if os.path.exists(filename) else None
    candidates = []
    env_dir = os.environ.get('PORTFOLIO_DATA_DIR')
    if env_dir:
        candidates.append(os.path.join(env_dir, filename))
    candidates.append(os.path.join(PROJECT_ROOT, 'data', filename))
    candidates.append(os.path.join(os.getcwd(), 'data', filename))
    candidates.append(os.path.join('/mount/src/data', filename))
    for p in candidates:
        if os.path.exists(p):
            return p
    return None


def default_data_path(filename: str) -> str:
    """Where a data file should be written when it does not exist yet."""
    return os.path.join(PROJECT_ROOT, 'data', filename)
