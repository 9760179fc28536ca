#!/usr/bin/env python3
"""
serve_portfolio.py: local asset server for the portfolio.

Serves the portfolio images plus a generated directory listing for every
folder under /portfolio/, which is what the listing source mode reads.
Extension-less paths that match nothing fall back to the home document; when
no index.html exists the fallback page sends the visitor to the app with the
requested path stashed as ?redirect=<path>.

Usage:
    python3 scripts/serve_portfolio.py                  # http://localhost:3000
    python3 scripts/serve_portfolio.py --port 8080 --app-url http://localhost:8501/
"""
from __future__ import annotations

import argparse
import html
import json
import os
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Iterable, Optional, Tuple
from urllib.parse import quote, unquote, urlsplit

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_PORT = 3000

MIME_TYPES = {
    ".html": "text/html",
    ".js": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".wav": "audio/wav",
    ".mp4": "video/mp4",
    ".woff": "application/font-woff",
    ".ttf": "application/font-ttf",
    ".eot": "application/vnd.ms-fontobject",
    ".otf": "application/font-otf",
    ".wasm": "application/wasm",
}
DEFAULT_MIME = "application/octet-stream"


def content_type_for(path: str) -> str:
    return MIME_TYPES.get(os.path.splitext(path)[1].lower(), DEFAULT_MIME)


def render_listing(url_path: str, entries: Iterable[Tuple[str, bool]]) -> str:
    """Index document for a folder: parent link first, then ./name/ for folders and ./name for files."""
    title = html.escape(url_path)
    items = ['<li><a href="../">../</a></li>']
    for name, is_dir in entries:
        href = f"./{quote(name)}/" if is_dir else f"./{quote(name)}"
        items.append(f'<li><a href="{href}">{html.escape(name)}</a></li>')
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        f"    <title>Index of {title}</title>\n"
        "</head>\n<body>\n"
        f"    <h1>Index of {title}</h1>\n"
        f'    <ul class="file-list">\n        {"".join(items)}\n    </ul>\n'
        "</body>\n</html>\n"
    )


def fallback_document(request_path: str, app_url: str) -> str:
    """Home document for unknown paths: stash the requested path and go to the app."""
    target = json.dumps(app_url)
    path = json.dumps(request_path)
    return (
        "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\"><title>Redirecting…</title>\n"
        f"<script>location.replace({target} + '?redirect=' + encodeURIComponent({path}));</script>\n"
        "</head><body></body></html>\n"
    )


def list_directory(directory: Path):
    return [(p.name, p.is_dir()) for p in sorted(directory.iterdir(), key=lambda p: p.name)]


class PortfolioHandler(BaseHTTPRequestHandler):
    root: Path = PROJECT_ROOT
    app_url: str = "http://localhost:8501/"

    def _send(self, status: int, body: bytes, content_type: str):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(body)

    def _resolve(self, url_path: str) -> Optional[Path]:
        candidate = (self.root / url_path.lstrip("/")).resolve()
        # refuse anything that escapes the served root
        if candidate != self.root and self.root not in candidate.parents:
            return None
        return candidate

    def do_GET(self):
        clean_path = unquote(urlsplit(self.path).path)
        target = self._resolve(clean_path)
        if target is None:
            self.send_error(403)
            return

        if clean_path.startswith("/portfolio/") or clean_path == "/portfolio":
            if target.is_dir():
                body = render_listing(clean_path, list_directory(target)).encode("utf-8")
                self._send(200, body, "text/html")
            elif target.is_file():
                self._send(200, target.read_bytes(), content_type_for(target.name))
            else:
                self._send(404, b"Directory not found", "text/plain")
            return

        if os.path.splitext(clean_path)[1]:
            if target.is_file():
                self._send(200, target.read_bytes(), content_type_for(target.name))
            else:
                self._send(404, b"File not found", "text/plain")
            return

        # SPA fallback: any other route gets the home document
        index = self.root / "index.html"
        if index.is_file():
            self._send(200, index.read_bytes(), "text/html")
        else:
            self._send(200, fallback_document(clean_path, self.app_url).encode("utf-8"), "text/html")


def main():
    parser = argparse.ArgumentParser(description="Portfolio asset server")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--root", type=Path, default=PROJECT_ROOT, help="directory containing portfolio/")
    parser.add_argument("--app-url", default=PortfolioHandler.app_url)
    args = parser.parse_args()

    PortfolioHandler.root = args.root.resolve()
    PortfolioHandler.app_url = args.app_url
    server = HTTPServer(("0.0.0.0", args.port), PortfolioHandler)
    print(f"Server running at http://localhost:{args.port}/")
    print(f"  Root: {PortfolioHandler.root}")
    print("Press Ctrl+C to stop the server")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down.")
        server.shutdown()


if __name__ == "__main__":
    main()
