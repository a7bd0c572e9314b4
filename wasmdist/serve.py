"""Development server for a built bundle.

Serves the bundle directory as the document root.  ``.wasm`` files go
out as ``application/wasm``, the only type browsers stream-compile.
"""

from http.server import HTTPServer, SimpleHTTPRequestHandler
from pathlib import Path


class BundleHandler(SimpleHTTPRequestHandler):
    """Serves one bundle directory with development headers."""

    extensions_map = {
        **SimpleHTTPRequestHandler.extensions_map,
        '.wasm': 'application/wasm',
        '.js': 'text/javascript',
        '.mjs': 'text/javascript',
    }

    def end_headers(self):
        # CORS and caching headers for development
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Cache-Control', 'no-cache')
        super().end_headers()

    def log_message(self, format, *args):
        pass  # Suppress request logging


def make_server(directory, port=8080, host='localhost'):
    """Create (but do not start) an HTTP server for ``directory``.

    Port 0 picks a free port; read it back from ``server.server_address``.
    """
    directory = str(Path(directory).resolve())

    def handler(*a, **kw):
        return BundleHandler(*a, directory=directory, **kw)

    return HTTPServer((host, port), handler)


def serve(directory, port=8080):
    """Serve ``directory`` until interrupted."""
    server = make_server(directory, port)
    print(f"Serving {directory} at http://localhost:{server.server_address[1]}")
    print('Press Ctrl+C to stop.')

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print('\nStopped.')
    finally:
        server.server_close()
