"""
Side-port HTTP server for Prometheus metrics and a health check.

The gateway treats every path on its main port as an object name, so
/metrics and /health live on their own port (METRICS_PORT).
"""
import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_client.core import REGISTRY

from r2gateway.storage import get_r2_client

logger = logging.getLogger(__name__)


def health_status() -> tuple[int, dict]:
    """Return (HTTP status, body) describing storage readiness."""
    if get_r2_client().is_configured:
        return 200, {"status": "healthy", "storage": "configured"}
    return 503, {"status": "unhealthy", "storage": "not configured"}


class MetricsHandler(BaseHTTPRequestHandler):
    """HTTP handler for /metrics and /health."""

    def do_GET(self):
        if self.path == '/metrics':
            self._send(200, CONTENT_TYPE_LATEST, generate_latest(REGISTRY))
        elif self.path == '/health':
            status, body = health_status()
            self._send(status, 'application/json', json.dumps(body).encode('utf-8'))
        else:
            self.send_response(404)
            self.end_headers()

    def _send(self, status: int, content_type: str, payload: bytes):
        self.send_response(status)
        self.send_header('Content-Type', content_type)
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass


def start_metrics_server(port: int = 9090) -> ThreadingHTTPServer:
    """
    Start the side-port server in a daemon thread.

    Args:
        port: Port to listen on (default: 9090)
    """
    try:
        server = ThreadingHTTPServer(('0.0.0.0', port), MetricsHandler)
    except OSError as e:
        logger.error(f"Failed to start metrics server: {e}")
        raise
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info(f"Metrics server started on port {server.server_address[1]}")
    return server


def stop_metrics_server(server: Optional[ThreadingHTTPServer]) -> None:
    if server is None:
        return
    server.shutdown()
    server.server_close()
