#!/usr/bin/env python3
"""
Simple development server for the haptic visualizer.
Provides JSON API endpoints for pattern sampling and audio summaries.
"""

import asyncio
import json
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlparse

from hapticscope.defaults import DEFAULT_HAPTIC_PATTERN
from hapticscope.io.exporter import CsvExporter
from hapticscope.pipeline import AudioPipeline, HapticPipeline


class HapticHandler(BaseHTTPRequestHandler):
    """HTTP handler for the haptic visualizer API."""

    haptic_pipeline = HapticPipeline()
    audio_pipeline = AudioPipeline()
    exporter = CsvExporter()

    def do_POST(self):
        """Handle POST requests for API endpoints."""
        parsed = urlparse(self.path)

        if parsed.path == "/api/pattern":
            self.handle_pattern()
        elif parsed.path == "/api/pattern.csv":
            self.handle_pattern_csv()
        elif parsed.path == "/api/audio":
            self.handle_audio(parse_qs(parsed.query))
        else:
            self.send_error(404, "Not found")

    def do_GET(self):
        """Handle GET requests."""
        parsed = urlparse(self.path)

        if parsed.path == "/api/pattern/default":
            self._send(200, "application/json", DEFAULT_HAPTIC_PATTERN.encode())
        else:
            self.send_error(404, "Not found")

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length)

    def _send(self, status: int, content_type: str, body: bytes, headers=None):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(body)

    def _send_json(self, status: int, payload: dict):
        self._send(status, "application/json", json.dumps(payload).encode())

    def handle_pattern(self):
        """Sample a pattern document and return series + summary."""
        text = self._read_body().decode("utf-8", errors="replace")
        result = self.haptic_pipeline.process(text)
        self._send_json(200 if result.ok else 400, result.to_dict())

    def handle_pattern_csv(self):
        """Sample a pattern document and return the curve CSV."""
        text = self._read_body().decode("utf-8", errors="replace")
        result = self.haptic_pipeline.process(text)
        if not result.ok:
            self._send_json(400, {"error": result.error})
            return

        filename = self.exporter.config.curve_filename
        self._send(
            200,
            "text/csv",
            self.exporter.to_csv(result.samples).encode(),
            {"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    def handle_audio(self, query: dict):
        """Summarize an uploaded .wav body."""
        filename = (query.get("filename") or [""])[0]
        data = self._read_body()
        result = asyncio.run(self.audio_pipeline.process_upload(filename, data))
        payload = result.to_dict()
        payload["csv_filename"] = result.csv_filename
        self._send_json(200 if result.ok else 400, payload)

    def log_message(self, format, *args):
        """Custom log format."""
        print(f"[hapticscope] {args[0]}")


def run_server(port=8080):
    """Run the development server."""
    httpd = HTTPServer(("", port), HapticHandler)
    print(f"hapticscope API running at: http://localhost:{port}  (Ctrl+C to stop)")

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        httpd.server_close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="hapticscope development server")
    parser.add_argument("-p", "--port", type=int, default=8080, help="Port to run on")
    args = parser.parse_args()

    run_server(args.port)
