import json
import sys
from email import policy
from email.parser import BytesParser
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

TRANSCRIBE_PATH = "/api/transcribe"


def parse_multipart(content_type: str, body: bytes) -> dict:
    """Return ``{field: str | (filename, bytes)}`` for a multipart/form-data body."""
    header = f"Content-Type: {content_type}\r\nMIME-Version: 1.0\r\n\r\n".encode("latin-1")
    message = BytesParser(policy=policy.default).parsebytes(header + body)
    if not message.is_multipart():
        return {}
    fields = {}
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            continue
        payload = part.get_payload(decode=True) or b""
        filename = part.get_filename()
        if filename is not None:
            fields[name] = (filename, payload)
        else:
            fields[name] = payload.decode("utf-8", errors="replace")
    return fields


class Handler(BaseHTTPRequestHandler):
    def do_POST(self) -> None:
        if self.path.split("?", 1)[0] != TRANSCRIBE_PATH:
            self._send_json(404, {"error": "Not found"})
            return
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        fields = parse_multipart(self.headers.get("Content-Type", ""), body)
        start = fields.get("startTime")
        end = fields.get("endTime")
        if not isinstance(start, str) or not isinstance(end, str):
            self._send_json(400, {"error": "startTime and endTime are required"})
            return
        upload = fields.get("file")
        if isinstance(upload, tuple):
            source = f"{upload[0]} ({len(upload[1])} bytes)"
        else:
            source = "no file"
        self._send_json(200, {"transcription": f"Transcribed {source} from {start} to {end}."})

    def do_GET(self) -> None:
        self._send_json(404, {"error": "Not found"})

    def _send_json(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, fmt: str, *args) -> None:
        # Keep console output concise for local testing.
        print(f"[transcribe] {self.address_string()} - {fmt % args}")


def make_server(host: str = "127.0.0.1", port: int = 3001) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), Handler)


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    port = int(args[0]) if args else 3001
    server = make_server("0.0.0.0", port)
    print(f"Transcription stub listening on http://127.0.0.1:{port}{TRANSCRIBE_PATH}")
    print("Press Ctrl+C to stop.")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
