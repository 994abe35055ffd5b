"""Minimal HTTP wrapper so a host game loop can ask for a move every tick.
Usage: python -m astar_snake.server [port]

POST /move with {"n", "snake", "snake_num", "other_snakes", "food_num",
"foods", "round"} answers {"move": code}.
"""

import json
import logging
import sys
from http.server import HTTPServer, BaseHTTPRequestHandler

from .grid import DIRECTIONS
from .strategy import FALLBACK_MOVE, NO_TARGET, greedy_snake_step

logger = logging.getLogger(__name__)


def move_from_payload(body: dict, fn=greedy_snake_step) -> int:
    """Run one decision for a /move request body."""
    try:
        move = fn(
            body["n"],
            body["snake"],
            body["snake_num"],
            body.get("other_snakes", []),
            body.get("food_num", len(body.get("foods", [])) // 2),
            body.get("foods", []),
            body.get("round", 0),
        )
    except Exception:
        logger.warning("bad /move request, using default move", exc_info=True)
        return FALLBACK_MOVE
    if not isinstance(move, int) or (move not in DIRECTIONS and move != NO_TARGET):
        return FALLBACK_MOVE
    return move


class H(BaseHTTPRequestHandler):
    fn = staticmethod(greedy_snake_step)

    def _reply(self, payload: dict):
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode())

    def do_GET(self):
        self._reply({"apiversion": "1"})

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        try:
            body = json.loads(self.rfile.read(length)) if length else {}
        except json.JSONDecodeError:
            logger.warning("malformed JSON on %s", self.path)
            body = {}
        if self.path == "/move":
            resp = {"move": move_from_payload(body, self.fn)}
        else:
            resp = {"ok": True}
        self._reply(resp)

    def log_message(self, format, *args):
        pass


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    port = int(argv[0]) if argv else 8080
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    server = HTTPServer(("0.0.0.0", port), H)
    logger.info("snake server on port %d", port)
    server.serve_forever()


if __name__ == "__main__":
    main()
