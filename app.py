from __future__ import annotations

import logging
import os
import random
import threading
import uuid
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    BLAST_DURATION,
    MATCH_DELAY,
    MISMATCH_DELAY,
    SUPPORTED_PAIR_COUNTS,
    VICTORY_BURSTS,
    GameState,
    MonotonicScheduler,
)
from memory_core.config import configure_logging, load_settings

logger = logging.getLogger(__name__)

SETTINGS = load_settings()

app = Flask(__name__)

# Factory for per-game schedulers; tests swap in a virtual clock.
new_scheduler = MonotonicScheduler


class GameSession:
    """A live game plus its timers. `version` counts state-change notifications."""

    def __init__(self, state: GameState) -> None:
        self.state = state
        self.version = 0
        state.subscribe(self._on_change)

    def _on_change(self, _state: GameState) -> None:
        self.version += 1


_GAMES: Dict[str, GameSession] = {}
# Guards _GAMES and every GameState in it; the state machine assumes one mutator.
_LOCK = threading.Lock()


def _session_to_json(game_id: str, session: GameSession) -> Dict[str, Any]:
    return {
        "ok": True,
        "gameId": game_id,
        "version": session.version,
        "state": session.state.snapshot(),
    }


def _error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _parse_pairs(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        pairs = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"pairs must be one of {list(SUPPORTED_PAIR_COUNTS)}")
    if pairs not in SUPPORTED_PAIR_COUNTS:
        raise ValueError(f"pairs must be one of {list(SUPPORTED_PAIR_COUNTS)}")
    return pairs


def _lookup(body: Dict[str, Any]) -> Tuple[Optional[str], Optional[GameSession]]:
    """Finds the session named in the request body and lets its due timers fire."""
    game_id = body.get("gameId")
    if not isinstance(game_id, str):
        return None, None
    session = _GAMES.get(game_id)
    if session is not None:
        session.state.scheduler.run_due()
    return game_id, session


def _evict_oldest() -> None:
    while len(_GAMES) >= SETTINGS.max_games:
        oldest = next(iter(_GAMES))
        del _GAMES[oldest]
        logger.info("evicted game %s", oldest)


# ---------- Game API ----------

@app.get("/api/config")
def api_config() -> Any:
    return jsonify({
        "ok": True,
        "pairCounts": list(SUPPORTED_PAIR_COUNTS),
        "defaultPairs": SETTINGS.default_pairs,
        "delays": {
            "match": MATCH_DELAY,
            "mismatch": MISMATCH_DELAY,
            "blast": BLAST_DURATION,
            "victory": [d for d, _ in VICTORY_BURSTS],
        },
    })


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        pairs = _parse_pairs(body.get("pairs"), SETTINGS.default_pairs)
    except ValueError as e:
        return _error(str(e))
    seed = body.get("seed", None)
    if isinstance(seed, bool) or not (seed is None or isinstance(seed, (int, str))):
        return _error("seed must be an integer or string")
    with _LOCK:
        _evict_oldest()
        state = GameState(pair_count=pairs, scheduler=new_scheduler(), rng=random.Random(seed))
        session = GameSession(state)
        game_id = uuid.uuid4().hex
        _GAMES[game_id] = session
        logger.info("created game %s with %d pairs", game_id, pairs)
        return jsonify(_session_to_json(game_id, session))


@app.post("/api/state")
def api_state() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    with _LOCK:
        game_id, session = _lookup(body)
        if session is None:
            return _error("unknown game", 404)
        return jsonify(_session_to_json(game_id, session))


@app.post("/api/choose")
def api_choose() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    card_id = body.get("cardId")
    if isinstance(card_id, bool) or not isinstance(card_id, int):
        return _error("cardId (integer) required")
    with _LOCK:
        game_id, session = _lookup(body)
        if session is None:
            return _error("unknown game", 404)
        session.state.choose(card_id)
        return jsonify(_session_to_json(game_id, session))


@app.post("/api/reset")
def api_reset() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    with _LOCK:
        game_id, session = _lookup(body)
        if session is None:
            return _error("unknown game", 404)
        try:
            pairs = _parse_pairs(body.get("pairs"), session.state.pair_count)
        except ValueError as e:
            return _error(str(e))
        session.state.reset(pairs)
        return jsonify(_session_to_json(game_id, session))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(SETTINGS)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
