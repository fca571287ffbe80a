from __future__ import annotations

import os
import sys
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        BOARD_LAYOUT,
        MatchEngine,
        MatchState,
        SqliteTallyStore,
        WinTally,
        AwaitingRoll,
        GameOver,
        check_roll,
        move_target,
        must_pass,
    )
except ImportError:
    from game import (  # type: ignore
        BOARD_LAYOUT,
        MatchEngine,
        MatchState,
        SqliteTallyStore,
        WinTally,
        AwaitingRoll,
        GameOver,
        check_roll,
        move_target,
        must_pass,
    )

DEFAULT_DB = os.getenv("UR_DB", "data/ur_wins.db")

app = Flask(__name__)

# One live match, driven by whoever talks to this process
ENGINE: Optional[MatchEngine] = None


def get_engine() -> MatchEngine:
    global ENGINE
    if ENGINE is None:
        ENGINE = MatchEngine(store=SqliteTallyStore(DEFAULT_DB))
    return ENGINE


# ---------- JSON codecs ----------

def phase_name(s: MatchState) -> str:
    ph = s.phase
    if isinstance(ph, GameOver):
        return "gameOver"
    if isinstance(ph, AwaitingRoll):
        return "awaitingRoll"
    return "awaitingMove"


def state_to_json(s: MatchState) -> Dict[str, Any]:
    return {
        "pieces": [
            {
                "id": p.id,
                "owner": p.owner,
                "position": int(p.position),
                "isFinished": p.is_finished,
                "location": p.location(),
            }
            for p in s.pieces
        ],
        "currentPlayer": s.current_player,
        "dice": [int(d) for d in s.dice],
        "lastRoll": int(s.last_roll),
        "waitingForRoll": bool(s.waiting_for_roll),
        "possibleMoves": list(s.possible_moves),
        "targets": {str(i): move_target(s, i) for i in s.possible_moves},
        "winner": s.winner,
        "phase": phase_name(s),
        "finished": {"light": s.finished_count("light"), "dark": s.finished_count("dark")},
    }


def wins_to_json(w: WinTally) -> Dict[str, int]:
    return {"lightWins": int(w.light_wins), "darkWins": int(w.dark_wins)}


def layout_to_json() -> list:
    return [
        [{"id": cell.id, "rosette": cell.rosette, "empty": cell.empty} for cell in row]
        for row in BOARD_LAYOUT
    ]


def _snapshot(engine: MatchEngine, **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "ok": True,
        "state": state_to_json(engine.state),
        "wins": wins_to_json(engine.wins),
        "mustPass": must_pass(engine.state),
    }
    out.update(extra)
    return out


# ---------- Match API ----------

@app.get("/api/state")
def api_state() -> Any:
    return jsonify(_snapshot(get_engine(), layout=layout_to_json()))


@app.get("/api/layout")
def api_layout() -> Any:
    return jsonify({"ok": True, "layout": layout_to_json()})


@app.get("/api/wins")
def api_wins() -> Any:
    return jsonify({"ok": True, "wins": wins_to_json(get_engine().wins)})


@app.post("/api/roll")
def api_roll() -> Any:
    engine = get_engine()
    reason = check_roll(engine.state)
    total = engine.roll_dice()
    if reason is not None:
        body = _snapshot(engine, roll=total)
        body.update({"ok": False, "error": reason.value})
        return jsonify(body), 400
    return jsonify(_snapshot(engine, roll=total))


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    raw = body.get("piece")
    if isinstance(raw, bool) or not isinstance(raw, int):
        return jsonify({"ok": False, "error": "piece index required"}), 400
    engine = get_engine()
    result = engine.move_piece(raw)
    if not result.ok:
        return jsonify({
            "ok": False,
            "error": result.reason.value if result.reason else "rejected",
            "legalMoves": list(engine.state.possible_moves),
        }), 400
    return jsonify(_snapshot(
        engine,
        captured=result.captured,
        bonusTurn=result.bonus_turn,
        finished=result.finished,
        winner=result.winner,
    ))


@app.post("/api/switch")
def api_switch() -> Any:
    engine = get_engine()
    engine.switch_turn()
    return jsonify(_snapshot(engine))


@app.post("/api/reset")
def api_reset() -> Any:
    engine = get_engine()
    engine.reset_game()
    return jsonify(_snapshot(engine))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
