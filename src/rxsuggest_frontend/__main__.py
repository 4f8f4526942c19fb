from __future__ import annotations
import argparse, asyncio, json

from rxsuggest import config as CFG
from rxsuggest.models import SuggestionResult
from rxsuggest.engine import Engine
from . import initialize, shutdown

def _print_result(r: SuggestionResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(r.to_dict(), ensure_ascii=False))
        return
    state = "loading" if r.loading else "done"
    print(f"[{state}] {r.query.raw!r}")
    if not r.suggestions:
        print("   (no matches)")
        return
    for i, c in enumerate(r.suggestions, 1):
        print(f"   {i:<2} {c.source.value:<6} {c.name}")

async def _type_out(eng: Engine, text: str, debounce_ms: int, keystroke_ms: int, as_json: bool) -> None:
    """Feed `text` one keystroke at a time through a debounced session."""
    session = eng.session(lambda r: _print_result(r, as_json), debounce_ms=debounce_ms)
    try:
        for i in range(1, len(text) + 1):
            session.update(text[:i])
            await asyncio.sleep(keystroke_ms / 1000.0)
        await session.wait_idle()
    finally:
        await session.aclose()

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Drug-name autocomplete CLI (Engine-backed)")
    p.add_argument("--dict", dest="paths", nargs="+", default=[], help="Dictionary .txt/.json files or folders (default: bundled list)")
    p.add_argument("--offline", action="store_true", help="Disable the openFDA lookup")
    p.add_argument("--cache-max", type=int, default=None, help="Bound the suggestion cache (0 = unbounded)")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--type", dest="typed", default=None, help="Simulate typing QUERY keystroke by keystroke")
    p.add_argument("--debounce-ms", type=int, default=CFG.DEBOUNCE_MS)
    p.add_argument("--keystroke-ms", type=int, default=80, help="Delay between simulated keystrokes")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if not (args.q or args.typed or args.repl):
        p.error("one of --q, --type or --repl is required")
    if args.debounce_ms < 0:
        p.error("--debounce-ms must be >= 0")

    eng = initialize(args.paths, offline=args.offline, cache_max=args.cache_max, verbose=args.verbose or None)
    try:
        def run_query(q: str):
            _print_result(asyncio.run(eng.suggest(q)), args.json)

        if args.q:
            run_query(args.q)

        if args.typed:
            asyncio.run(_type_out(eng, args.typed, args.debounce_ms, args.keystroke_ms, args.json))

        if args.repl:
            print("Type a drug name prefix (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
