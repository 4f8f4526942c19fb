from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from rxsuggest import config as CFG
from . import get_engine, initialize, shutdown, suggest

app = Flask(__name__)

# ---------- API ----------
@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    remote = request.args.get("remote", 1, type=int)
    if remote:
        result = suggest(q)
    else:
        result = get_engine().local(q)
    return jsonify(result.to_dict())

@app.get("/health")
def health():
    eng = get_engine()
    return jsonify({"ok": True, "dictionary_size": len(eng.dictionary or ())})

# ---------- UI ----------
@app.get("/")
def home():
    # One input box: instant local pass on every keystroke, merged pass after a pause.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Drug name autocomplete</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --border:#1c2530; --danger:#ff5d5d;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:640px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 12px 0 }
input{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.row{ display:flex; justify-content:space-between; padding:10px 14px; border-top:1px solid var(--border); cursor:pointer }
.row:hover{ background:#0d131a }
.src{ color:var(--muted); font-size:12px }
.err{ color:var(--danger); margin-top:10px; display:none }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Drug name autocomplete</h1>
      <input id="q" type="text" placeholder="Start typing a drug name…" autocomplete="off" autofocus />
      <div id="stats" class="meta">Ready.</div>
      <div id="err" class="err"></div>
      <div id="out"></div>
    </div>
  </div>
<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats"), err = $("#err");
const DEBOUNCE_MS = __DEBOUNCE_MS__;
let t;        // debounce timer
let seq = 0;  // latest keystroke; older responses are dropped
let merged = 0; // seq whose merged result is already shown

function render(data){
  stats.textContent = data.loading ? "Searching…" : `Results: ${data.suggestions.length}`;
  // names come from openFDA and user files: text nodes only, never markup
  out.replaceChildren(...data.suggestions.map(s => {
    const row = document.createElement("div");
    row.className = "row";
    row.dataset.name = s.name;
    const name = document.createElement("span");
    name.textContent = s.name;
    const src = document.createElement("span");
    src.className = "src";
    src.textContent = s.source;
    row.append(name, src);
    return row;
  }));
}

async function fetchSuggest(query, remote, mySeq){
  const resp = await fetch(`/api/suggest?q=${encodeURIComponent(query)}&remote=${remote}`);
  if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
  const data = await resp.json();
  if(mySeq !== seq || (!remote && merged === mySeq)) return;
  if(remote) merged = mySeq;
  render(data);
}

function onInput(){
  const query = q.value;
  const mySeq = ++seq;
  clearTimeout(t);
  err.style.display = "none";
  fetchSuggest(query, 0, mySeq).catch(showError);
  if(query.trim().length < 2) return;
  t = setTimeout(() => fetchSuggest(query, 1, mySeq).catch(showError), DEBOUNCE_MS);
}

function showError(e){
  err.style.display = "block";
  err.textContent = `Error: ${e.message ?? e}`;
}

q.addEventListener("input", onInput);
out.addEventListener("click", (ev) => {
  const row = ev.target.closest(".row");
  if(!row) return;
  q.value = "";
  seq++;
  clearTimeout(t);
  out.replaceChildren();
  stats.textContent = `Selected: ${row.dataset.name}`;
});
</script>
</body>
</html>
""".replace("__DEBOUNCE_MS__", str(CFG.DEBOUNCE_MS))
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--dict", dest="paths", nargs="+", default=[])
    ap.add_argument("--offline", action="store_true")
    ap.add_argument("--cache-max", type=int, default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    initialize(args.paths, offline=args.offline, cache_max=args.cache_max, verbose=args.verbose or None)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
