from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from rtrie.engine import Engine
from rtrie.config import TOP_K
from rtrie.errors import InvalidArgument, StoreError

app = Flask(__name__)
_engine: Engine | None = None

# ---------- errors ----------
@app.errorhandler(InvalidArgument)
def invalid_argument(exc: InvalidArgument):
    return jsonify({"ok": False, "error": str(exc)}), 400

@app.errorhandler(StoreError)
def store_error(exc: StoreError):
    return jsonify({"ok": False, "error": str(exc)}), 502

# ---------- API ----------
@app.get("/api/complete")
def api_complete():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", TOP_K, type=int)
    if not q:
        return jsonify([])
    rows = _engine.complete(q, top_k=k)  # type: ignore
    return jsonify(rows)

def _params() -> dict:
    # JSON body first, query string as fallback (DELETE bodies are often dropped)
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    for name in ("key", "id", "priority"):
        if name not in data and name in request.args:
            data[name] = request.args.get(name)
    return data

@app.post("/api/items")
def api_add():
    data = _params()
    try:
        priority = float(data.get("priority") or 0)
    except (TypeError, ValueError):
        raise InvalidArgument(f"`priority` must be a number, got {data.get('priority')!r}")
    parts = _engine.add(data.get("key"), data.get("value"), data.get("id"), priority)  # type: ignore
    return jsonify({"ok": True, "prefixes": len(parts)}), 201

@app.delete("/api/items")
def api_delete():
    data = _params()
    _engine.delete(data.get("key"), data.get("id"))  # type: ignore
    return jsonify({"ok": True})

@app.get("/health")
def health():
    return jsonify({"ok": _engine is not None and _engine.index is not None})

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>rtrie • prefix autocomplete</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --border:#1c2530;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:860px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 8px 0 }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0 4px 0 }
.controls input{
  padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
#q{ flex:1 }
#k{ width:72px; text-align:center }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.row{ padding:10px 14px; border-top:1px solid var(--border) }
.row:first-child{ border-top:none }
.mono{ font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; white-space:pre-wrap }
.empty{ padding:24px; text-align:center; color:var(--muted) }
.results{ margin-top:16px; border-radius:12px; border:1px solid var(--border) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Prefix autocomplete</h1>
      <div class="controls">
        <input id="q" type="text" placeholder="Type a prefix…" autocomplete="off" autofocus />
        <input id="k" type="number" min="1" max="100" value="10" class="mono" />
      </div>
      <div id="stats" class="meta">Ready.</div>
      <div id="out" class="results empty">Start typing to see results.</div>
    </div>
  </div>
<script>
const q = document.querySelector("#q"), k = document.querySelector("#k");
const out = document.querySelector("#out"), stats = document.querySelector("#stats");
let t;
function esc(s){ return s.replace(/[&<>]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;"}[c])); }
async function search(){
  const query = q.value.trim();
  if(!query){ out.className="results empty"; out.innerHTML="Start typing to see results."; stats.textContent="Ready."; return; }
  try{
    const resp = await fetch(`/api/complete?q=${encodeURIComponent(query)}&k=${parseInt(k.value||"10",10)}`);
    if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
    const data = await resp.json();
    stats.textContent = `Results: ${data.length}`;
    if(!data.length){ out.className="results empty"; out.innerHTML="No matches."; return; }
    out.className = "results";
    out.innerHTML = data.map(r => `<div class="row mono">${esc(JSON.stringify(r, null, 1))}</div>`).join("");
  }catch(e){
    stats.textContent = `Error: ${e.message ?? e}`;
  }
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 150); });
k.addEventListener("change", search);
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--db", dest="db", default=None)  # DSN: "redis://host:port/db" or "memory://"
    ap.add_argument("--trie-key", default=None)
    ap.add_argument("--metadata-key", default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.build:
        if not args.roots:
            ap.error("--build requires --roots")
        _engine.build(
            roots=args.roots, db_dsn=args.db,
            trie_key=args.trie_key, metadata_key=args.metadata_key,
            verbose=args.verbose,
        )
    else:
        _engine.load(args.db, trie_key=args.trie_key, metadata_key=args.metadata_key,
                     verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose, use_reloader=False)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
