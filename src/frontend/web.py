from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from fastmatch import FastMatcher
from fastmatch import config as CFG
from fastmatch.loader import build_matcher, entry_to_json, load_shards, read_wordlist

app = Flask(__name__)
_matcher: FastMatcher | None = None

log = logging.getLogger(__name__)

# ---------- API ----------
@app.get("/api/matches")
def api_matches():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", None, type=int)
    # an empty search box clears the list rather than listing everything
    if not q:
        return jsonify([])
    if _matcher is None:
        return jsonify({"error": "no dictionary loaded"}), 503
    rows = _matcher.get_matches(q)
    if k is not None and k > 0:
        rows = rows[:k]
    return jsonify([entry_to_json(r) for r in rows])

@app.get("/api/health")
def api_health():
    return jsonify({"ok": _matcher is not None, "records": len(_matcher) if _matcher else 0})

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Fast Match • Dictionary</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --border:#1c2530;
  --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:860px; margin:24px auto; padding:0 16px }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0 }
.input input{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
.input input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.entry{ padding:12px 14px; border-top:1px solid var(--border) }
.entry:first-child{ border-top:none }
.term{ font-weight:600 }
.mark{ background:var(--mark-bg) }
.pos{ color:var(--muted); font-style:italic; margin-right:6px }
.empty{ padding:24px; text-align:center; color:var(--muted) }
ol{ margin:6px 0 0 0; padding-left:20px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Fast Match dictionary</h1>
      <div class="input">
        <input id="q" type="text" placeholder="Start typing a word…" autocomplete="off" autofocus />
      </div>
      <div class="meta" id="stats">Loading…</div>
      <div id="out" class="empty">Start typing to see matching words.</div>
    </div>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats");
let t, words = 0;

function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function highlight(term, query){
  const n = query.length;
  if(term.slice(0, n).toLowerCase() !== query.toLowerCase()) return esc(term);
  return `<span class="mark">${esc(term.slice(0, n))}</span>${esc(term.slice(n))}`;
}

async function search(){
  const query = q.value;
  if(!query){
    out.className = "empty";
    out.innerHTML = "Start typing to see matching words.";
    stats.textContent = `${words.toLocaleString()} words loaded.`;
    return;
  }
  const resp = await fetch(`/api/matches?q=${encodeURIComponent(query)}`);
  const data = resp.ok ? await resp.json() : [];
  stats.textContent = `${data.length} match(es) of ${words.toLocaleString()} words.`;
  if(data.length === 0){
    out.className = "empty";
    out.innerHTML = "No matches.";
    return;
  }
  out.className = "";
  out.innerHTML = data.map(e => `
    <div class="entry">
      <div class="term">${highlight(e.term, query)}</div>
      <ol>${e.definitions.map(d => `<li><span class="pos">${esc(d.pos)}</span>${esc(d.def)}</li>`).join("")}</ol>
    </div>`).join("");
}

q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, __DEBOUNCE__); });
fetch("/api/health").then(r => r.json()).then(h => { words = h.records; search(); });
</script>
</body>
</html>
""".replace("__DEBOUNCE__", str(CFG.DEBOUNCE_MS))
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask dictionary demo on top of FastMatcher")
    ap.add_argument("--data", default=str(CFG.DEFAULT_DATA_DIR), help="Folder of <chapter>.json shards")
    ap.add_argument("--wordlist", default=None, help="Tab-separated word list to use instead of shards")
    ap.add_argument("--any-word", action="store_true")
    ap.add_argument("--host", default=CFG.HOST)
    ap.add_argument("--port", type=int, default=CFG.PORT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    entries = read_wordlist(args.wordlist) if args.wordlist else load_shards(args.data)

    global _matcher
    _matcher = build_matcher(entries, any_word=args.any_word)
    log.info("Serving %d entries on %s:%d", len(_matcher), args.host, args.port)

    app.run(host=args.host, port=args.port, debug=args.verbose)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
