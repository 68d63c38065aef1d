# acuatlas/server.py
"""
Server
======
FastAPI front for the atlas. One ViewController per process (local,
single-user tool); every endpoint mutates or reads that controller and the
inline page at `/` only renders the state it gets back.

Run:  uvicorn acuatlas.server:app --reload
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from acuatlas.catalog import CATALOG, MERIDIAN_CODES, MERIDIANS, find_point, meridian_info
from acuatlas.controller import ViewController
from acuatlas.gateway import generate_diagram, query_by_symptom

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.view = ViewController(
        CATALOG, query_fn=query_by_symptom, diagram_fn=generate_diagram
    )
    logger.info("catalog loaded: %d points, %d meridians", len(CATALOG), len(MERIDIANS))
    yield


app = FastAPI(title="Atlas MTC", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


class SearchReq(BaseModel):
    query: str = ""
    model_config = {"extra": "ignore"}


def _view(request: Request) -> ViewController:
    return request.app.state.view


def _detail(view: ViewController) -> dict:
    if view.selected is None:
        raise HTTPException(status_code=404, detail="no point selected")
    mer = meridian_info(view.selected.meridian)
    return {
        "point": view.selected.model_dump(),
        "meridian": mer.model_dump(mode="json") if mer else None,
        "diagram": {
            "loading": view.diagram.loading,
            "image": view.diagram.image,
            "error": view.diagram.error,
        },
    }


# ─── Catalog ─────────────────────────────────────────────────────────────────
@app.get("/meridians")
async def meridians():
    return {"meridians": [m.model_dump(mode="json") for m in MERIDIANS]}


@app.get("/points/{point_id}")
async def catalog_point(point_id: str):
    point = find_point(point_id)
    if point is None:
        raise HTTPException(status_code=404, detail=f"unknown point {point_id}")
    return point.model_dump()


# ─── View state ──────────────────────────────────────────────────────────────
@app.get("/state")
async def state(request: Request):
    return JSONResponse(content=_view(request).snapshot())


@app.post("/search")
async def search(req: SearchReq, request: Request):
    view = _view(request)
    await view.submit_query(req.query)
    return JSONResponse(content=view.snapshot())


@app.post("/filter/{code}")
async def toggle_filter(code: str, request: Request):
    code = code.upper()
    if code not in MERIDIAN_CODES:
        raise HTTPException(status_code=404, detail=f"unknown meridian {code}")
    view = _view(request)
    view.toggle_filter(code)
    return JSONResponse(content=view.snapshot())


@app.post("/show-all")
async def show_all(request: Request):
    view = _view(request)
    view.show_all()
    return JSONResponse(content=view.snapshot())


@app.post("/reset")
async def reset(request: Request):
    view = _view(request)
    view.reset()
    return JSONResponse(content=view.snapshot())


# ─── Detail view ─────────────────────────────────────────────────────────────
@app.post("/select/{index}")
async def select(index: int, request: Request, point_id: str | None = None):
    view = _view(request)
    try:
        view.select(index, point_id)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _detail(view)


@app.delete("/select")
async def dismiss(request: Request):
    view = _view(request)
    view.dismiss()
    return JSONResponse(content=view.snapshot())


@app.get("/detail")
async def detail(request: Request):
    return _detail(_view(request))


@app.post("/detail/diagram")
async def detail_diagram(request: Request):
    view = _view(request)
    if view.selected is None:
        raise HTTPException(status_code=404, detail="no point selected")
    await view.load_diagram()
    return _detail(view)


# ─── UI ──────────────────────────────────────────────────────────────────────
@app.get("/", response_class=HTMLResponse)
async def ui():
    return HTMLResponse(content=PAGE, headers={"Cache-Control": "no-store"})


PAGE = r"""<!DOCTYPE html>
<html lang="es">
<head>
  <meta charset="UTF-8"/>
  <meta name="viewport" content="width=device-width,initial-scale=1"/>
  <title>Atlas MTC - BBDD Profesional de Acupuntura</title>
  <style>
    :root{
      --bg:#0b1220;
      --panel: rgba(255,255,255,.07);
      --panel2: rgba(255,255,255,.04);
      --text:#e5e7eb;
      --muted:#a8b0bf;
      --border:rgba(255,255,255,.12);
      --accent:#34d399;
      --warn:#f59e0b;
      --bad:#fb7185;
      --shadow: 0 14px 40px rgba(0,0,0,.35);
      --r:18px;
      --mono: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", monospace;
      --sans: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
    }
    *{box-sizing:border-box}
    body{
      margin:0;font-family:var(--sans);color:var(--text);min-height:100vh;
      background:
        radial-gradient(900px 520px at 20% 10%, rgba(52,211,153,.20), transparent 62%),
        radial-gradient(1000px 700px at 50% 100%, rgba(96,165,250,.12), transparent 60%),
        var(--bg);
    }
    .wrap{max-width:1180px;margin:0 auto;padding:24px 16px 56px}
    .hero{
      border:1px solid var(--border);border-radius:var(--r);box-shadow:var(--shadow);
      background: linear-gradient(180deg, rgba(255,255,255,.08), rgba(255,255,255,.03));
      padding:22px 16px;text-align:center;margin-bottom:16px;
    }
    .hero h1{margin:0;font-size:26px}
    .hero p{margin:8px auto 14px;color:var(--muted);max-width:640px;font-size:13px}
    .chip{
      display:inline-block;font-size:11px;padding:5px 10px;border-radius:999px;border:1px solid var(--border);
      background: rgba(255,255,255,.05);margin-bottom:10px;letter-spacing:.08em;text-transform:uppercase
    }
    form{display:flex;gap:8px;max-width:640px;margin:0 auto}
    input[type=text]{
      flex:1;padding:12px 14px;border-radius:14px;border:1px solid var(--border);
      background: rgba(0,0,0,.24);color:var(--text);outline:none;font-size:15px
    }
    input[type=text]:focus{border-color:rgba(52,211,153,.55);box-shadow:0 0 0 4px rgba(52,211,153,.14)}
    .btn{
      appearance:none;border:none;padding:10px 14px;border-radius:12px;
      font-weight:900;font-size:14px;cursor:pointer
    }
    .primary{color:#06101f;background: linear-gradient(180deg,#6ee7b7,#34d399)}
    .ghost{color:var(--text);background:transparent;border:1px solid var(--border)}
    .btn:disabled{opacity:.55;cursor:not-allowed}
    .grid{display:grid;grid-template-columns: 260px 1fr; gap:16px; align-items:start}
    @media(max-width:880px){.grid{grid-template-columns:1fr}}
    .panel{
      border:1px solid var(--border);border-radius:var(--r);overflow:hidden;box-shadow:var(--shadow);
      background: linear-gradient(180deg, var(--panel), var(--panel2));
    }
    .hd{
      padding:12px 14px;border-bottom:1px solid var(--border);background: rgba(255,255,255,.04);
      display:flex;align-items:center;justify-content:space-between;font-weight:900;font-size:13px
    }
    .hd a{color:var(--accent);font-size:11px;cursor:pointer;text-transform:uppercase}
    .bd{padding:12px}
    .mer{
      width:100%;display:flex;align-items:center;gap:10px;padding:8px 10px;border-radius:10px;
      border:1px solid transparent;background:transparent;color:var(--text);cursor:pointer;font-size:13px;text-align:left
    }
    .mer:hover{background:rgba(255,255,255,.05)}
    .mer.on{border-color:rgba(52,211,153,.45);background:rgba(52,211,153,.08)}
    .dot{width:11px;height:11px;border-radius:999px;flex:none}
    .expl{
      border:1px solid rgba(52,211,153,.30);background:rgba(52,211,153,.08);border-radius:14px;
      padding:12px 14px;margin-bottom:14px;font-style:italic;line-height:1.4;font-size:14px
    }
    .expl b{font-style:normal;display:block;margin-bottom:4px;color:var(--accent)}
    .cards{display:grid;grid-template-columns:repeat(auto-fill,minmax(230px,1fr));gap:12px}
    .card{
      border:1px solid var(--border);border-radius:14px;background: rgba(255,255,255,.04);
      overflow:hidden;cursor:pointer;box-shadow: 0 10px 24px rgba(0,0,0,.18)
    }
    .card:hover{border-color:rgba(52,211,153,.45)}
    .bar{height:5px}
    .cb{padding:12px}
    .row{display:flex;justify-content:space-between;gap:8px;align-items:center}
    .code{font-family:var(--mono);font-size:11px;color:var(--muted)}
    .badge{font-size:10px;padding:2px 8px;border-radius:999px;border:1px solid var(--border)}
    .card h3{margin:6px 0 4px;font-size:16px}
    .card h3 small{color:var(--muted);font-weight:400}
    .loc{color:var(--muted);font-size:12px;line-height:1.35;margin:0 0 8px;
         display:-webkit-box;-webkit-line-clamp:2;-webkit-box-orient:vertical;overflow:hidden}
    .tags{display:flex;gap:6px;flex-wrap:wrap}
    .tag{font-size:10px;padding:3px 8px;border-radius:999px;background:rgba(52,211,153,.10);color:#a7f3d0}
    .more{font-size:10px;color:var(--muted)}
    .empty{text-align:center;padding:50px 10px;color:var(--muted);border:1px dashed var(--border);border-radius:var(--r)}
    .spin{
      width:16px;height:16px;border-radius:999px;display:inline-block;vertical-align:middle;
      border:2px solid rgba(255,255,255,.22);border-top-color: rgba(110,231,183,.95);
      animation: sp 0.85s linear infinite;
    }
    @keyframes sp{to{transform:rotate(360deg)}}

    /* Detail modal */
    .modal{position:fixed;inset:0;z-index:40;display:none;align-items:center;justify-content:center;
           padding:16px;background:rgba(2,6,23,.72);backdrop-filter:blur(6px)}
    .modal.show{display:flex}
    .sheet{width:100%;max-width:1040px;max-height:94vh;overflow:auto;border-radius:24px;
           border:1px solid var(--border);background:#0f172a;box-shadow:var(--shadow)}
    .mh{padding:18px 22px;display:flex;justify-content:space-between;align-items:center;color:#fff}
    .mh h2{margin:6px 0 0;font-size:26px}
    .mh h2 i{font-weight:300;font-size:18px;opacity:.9}
    .mb{padding:18px 22px;display:grid;grid-template-columns:1fr 1fr;gap:14px}
    @media(max-width:880px){.mb{grid-template-columns:1fr}}
    .sec{border:1px solid var(--border);border-radius:14px;padding:12px 14px;background:rgba(255,255,255,.03)}
    .sec h4{margin:0 0 8px;font-size:11px;letter-spacing:.16em;text-transform:uppercase;color:var(--accent)}
    .sec p{margin:0;line-height:1.45;font-size:14px}
    .sec ul{margin:0;padding-left:18px;font-size:14px;line-height:1.5}
    .sec.warn{border-color:rgba(245,158,11,.35);background:rgba(245,158,11,.07)}
    .sec.warn h4{color:var(--warn)}
    .img{grid-column:1/-1;text-align:center;min-height:200px;display:flex;align-items:center;justify-content:center}
    .img img{max-width:100%;max-height:460px;border-radius:12px;background:#fff}
    .mf{padding:14px 22px;border-top:1px solid var(--border);display:flex;justify-content:flex-end}
    footer{margin-top:28px;text-align:center;color:var(--muted);font-size:12px}
  </style>
</head>
<body>
<div class="wrap">
  <div class="hero">
    <span class="chip">Atlas MTC by Medicina IT</span>
    <h1>BBDD Profesional de Acupuntura</h1>
    <p>Acceso completo a todos los meridianos. Identificación de puntos por IA y atlas anatómico integrado.</p>
    <form onsubmit="go(event)">
      <input type="text" id="q" placeholder="Busca por síntoma (ej: tos) o punto (ej: LU7)..."/>
      <button class="btn primary" id="runBtn" type="submit">Buscar</button>
    </form>
  </div>

  <div class="grid">
    <div class="panel">
      <div class="hd">Meridianos <a onclick="act('/show-all')">Ver Todo</a></div>
      <div class="bd" id="mers"></div>
    </div>
    <div>
      <div id="expl"></div>
      <div id="out"></div>
    </div>
  </div>

  <footer>© Atlas MTC by Medicina IT. BBDD Completa de Acupuntura.</footer>
</div>

<div class="modal" id="modal">
  <div class="sheet">
    <div class="mh" id="mh"></div>
    <div class="mb" id="mb"></div>
    <div class="mf"><button class="btn primary" onclick="closeDetail()">Cerrar Expediente</button></div>
  </div>
</div>

<script>
const qEl = document.getElementById('q');
const runBtn = document.getElementById('runBtn');
const outEl = document.getElementById('out');
const explEl = document.getElementById('expl');
const mersEl = document.getElementById('mers');
const modalEl = document.getElementById('modal');

let MERIDIANS = [];
let STATE = null;
let OPEN = 0;

function esc(s){
  return (s||'').toString()
    .replaceAll('&','&amp;')
    .replaceAll('<','&lt;')
    .replaceAll('>','&gt;')
    .replaceAll('"','&quot;')
    .replaceAll("'","&#039;");
}
function color(code){
  const m = MERIDIANS.find(x=>x.code===code);
  return m ? m.color : '#64748b';
}

async function call(method, url, body){
  const r = await fetch(url, {
    method,
    headers: body ? {'Content-Type':'application/json'} : {},
    body: body ? JSON.stringify(body) : undefined,
  });
  if(!r.ok) throw new Error('HTTP '+r.status);
  return r.json();
}

function render(s){
  STATE = s;
  (s.notifications||[]).forEach(n=>alert(n));
  runBtn.disabled = !!s.loading;
  runBtn.innerHTML = s.loading ? '<span class="spin"></span>' : 'Buscar';

  mersEl.innerHTML = MERIDIANS.map(m=>`
    <button class="mer ${s.active_filter===m.code?'on':''}" onclick="act('/filter/${m.code}')">
      <span class="dot" style="background:${m.color}"></span>${esc(m.name)}
    </button>`).join('');

  explEl.innerHTML = s.explanation
    ? `<div class="expl"><b>Diagnóstico Sugerido</b>"${esc(s.explanation)}"</div>` : '';

  if(!s.points.length){
    outEl.innerHTML = `<div class="empty"><h3>Sin resultados específicos</h3>
      <button class="btn ghost" onclick="qEl.value='';act('/reset')">Mostrar base de datos</button></div>`;
    return;
  }
  outEl.innerHTML = '<div class="cards">' + s.points.map((p,i)=>{
    const extra = p.indications.length > 3
      ? `<span class="more">+${p.indications.length-3} más</span>` : '';
    return `<div class="card" onclick="openDetail(${i}, '${encodeURIComponent(p.id).replace(/'/g,'%27')}')">
      <div class="bar" style="background:${color(p.meridian)}"></div>
      <div class="cb">
        <div class="row">
          <span class="code">${esc(p.meridian)} ${esc(p.id)}</span>
          ${p.category ? `<span class="badge">${esc(p.category)}</span>` : ''}
        </div>
        <h3>${esc(p.name)} <small>(${esc(p.pinyin)})</small></h3>
        <p class="loc">${esc(p.location)}</p>
        <div class="tags">${p.indications.slice(0,3).map(x=>`<span class="tag">${esc(x)}</span>`).join('')}${extra}</div>
      </div>
    </div>`;
  }).join('') + '</div>';
}

async function act(url){
  try{ render(await call('POST', url)); }
  catch(e){ alert('Error: ' + (e?.message || e)); }
}

async function go(e){
  if(e) e.preventDefault();
  runBtn.disabled = true;
  runBtn.innerHTML = '<span class="spin"></span>';
  try{ render(await call('POST', '/search', {query: qEl.value})); }
  catch(err){ alert('Error: ' + (err?.message || err)); render(await call('GET', '/state')); }
}

function renderImage(d){
  if(d.loading) return '<div><span class="spin"></span><div class="code">Cargando Mapa...</div></div>';
  if(d.error) return '<div class="code">Error en Imagen</div>';
  if(d.image) return `<img src="${esc(d.image)}" alt="Mapa anatómico"/>`;
  return '';
}

function renderDetail(d){
  const p = d.point;
  const bg = d.meridian ? d.meridian.color : '#047857';
  document.getElementById('mh').style.background = bg;
  document.getElementById('mh').innerHTML = `
    <div>
      <span class="badge">${esc(p.id)}</span> <span class="code" style="color:#fff">${esc(p.meridian_name)}</span>
      <h2>${esc(p.name)} <i>${esc(p.pinyin)}</i></h2>
    </div>
    <button class="btn ghost" onclick="closeDetail()">✕</button>`;
  const list = xs => '<ul>' + xs.map(x=>`<li>${esc(x)}</li>`).join('') + '</ul>';
  document.getElementById('mb').innerHTML = `
    <div class="sec img" id="img">${renderImage(d.diagram)}</div>
    <div class="sec"><h4>1. Ubicación Anatómica</h4><p>"${esc(p.location)}"</p></div>
    <div class="sec"><h4>5. Acciones y Beneficios Energéticos</h4><p>${esc(p.benefits)}</p></div>
    <div class="sec"><h4>2. Indicaciones</h4>${list(p.indications)}</div>
    <div class="sec"><h4>4. Aplicaciones</h4><p>${esc(p.applications)}</p></div>
    <div class="sec warn"><h4>3. Contraindicaciones</h4>${list(p.contraindications)}</div>
    <div class="sec"><h4>6. Técnicas</h4><p>${esc(p.techniques)}</p></div>
    <div class="sec" style="grid-column:1/-1"><h4>7. Observaciones</h4><p>${esc(p.observations)}</p></div>`;
}

async function openDetail(i, id){
  const token = ++OPEN;
  let d;
  try{ d = await call('POST', '/select/' + i + '?point_id=' + id); }
  catch(e){ render(await call('GET', '/state')); return; }
  d.diagram = {loading:true, image:null, error:false};
  renderDetail(d);
  modalEl.classList.add('show');
  try{ d = await call('POST', '/detail/diagram'); }
  catch(e){ d.diagram = {loading:false, image:null, error:true}; }
  if(token !== OPEN) return;
  document.getElementById('img').innerHTML = renderImage(d.diagram);
}

async function closeDetail(){
  OPEN++;
  modalEl.classList.remove('show');
  render(await call('DELETE', '/select'));
}

(async ()=>{
  MERIDIANS = (await call('GET', '/meridians')).meridians;
  render(await call('GET', '/state'));
})();
</script>
</body>
</html>"""
