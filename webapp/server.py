"""FastAPI 后端 — ReadDepth 深度叠加查看器。"""
import os

from fastapi import FastAPI, Request, Response
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from webapp.depth_handler import DepthHandler

app = FastAPI(title="ReadDepth Viewer")

handler = DepthHandler()

# ---------- Static files ----------

_STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@app.get("/")
def index():
    return FileResponse(os.path.join(_STATIC_DIR, "index.html"))


# ---------- API ----------

@app.get("/api/status")
def api_status():
    return handler.get_status()


def _result(result: dict):
    if result["success"]:
        return result
    return JSONResponse(result, status_code=400)


@app.post("/api/color")
async def api_color(request: Request):
    return _result(handler.load_color(await request.body()))


@app.post("/api/depth")
async def api_depth(request: Request):
    return _result(handler.load_depth(await request.body()))


class ConfigBody(BaseModel):
    alpha: float | None = None
    unit: str | None = None
    rotation: int | None = None


@app.post("/api/config")
def api_config(body: ConfigBody):
    if body.alpha is not None:
        handler.set_alpha(body.alpha)
    if body.unit is not None:
        result = handler.set_unit(body.unit)
        if not result["success"]:
            return _result(result)
    if body.rotation is not None:
        result = handler.set_rotation(body.rotation)
        if not result["success"]:
            return _result(result)
    return {"success": True}


class ProbeBody(BaseModel):
    x: float
    y: float
    view_w: float
    view_h: float


@app.post("/api/probe")
def api_probe(body: ProbeBody):
    return handler.probe(body.x, body.y, body.view_w, body.view_h)


# ---------- Images ----------

@app.get("/overlay.png")
def overlay_png():
    data = handler.get_overlay_png()
    if data is None:
        return JSONResponse({"error": "no depth map"}, status_code=404)
    return Response(content=data, media_type="image/png")


@app.get("/snapshot")
def snapshot():
    data = handler.get_composite_jpeg(quality=90)
    if data is None:
        return JSONResponse({"error": "no color image"}, status_code=503)
    return Response(content=data, media_type="image/jpeg")
